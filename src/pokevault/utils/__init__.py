"""Utility functions package."""

from pokevault.utils.debounce import Debouncer
from pokevault.utils.formatting import (
    calculate_stat_percentage,
    format_pokemon_card,
    format_pokemon_id,
    format_pokemon_line,
    format_pokemon_name,
)
from pokevault.utils.pagination import OffsetPage, paginate_offset

__all__ = [
    "Debouncer",
    "OffsetPage",
    "paginate_offset",
    "format_pokemon_id",
    "format_pokemon_name",
    "format_pokemon_line",
    "format_pokemon_card",
    "calculate_stat_percentage",
]
