"""Centralized constants for PokeVault.

Shared lookup tables live here. Import from this module instead of
hardcoding values in handlers.
"""

# ------------------------------------------------------------------ #
# Catalog
# ------------------------------------------------------------------ #
MAX_MOVES_CACHED: int = 20
MAX_BASE_STAT: int = 255
DEFAULT_REFRESH_LIMIT: int = 151
PREFERRED_LANGUAGE: str = "en"

# ------------------------------------------------------------------ #
# Types (18 canonical Pokemon types) and their display colors
# ------------------------------------------------------------------ #
TYPE_COLORS: dict[str, str] = {
    "normal": "#A8A878",
    "fire": "#F08030",
    "water": "#6890F0",
    "electric": "#F8D030",
    "grass": "#78C850",
    "ice": "#98D8D8",
    "fighting": "#C03028",
    "poison": "#A040A0",
    "ground": "#E0C068",
    "flying": "#A890F0",
    "psychic": "#F85888",
    "bug": "#A8B820",
    "rock": "#B8A038",
    "ghost": "#705898",
    "dragon": "#7038F8",
    "dark": "#705848",
    "steel": "#B8B8D0",
    "fairy": "#EE99AC",
}
FALLBACK_TYPE_COLOR: str = "#68A090"
