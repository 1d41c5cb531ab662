"""Formatting utilities for display."""

from html import escape

from pokevault.core.constants import MAX_BASE_STAT
from pokevault.core.generations import GEN_NAMES
from pokevault.database.models import Pokemon, PokemonSpecies

STAT_LABELS = {
    "hp": "HP",
    "attack": "Atk",
    "defense": "Def",
    "special-attack": "SpA",
    "special-defense": "SpD",
    "speed": "Spe",
}


def format_pokemon_id(pokemon_id: int) -> str:
    """Zero-pad a dex number to three digits (25 -> ``#025``)."""
    return f"#{pokemon_id:03d}"


def format_pokemon_name(name: str) -> str:
    """Capitalize a PokeAPI slug (``mr-mime`` -> ``Mr Mime``)."""
    return " ".join(part.capitalize() for part in name.split("-") if part)


def calculate_stat_percentage(stat: int) -> float:
    """A base stat as a percentage of the highest possible base stat."""
    return min(stat / MAX_BASE_STAT * 100, 100.0)


def format_stat_bar(stat: int, width: int = 10) -> str:
    """Format a base stat as a visual bar.

    Args:
        stat: The base stat value
        width: Bar width in characters

    Returns:
        A string representing the stat as a progress bar
    """
    filled = round(calculate_stat_percentage(stat) / 100 * width)
    return "█" * filled + "░" * (width - filled)


def format_types(types: list[str]) -> str:
    return " / ".join(t.capitalize() for t in types) or "???"


def format_pokemon_line(pokemon: Pokemon, is_favorite: bool = False) -> str:
    """One-line summary used in lists."""
    fav = " ★" if is_favorite else ""
    return (
        f"<code>{format_pokemon_id(pokemon.pokemon_id)}</code> "
        f"<b>{escape(format_pokemon_name(pokemon.name))}</b>{fav} "
        f"<i>{format_types(pokemon.types)}</i>"
    )


def format_pokemon_card(
    pokemon: Pokemon,
    species: PokemonSpecies | None = None,
    is_favorite: bool = False,
) -> str:
    """Full detail card for a single Pokemon."""
    fav = " ★" if is_favorite else ""
    lines = [
        f"<b>{format_pokemon_id(pokemon.pokemon_id)} {escape(format_pokemon_name(pokemon.name))}</b>{fav}",
    ]
    if species and species.genus:
        lines.append(f"<i>{escape(species.genus)}</i>")

    region = GEN_NAMES.get(pokemon.generation, "Unknown")
    lines += [
        "",
        f"<b>Type:</b> {format_types(pokemon.types)}",
        f"<b>Generation:</b> {pokemon.generation} ({region})",
        f"<b>Height:</b> {pokemon.height / 10:.1f} m  <b>Weight:</b> {pokemon.weight / 10:.1f} kg",
    ]

    abilities = [
        format_pokemon_name(a["name"]) + (" (hidden)" if a.get("is_hidden") else "")
        for a in pokemon.abilities or []
        if a.get("name")
    ]
    if abilities:
        lines.append(f"<b>Abilities:</b> {escape(', '.join(abilities))}")

    if pokemon.stats:
        lines += ["", "<b>Base Stats</b>"]
        for stat in pokemon.stats:
            label = STAT_LABELS.get(stat["name"], stat["name"])
            lines.append(f"<code>{label:>3} {stat['base_stat']:>3} {format_stat_bar(stat['base_stat'])}</code>")
        lines.append(f"<code>Tot {pokemon.base_stat_total:>3}</code>")

    if species:
        extra = []
        if species.capture_rate is not None:
            extra.append(f"Catch rate {species.capture_rate}")
        if species.growth_rate:
            extra.append(f"Growth {format_pokemon_name(species.growth_rate)}")
        if species.habitat:
            extra.append(f"Habitat {format_pokemon_name(species.habitat)}")
        if extra:
            lines += ["", escape(" | ".join(extra))]
        if species.flavor_text:
            lines += ["", f"<i>{escape(species.flavor_text)}</i>"]

    return "\n".join(lines)
