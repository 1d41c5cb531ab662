"""Generation lookup table.

Maps each generation to the inclusive range of national dex numbers it
introduced. Used to stamp a generation on cached records and as a fallback
filter when the generation column yields nothing.
"""

GENERATION_RANGES: dict[int, tuple[int, int]] = {
    1: (1, 151),      # Kanto
    2: (152, 251),    # Johto
    3: (252, 386),    # Hoenn
    4: (387, 493),    # Sinnoh
    5: (494, 649),    # Unova
    6: (650, 721),    # Kalos
    7: (722, 809),    # Alola
    8: (810, 905),    # Galar
    9: (906, 1025),   # Paldea
}

GEN_NAMES: dict[int, str] = {
    1: "Kanto",
    2: "Johto",
    3: "Hoenn",
    4: "Sinnoh",
    5: "Unova",
    6: "Kalos",
    7: "Alola",
    8: "Galar",
    9: "Paldea",
}

MAX_GENERATION: int = max(GENERATION_RANGES)
PALDEA_FIRST_ID: int = GENERATION_RANGES[9][0]


def get_generation_from_id(pokemon_id: int) -> int:
    """Get the generation a national dex number belongs to.

    Anything past the last known breakpoint (including PokeAPI's 10000+
    form ids) counts as the latest generation.
    """
    for gen, (_, last) in GENERATION_RANGES.items():
        if pokemon_id <= last:
            return gen
    return MAX_GENERATION


def get_generation_range(generation: int) -> tuple[int, int] | None:
    """Get the inclusive id range for a generation, if it exists."""
    return GENERATION_RANGES.get(generation)


def is_valid_generation(generation: int | None) -> bool:
    return generation is not None and generation > 0
