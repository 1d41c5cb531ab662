"""PokeVault - a searchable Pokedex backed by a PokeAPI cache."""

__version__ = "1.0.0"
