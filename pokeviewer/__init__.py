"""Desktop viewer for a single PokeAPI record."""

__version__ = "1.0.0"
