"""Turns records and errors into the strings the window shows."""
from typing import Optional
from pokeviewer.models import PokemonRecord

FALLBACK_ERROR = "Failed to load Pokemon data"


def display_name(name: str) -> str:
    # Only the first character changes: "mr-mime" -> "Mr-mime"
    return name[:1].upper() + name[1:]


def format_height(height_decimeters: int) -> str:
    return f"Height: {height_decimeters / 10.0} m"


def format_weight(weight_hectograms: int) -> str:
    return f"Weight: {weight_hectograms / 10.0} kg"


def describe_error(error: Optional[BaseException]) -> str:
    """Collapses any fetch error to the one line shown to the user."""
    if error is None:
        return FALLBACK_ERROR
    message = getattr(error, "detail", None) or str(error)
    return message or FALLBACK_ERROR


def record_lines(record: PokemonRecord) -> list[str]:
    return [
        display_name(record.name),
        format_height(record.height_decimeters),
        format_weight(record.weight_hectograms),
    ]
