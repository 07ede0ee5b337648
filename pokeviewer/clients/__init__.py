"""Client modules for external API communication."""
from .pokeapi_client import (
    PokeAPIClient,
    FetchError,
    NetworkError,
    HttpError,
    DecodeError,
)
from .sprite_client import SpriteClient

__all__ = [
    'PokeAPIClient',
    'SpriteClient',
    'FetchError',
    'NetworkError',
    'HttpError',
    'DecodeError',
]
