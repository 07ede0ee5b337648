from pokeviewer.clients import PokeAPIClient
from pokeviewer.clients import SpriteClient
from pokeviewer.config import Settings

_settings = None
_poke_client = None
_sprite_client = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings

def get_poke_client() -> PokeAPIClient:
    global _poke_client
    if _poke_client is None:
        settings = get_settings()
        _poke_client = PokeAPIClient(base_url=settings.base_url, timeout=settings.http_timeout)
    return _poke_client

def get_sprite_client() -> SpriteClient:
    global _sprite_client
    if _sprite_client is None:
        _sprite_client = SpriteClient(timeout=get_settings().http_timeout)
    return _sprite_client

def reset():
    """Forget the cached singletons (tests, or after the clients were closed)."""
    global _settings, _poke_client, _sprite_client
    _settings = None
    _poke_client = None
    _sprite_client = None
