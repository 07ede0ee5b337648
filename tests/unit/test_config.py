import pytest
from pokeviewer import dependencies
from pokeviewer.config import DEFAULT_BASE_URL, Settings

ENV_VARS = ["POKEVIEWER_LOG_LEVEL", "POKEVIEWER_SPECIES", "POKEAPI_BASE_URL", "POKEVIEWER_HTTP_TIMEOUT"]

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    dependencies.reset()
    yield
    dependencies.reset()

def test_defaults_without_environment():
    settings = Settings.from_env()

    assert settings.species == "mewtwo"
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.http_timeout is None
    assert settings.log_level == "INFO"

def test_log_level_comes_from_environment(monkeypatch):
    monkeypatch.setenv("POKEVIEWER_LOG_LEVEL", "debug")

    assert Settings.from_env().log_level == "DEBUG"

def test_empty_log_level_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("POKEVIEWER_LOG_LEVEL", "")

    assert Settings.from_env().log_level == "INFO"

def test_fetch_target_is_not_read_from_environment(monkeypatch):
    monkeypatch.setenv("POKEVIEWER_SPECIES", "pikachu")
    monkeypatch.setenv("POKEAPI_BASE_URL", "http://localhost:8000/api/v2")
    monkeypatch.setenv("POKEVIEWER_HTTP_TIMEOUT", "2.5")

    settings = Settings.from_env()

    assert settings.species == "mewtwo"
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.http_timeout is None

def test_clients_are_built_once_from_settings():
    poke_client = dependencies.get_poke_client()

    assert dependencies.get_poke_client() is poke_client
    assert dependencies.get_sprite_client() is dependencies.get_sprite_client()
    assert str(poke_client.client.base_url) == "https://pokeapi.co/api/v2/"
    assert poke_client.client.timeout.read is None
