import os
from typing import Optional
from pydantic import BaseModel, field_validator

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


class Settings(BaseModel):
    species: str = "mewtwo"
    base_url: str = DEFAULT_BASE_URL
    # None means no timeout, the request waits as long as the platform lets it
    http_timeout: Optional[float] = None
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls) -> "Settings":
        # Only logging is tunable from outside; what the app fetches is fixed
        log_level = os.getenv("POKEVIEWER_LOG_LEVEL")
        if log_level:
            return cls(log_level=log_level)
        return cls()
