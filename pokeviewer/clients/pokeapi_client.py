import httpx
import logging
from typing import Optional
from pydantic import ValidationError
from pokeviewer.models import PokemonPayload, PokemonRecord

logger = logging.getLogger(__name__)

# Error taxonomy shared by every client. The UI collapses these to one string,
# callers below the presentation layer can still tell them apart.
class FetchError(Exception):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class NetworkError(FetchError):
    """Connection, DNS or read failure before a response arrived."""

class HttpError(FetchError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code

class DecodeError(FetchError):
    """The body could not be turned into the expected type."""


class PokeAPIClient:
    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        # timeout=None leaves the wait unbounded
        self.client = httpx.AsyncClient(base_url=base_url or self.BASE_URL, timeout=timeout)

    async def _fetch_pokemon_body(self, species_name: str) -> bytes:
        """Internal method to fetch the raw /pokemon body with error mapping."""
        url = f"/pokemon/{species_name}"
        logger.info(f"Fetching Pokemon: {species_name}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            return response.content

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"PokeAPI returned {status_code} for {species_name}")
            if status_code == 404:
                raise HttpError(status_code, f"Pokemon '{species_name}' not found.")
            raise HttpError(status_code, f"PokeAPI failed with status {status_code}")
        except httpx.RequestError as e:
            logger.error(f"PokeAPI network error: {str(e)}")
            raise NetworkError(f"PokeAPI network error: {str(e)}")

    async def fetch(self, species_name: str) -> PokemonRecord:
        """Fetches and decodes a single Pokemon. Fields outside the schema are ignored."""
        body = await self._fetch_pokemon_body(species_name)

        try:
            payload = PokemonPayload.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"PokeAPI response for {species_name} did not match the schema")
            raise DecodeError(f"PokeAPI returned an unexpected response format: {e.error_count()} error(s)")

        return PokemonRecord(
            name=payload.name,
            height_decimeters=payload.height,
            weight_hectograms=payload.weight,
            # An empty string is no sprite
            sprite_url=payload.sprites.front_default or None,
        )

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
