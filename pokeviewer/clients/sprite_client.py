import asyncio
import io
import httpx
import logging
from typing import Optional
from PIL import Image, UnidentifiedImageError
from pokeviewer.clients.pokeapi_client import DecodeError, HttpError, NetworkError

logger = logging.getLogger(__name__)


def decode_image(content: bytes) -> Image.Image:
    """Decodes raw bytes into a fully loaded RGBA bitmap. Format comes from the content."""
    try:
        with Image.open(io.BytesIO(content)) as img:
            img.load()
            return img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Sprite could not be decoded: {str(e)}")


class SpriteClient:
    def __init__(self, timeout: Optional[float] = None):
        # Sprite URLs are absolute, so no base_url here
        self.client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def _download(self, url: str) -> bytes:
        logger.info(f"Downloading sprite: {url}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()
            return response.content

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Sprite download failed with status {status_code}: {url}")
            raise HttpError(status_code, f"Sprite download failed with status {status_code}")
        except httpx.RequestError as e:
            logger.error(f"Sprite network error: {str(e)}")
            raise NetworkError(f"Sprite network error: {str(e)}")

    async def fetch_image(self, url: str) -> Image.Image:
        """Downloads and decodes a sprite. Decoding runs off the event loop thread."""
        content = await self._download(url)
        return await asyncio.to_thread(decode_image, content)

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
