import io
import struct
import zlib
import pytest
import httpx
from PIL import Image
from pokeviewer.clients.sprite_client import SpriteClient, decode_image
from pokeviewer.clients.pokeapi_client import DecodeError, HttpError, NetworkError

SPRITE_URL = "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/150.png"


def png_bytes(size=(96, 96), mode="P"):
    buffer = io.BytesIO()
    Image.new(mode, size).save(buffer, format="PNG")
    return buffer.getvalue()

@pytest.fixture
def sprite_client():
    return SpriteClient()

@pytest.mark.asyncio
async def test_sprite_is_downloaded_and_decoded(httpx_mock, sprite_client):
    httpx_mock.add_response(url=SPRITE_URL, content=png_bytes(), headers={"Content-Type": "image/png"})

    image = await sprite_client.fetch_image(SPRITE_URL)

    assert isinstance(image, Image.Image)
    assert image.size == (96, 96)
    assert image.mode == "RGBA"

@pytest.mark.asyncio
async def test_format_comes_from_content_not_headers(httpx_mock, sprite_client):
    buffer = io.BytesIO()
    Image.new("RGB", (40, 30)).save(buffer, format="GIF")
    httpx_mock.add_response(url=SPRITE_URL, content=buffer.getvalue(), headers={"Content-Type": "application/octet-stream"})

    image = await sprite_client.fetch_image(SPRITE_URL)

    assert image.size == (40, 30)

@pytest.mark.asyncio
async def test_missing_sprite_raises_http_error(httpx_mock, sprite_client):
    httpx_mock.add_response(url=SPRITE_URL, status_code=404)

    with pytest.raises(HttpError) as excinfo:
        await sprite_client.fetch_image(SPRITE_URL)

    assert excinfo.value.status_code == 404

@pytest.mark.asyncio
async def test_sprite_network_failure_raises_network_error(httpx_mock, sprite_client):
    httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=SPRITE_URL)

    with pytest.raises(NetworkError):
        await sprite_client.fetch_image(SPRITE_URL)

@pytest.mark.asyncio
async def test_garbage_bytes_raise_decode_error(httpx_mock, sprite_client):
    httpx_mock.add_response(url=SPRITE_URL, content=b"definitely not a png")

    with pytest.raises(DecodeError):
        await sprite_client.fetch_image(SPRITE_URL)

def test_truncated_png_raises_decode_error():
    with pytest.raises(DecodeError):
        decode_image(png_bytes(size=(64, 64), mode="RGB")[:60])

def huge_png(width=20000, height=20000):
    """A valid PNG header announcing far more pixels than Pillow will open."""
    def chunk(kind, data):
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IDAT", b"") + chunk(b"IEND", b"")

def test_oversized_image_raises_decode_error():
    with pytest.raises(DecodeError):
        decode_image(huge_png())

@pytest.mark.asyncio
async def test_oversized_sprite_raises_decode_error(httpx_mock, sprite_client):
    httpx_mock.add_response(url=SPRITE_URL, content=huge_png())

    with pytest.raises(DecodeError):
        await sprite_client.fetch_image(SPRITE_URL)
