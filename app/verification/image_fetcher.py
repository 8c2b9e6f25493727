"""
Image download for verification.

The label detector needs raw pixels, so this is the one fatal step of a
verification: every failure raises ImageUnavailableError.
"""

import io
import asyncio
import logging
from urllib.parse import urlparse

import aiohttp
from PIL import Image

from app.config import settings
from app.integrations import http_client as http_module
from app.verification.errors import ImageUnavailableError

logger = logging.getLogger(__name__)

Image.MAX_IMAGE_PIXELS = settings.pil_max_image_pixels

DOWNLOAD_CHUNK_BYTES = 64 * 1024


def _ensure_decodable(content: bytes) -> str:
    """Returns the detected image format. Raises whatever Pillow raises on junk."""
    with Image.open(io.BytesIO(content)) as img:
        img.verify()
        return (img.format or "unknown").lower()


def _too_large(max_size: int) -> str:
    return f"too large (max {max_size // (1024 * 1024)}MB)"


async def fetch_image_bytes(image_url: str, max_size: int = settings.max_image_download_bytes) -> bytes:
    if urlparse(image_url).scheme not in ("http", "https"):
        raise ImageUnavailableError(image_url, "unsupported URL scheme")

    try:
        async with http_module.request_session() as session:
            async with session.get(image_url) as response:
                if response.status != 200:
                    raise ImageUnavailableError(image_url, f"HTTP {response.status}")
                if response.content_length and response.content_length > max_size:
                    raise ImageUnavailableError(image_url, _too_large(max_size))

                # Content-Length may be absent or wrong; cap while streaming
                buffer = bytearray()
                async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_BYTES):
                    buffer.extend(chunk)
                    if len(buffer) > max_size:
                        raise ImageUnavailableError(image_url, _too_large(max_size))
                content = bytes(buffer)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise ImageUnavailableError(image_url, f"{type(e).__name__}: {e}") from e

    if not content:
        raise ImageUnavailableError(image_url, "empty body")

    try:
        image_format = await asyncio.to_thread(_ensure_decodable, content)
    except Exception as e:
        # Pillow raises SyntaxError, struct.error, OSError... depending on the codec
        raise ImageUnavailableError(image_url, f"undecodable image: {type(e).__name__}: {e}") from e

    logger.info(f"[VERIFY] Fetched image ({len(content)} bytes, {image_format})")
    return content
