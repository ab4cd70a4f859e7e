"""Turn a source reference (path, URL, data URI) into a PixelBuffer with Pillow."""
import base64
import binascii
import os
from io import BytesIO
from typing import Optional

import requests
from PIL import Image, UnidentifiedImageError

from .pixel_buffer import PixelBuffer
from ..errors import DecodeError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _read_bytes(source_ref: str, timeout: Optional[float]) -> bytes:
    """Fetch raw image bytes from a URL, a data URI, or the filesystem."""
    if source_ref.startswith("http://") or source_ref.startswith("https://"):
        try:
            response = requests.get(source_ref, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DecodeError(f"Could not fetch {source_ref}: {e}") from e
        return response.content

    if source_ref.startswith("data:"):
        header, _, payload = source_ref.partition(",")
        if not header.endswith(";base64"):
            raise DecodeError("Only base64 data URIs are supported")
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64 payload in data URI: {e}") from e

    if not os.path.isfile(source_ref):
        raise DecodeError(f"Image not found: {source_ref}")
    with open(source_ref, "rb") as f:
        return f.read()


def decode_bytes(raw: bytes, max_dimension: Optional[int] = None) -> PixelBuffer:
    """
    Decode encoded image bytes into RGBA pixels.

    Only the first frame of animated images is used. When ``max_dimension``
    is set, the image is thumbnailed so neither side exceeds it.
    """
    try:
        with Image.open(BytesIO(raw)) as img:
            img.seek(0)
            rgba = img.convert("RGBA")
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large to decode safely: {e}") from e
    except (UnidentifiedImageError, OSError, EOFError, ValueError) as e:
        raise DecodeError(f"Unsupported or corrupt image: {e}") from e

    if max_dimension:
        rgba.thumbnail((max_dimension, max_dimension))

    return PixelBuffer(rgba.tobytes(), rgba.width, rgba.height)


def load_pixels(
    source_ref: str,
    timeout: Optional[float] = None,
    max_dimension: Optional[int] = None,
) -> PixelBuffer:
    """
    Load and decode an image reference.

    Args:
        source_ref: Local path, http(s) URL, or base64 data URI.
        timeout: Seconds to wait for a URL fetch.
        max_dimension: Optional thumbnail bound for large images.

    Returns:
        Decoded PixelBuffer.

    Raises:
        DecodeError: If the bytes cannot be fetched or decoded.
    """
    logger.debug(f"Loading pixels from: {source_ref[:80]}")
    buffer = decode_bytes(_read_bytes(source_ref, timeout), max_dimension)
    logger.info(f"Decoded {buffer.width}x{buffer.height} image ({buffer.size} pixels)")
    return buffer
