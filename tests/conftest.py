"""Shared fixtures for building synthetic images."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable, Sequence

import pytest
from PIL import Image

from colorstats.decoding import PixelBuffer

Pixel = Sequence[int]


def _rgba_bytes(pixels: Sequence[Pixel]) -> bytes:
    return bytes(channel for pixel in pixels for channel in pixel)


@pytest.fixture
def make_buffer() -> Callable[..., PixelBuffer]:
    """Build a PixelBuffer from RGBA tuples laid out as a single row by default."""

    def _make(pixels: Sequence[Pixel], width: int | None = None) -> PixelBuffer:
        width = len(pixels) if width is None else width
        height = len(pixels) // width if width else 0
        return PixelBuffer(_rgba_bytes(pixels), width, height)

    return _make


@pytest.fixture
def rgba_bytes() -> Callable[[Sequence[Pixel]], bytes]:
    return _rgba_bytes


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Encode a solid-color RGBA image as PNG."""

    def _encode(color: tuple[int, int, int, int], size: tuple[int, int] = (4, 3)) -> bytes:
        out = BytesIO()
        Image.new("RGBA", size, color).save(out, format="PNG")
        return out.getvalue()

    return _encode


@pytest.fixture
def solid_png(tmp_path: Path, png_bytes: Callable[..., bytes]) -> Path:
    """A 4x3 opaque PNG filled with rgb(10, 20, 30)."""

    path = tmp_path / "solid.png"
    path.write_bytes(png_bytes((10, 20, 30, 255)))
    return path
