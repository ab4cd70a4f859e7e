"""Tests for PixelBuffer validation and sampling."""

from __future__ import annotations

import pytest

from colorstats.decoding import PixelBuffer


def test_size_is_width_times_height(rgba_bytes) -> None:
    buffer = PixelBuffer(rgba_bytes([(1, 2, 3, 255)] * 6), 3, 2)

    assert buffer.size == 6
    assert buffer.pixels().shape == (6, 4)


def test_rejects_mismatched_length() -> None:
    with pytest.raises(ValueError):
        PixelBuffer(b"\x00" * 10, 2, 2)


def test_sampled_opaque_skips_transparent_and_strides(make_buffer) -> None:
    pixels = [
        (10, 0, 0, 255),
        (20, 0, 0, 255),
        (30, 0, 0, 127),
        (40, 0, 0, 255),
        (50, 0, 0, 128),
        (60, 0, 0, 255),
    ]
    buffer = make_buffer(pixels)

    assert buffer.sampled_opaque(1)[:, 0].tolist() == [10, 20, 40, 50, 60]
    # every second pixel: indices 0, 2, 4; index 2 is transparent
    assert buffer.sampled_opaque(2)[:, 0].tolist() == [10, 50]


def test_empty_buffer_samples_nothing() -> None:
    buffer = PixelBuffer(b"", 0, 0)

    assert buffer.size == 0
    assert len(buffer.sampled_opaque(1)) == 0
