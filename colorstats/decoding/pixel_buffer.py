"""Decoded RGBA pixel data."""
from dataclasses import dataclass, field

import numpy as np

CHANNELS = 4
ALPHA_THRESHOLD = 255 / 2


@dataclass(frozen=True)
class PixelBuffer:
    """Flat RGBA bytes plus image dimensions."""

    data: bytes
    width: int
    height: int
    size: int = field(init=False)

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Negative dimensions: {self.width}x{self.height}")

        size = self.width * self.height
        if len(self.data) != size * CHANNELS:
            raise ValueError(
                f"Expected {size * CHANNELS} RGBA bytes for "
                f"{self.width}x{self.height}, got {len(self.data)}"
            )
        object.__setattr__(self, "size", size)

    def pixels(self) -> np.ndarray:
        """View the buffer as an (N, 4) uint8 array without copying."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(-1, CHANNELS)

    def sampled_opaque(self, sample: int) -> np.ndarray:
        """
        Return the RGB channels of every ``sample``-th pixel that is opaque.

        A pixel counts as opaque when its alpha is at least half of 255.
        The result has shape (M, 3) and dtype int64.
        """
        sampled = self.pixels()[::sample]
        opaque = sampled[sampled[:, 3] >= ALPHA_THRESHOLD]
        return opaque[:, :3].astype(np.int64)
