"""Coarse RGB bucketing and frequency ranking of sampled pixels."""
from dataclasses import dataclass
from typing import List

import numpy as np

from ..decoding.pixel_buffer import PixelBuffer
from ..errors import NoSamples
from ..utils.color import BUCKET_STEP, CHANNEL_MAX, RGB, format_rgb
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColorBucket:
    """A quantized color and how many sampled pixels fell into it."""

    color: RGB
    count: int

    @property
    def rgb(self) -> str:
        return format_rgb(self.color)


class ColorQuantizer:
    """Snap sampled opaque pixels to a coarse RGB grid and rank the cells."""

    def __init__(self, step: int = BUCKET_STEP):
        self.step = step

    def quantize(self, rgb: np.ndarray) -> np.ndarray:
        """
        Round each channel to the nearest multiple of ``step``, ties up.

        Anything that rounds to 255 or past it becomes 255.
        """
        half = self.step / 2
        keys = np.floor((rgb + half) / self.step).astype(np.int64) * self.step
        return np.minimum(keys, CHANNEL_MAX)

    def rank(self, buffer: PixelBuffer, sample: int) -> List[ColorBucket]:
        """
        Count sampled pixels per bucket, most frequent first.

        Buckets with equal counts keep the order in which they were first
        seen while scanning the buffer.

        Raises:
            NoSamples: If no opaque pixel was sampled.
        """
        rgb = buffer.sampled_opaque(sample)
        if len(rgb) == 0:
            raise NoSamples(
                f"No opaque pixels to rank in {buffer.width}x{buffer.height} "
                f"image (sample={sample})"
            )

        keys = self.quantize(rgb)
        buckets, first_seen, counts = np.unique(
            keys, axis=0, return_index=True, return_counts=True
        )

        # np.unique sorts lexicographically; restore scan order first.
        by_first_seen = np.argsort(first_seen, kind="stable")
        buckets = buckets[by_first_seen]
        counts = counts[by_first_seen]

        order = np.argsort(-counts, kind="stable")
        ranking = [
            ColorBucket(tuple(int(c) for c in buckets[i]), int(counts[i]))
            for i in order
        ]

        logger.info(
            f"Ranked {len(ranking)} color buckets from {len(rgb)} sampled pixels "
            f"(sample={sample})"
        )
        return ranking
