"""Per-channel mean color over sampled opaque pixels."""
from typing import Dict, Tuple

from ..decoding.pixel_buffer import PixelBuffer
from ..errors import NoSamples
from ..utils.color import RGB, round_half_up
from ..utils.logger import get_logger

logger = get_logger(__name__)

CHANNEL_NAMES = ("r", "g", "b")


class ChannelAverager:
    """Average R, G and B over every ``sample``-th opaque pixel."""

    def accumulate(self, buffer: PixelBuffer, sample: int) -> Dict[str, Tuple[int, int]]:
        """
        Collect ``(count, sum)`` for each channel.

        Pixels with alpha below half of 255 are skipped.
        """
        rgb = buffer.sampled_opaque(sample)
        count = len(rgb)
        sums = rgb.sum(axis=0) if count else (0, 0, 0)
        return {
            name: (count, int(total)) for name, total in zip(CHANNEL_NAMES, sums)
        }

    def average(self, buffer: PixelBuffer, sample: int) -> RGB:
        """
        Mean of each channel, rounded half up.

        Raises:
            NoSamples: If no opaque pixel was sampled.
        """
        channels = self.accumulate(buffer, sample)

        means = []
        for name in CHANNEL_NAMES:
            count, total = channels[name]
            if count == 0:
                raise NoSamples(
                    f"No opaque pixels sampled from {buffer.width}x{buffer.height} "
                    f"image (sample={sample})"
                )
            means.append(round_half_up(total / count))

        logger.debug(f"Averaged {channels['r'][0]} pixels (sample={sample})")
        return tuple(means)
