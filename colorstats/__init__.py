"""Average, most used and least used colors of raster images."""
from .analyzer import AnalyzerState, ColorAnalyzer
from .analysis.color_quantizer import ColorBucket
from .decoding import (
    AsyncPixelSource,
    ManualPixelSource,
    PillowPixelSource,
    PixelBuffer,
    PixelSource,
)
from .errors import ColorStatsError, DecodeError, InvalidArgument, NoSamples

__version__ = "0.1.0"
