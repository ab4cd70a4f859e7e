from .pixel_buffer import PixelBuffer
from .loader import decode_bytes, load_pixels
from .sources import PixelSource, PillowPixelSource, AsyncPixelSource, ManualPixelSource
