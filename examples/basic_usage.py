"""Basic usage examples."""
import asyncio
import tempfile
from pathlib import Path

from PIL import Image

from colorstats import AsyncPixelSource, ColorAnalyzer, DecodeError

# Sample images written to a scratch directory so the examples run anywhere.
workdir = Path(tempfile.mkdtemp())
logo_path = workdir / "logo.png"
cover_path = workdir / "cover.jpg"

logo = Image.new("RGBA", (64, 64), (0, 0, 0, 0))
logo.paste((220, 40, 40, 255), (16, 16, 48, 48))
logo.save(logo_path)

cover = Image.new("RGB", (120, 80), (30, 60, 150))
cover.paste((240, 200, 20), (0, 0, 40, 80))
cover.save(cover_path, quality=95)

# --- Example 1: Local file, results printed as they arrive ---
analyzer = ColorAnalyzer(str(logo_path))
analyzer.average(print)
analyzer.most_used(print)
analyzer.least_used(print)

# --- Example 2: Descriptor object with a src attribute and a finer stride ---
class Artwork:
    src = str(cover_path)


analyzer = ColorAnalyzer(Artwork(), preset="precise")
analyzer.summary(lambda stats: print(stats["most_used"]))

# --- Example 3: Stride can change between calls ---
analyzer.sample = 50
analyzer.average(lambda color: print(f"Coarse average: {color}"))

# --- Example 4: Decode in the background and queue requests meanwhile ---
async def theme_from_url(url):
    analyzer = ColorAnalyzer(
        url,
        source=AsyncPixelSource({"decoding": {"timeout": 10}}),
        on_error=lambda e: print(f"Failed: {e}"),
    )
    analyzer.most_used(lambda color: print(f"Accent: {color}"))
    try:
        await analyzer.wait_ready()
    except DecodeError:
        pass


asyncio.run(theme_from_url("https://example.com/banner.png"))
