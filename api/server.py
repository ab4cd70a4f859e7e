"""FastAPI web server exposing image color statistics."""
from typing import Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException

from colorstats.analyzer import ColorAnalyzer
from colorstats.config import load_config
from colorstats.decoding import ManualPixelSource, decode_bytes
from colorstats.errors import ColorStatsError, DecodeError, InvalidArgument

app = FastAPI(
    title="Color Statistics API",
    description="Average, most used and least used colors of an image",
    version="0.1.0",
)

ALLOWED_TYPES = {"image/png", "image/jpeg", "image/jpg", "image/webp", "image/gif"}


@app.post("/colors")
async def colors(
    image: UploadFile = File(...),
    preset: Optional[str] = Form(None),
    sample: Optional[int] = Form(None),
):
    """
    Compute color statistics for an uploaded image.
    """
    if image.content_type not in ALLOWED_TYPES:
        raise HTTPException(400, f"Unsupported image type: {image.content_type}")

    try:
        config = load_config(preset=preset)
    except KeyError as e:
        raise HTTPException(400, str(e))

    content = await image.read()

    try:
        buffer = decode_bytes(content, config.get("decoding", {}).get("max_dimension"))
    except DecodeError as e:
        raise HTTPException(422, f"Could not decode image: {e}")

    source = ManualPixelSource()
    try:
        analyzer = ColorAnalyzer(
            image.filename or "<upload>",
            source=source,
            preset=preset,
            sample=sample,
        )
    except InvalidArgument as e:
        raise HTTPException(400, str(e))
    source.complete(buffer)

    result = {}
    try:
        analyzer.summary(result.update)
    except ColorStatsError as e:
        raise HTTPException(422, f"Color analysis failed: {e}")

    result["width"] = analyzer.width
    result["height"] = analyzer.height
    return result


@app.get("/health")
async def health():
    return {"status": "ok"}
