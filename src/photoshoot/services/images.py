"""Image payload helpers and the storage downscaler."""

import asyncio
import base64
import binascii
import logging
from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

from photoshoot.domain.errors import DecodeError, RenderSurfaceError

logger = logging.getLogger(__name__)

UPLOAD_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/webp"})


def to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL for image input."""
    resolved = mime_type or detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{resolved};base64,{encoded}"


def parse_data_url(payload: str) -> tuple[str, bytes]:
    """Split a base64 data URL into its MIME type and decoded bytes."""
    header, sep, encoded = payload.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise DecodeError("Image payload is not a base64 data URL")
    mime_type = header[len("data:") : -len(";base64")]
    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Image payload is not valid base64") from exc
    return mime_type or detect_mime_type(data), data


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def scaled_size(
    width: float, height: float, max_width: int, max_height: int
) -> tuple[int, int]:
    """Fit ``width`` x ``height`` inside the bounds, constraining the larger side."""
    if width >= height:
        if width > max_width:
            height *= max_width / width
            width = max_width
    elif height > max_height:
        width *= max_height / height
        height = max_height
    return max(1, round(width)), max(1, round(height))


async def resize_image(
    payload: str | None,
    max_width: int = 800,
    max_height: int = 800,
    quality: float = 0.7,
) -> str | None:
    """Return a bounded JPEG copy of ``payload`` suitable for history storage."""
    if payload is None:
        return None
    return await asyncio.to_thread(
        _resize_sync, payload, max_width, max_height, quality
    )


def _resize_sync(
    payload: str, max_width: int, max_height: int, quality: float
) -> str:
    image = _decode(payload)
    try:
        image = ImageOps.exif_transpose(image)
        size = scaled_size(image.width, image.height, max_width, max_height)
        surface = _flatten(image).resize(size, Image.Resampling.LANCZOS)
        out = BytesIO()
        surface.save(out, format="JPEG", quality=round(quality * 100))
    except (MemoryError, ValueError, OSError) as exc:
        raise RenderSurfaceError(f"Failed to render resized image: {exc}") from exc
    finally:
        image.close()
    logger.debug("Resized image to %sx%s", *size)
    return to_data_url(out.getvalue(), "image/jpeg")


def _decode(payload: str) -> Image.Image:
    _, data = parse_data_url(payload)
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise DecodeError(f"Failed to decode image: {exc}") from exc
    return image


def _flatten(image: Image.Image) -> Image.Image:
    """Composite transparency onto white; JPEG has no alpha channel."""
    if image.mode in {"RGBA", "LA"} or (
        image.mode == "P" and "transparency" in image.info
    ):
        rgba = image.convert("RGBA")
        rgb = Image.new("RGB", rgba.size, (255, 255, 255))
        rgb.paste(rgba, mask=rgba.getchannel("A"))
        return rgb
    return image.convert("RGB")
