"""Tests for image payload helpers and the downscaler."""

import asyncio
import base64
from io import BytesIO

import pytest
from PIL import Image

from photoshoot.domain.errors import DecodeError, ResizeError
from photoshoot.services import images
from photoshoot.services.images import (
    parse_data_url,
    resize_image,
    scaled_size,
    to_data_url,
)
from tests.conftest import make_image


def _size(payload: str) -> tuple[int, int]:
    _, data = parse_data_url(payload)
    with Image.open(BytesIO(data)) as image:
        return image.size


def test_resize_constrains_width_for_landscape() -> None:
    result = asyncio.run(resize_image(make_image(1600, 900)))

    assert result is not None
    assert result.startswith("data:image/jpeg;base64,")
    assert _size(result) == (800, 450)


def test_resize_constrains_height_for_portrait() -> None:
    result = asyncio.run(resize_image(make_image(900, 1600)))

    assert result is not None
    assert _size(result) == (450, 800)


def test_resize_keeps_small_images_at_original_size() -> None:
    result = asyncio.run(resize_image(make_image(120, 80)))

    assert result is not None
    assert _size(result) == (120, 80)


def test_resize_flattens_transparency() -> None:
    buffer = BytesIO()
    Image.new("RGBA", (10, 10), (0, 0, 0, 0)).save(buffer, format="PNG")

    result = asyncio.run(resize_image(to_data_url(buffer.getvalue())))

    assert result is not None
    _, data = parse_data_url(result)
    with Image.open(BytesIO(data)) as image:
        assert image.mode == "RGB"
        red, green, blue = image.getpixel((5, 5))
        assert min(red, green, blue) > 240


def test_resize_none_skips_decoding(monkeypatch) -> None:
    def fail(_payload: str) -> Image.Image:
        raise AssertionError("decode should not run")

    monkeypatch.setattr(images, "_decode", fail)

    assert asyncio.run(resize_image(None)) is None


def test_resize_rejects_garbage_bytes() -> None:
    payload = "data:image/png;base64," + base64.b64encode(b"not an image").decode()

    with pytest.raises(DecodeError):
        asyncio.run(resize_image(payload))


def test_resize_rejects_non_data_url() -> None:
    with pytest.raises(ResizeError):
        asyncio.run(resize_image("https://example.com/cat.png"))


def test_scaled_size_square_uses_width_rule() -> None:
    assert scaled_size(1000, 1000, 800, 600) == (800, 800)


def test_scaled_size_never_returns_zero() -> None:
    assert scaled_size(5000, 2, 800, 800) == (800, 1)


def test_parse_data_url_round_trips_mime_type() -> None:
    payload = to_data_url(b"\x89PNG\r\n\x1a\nrest")

    mime_type, data = parse_data_url(payload)

    assert mime_type == "image/png"
    assert data.endswith(b"rest")


def test_to_data_url_defaults_to_jpeg() -> None:
    assert to_data_url(b"unknown").startswith("data:image/jpeg;base64,")
