"""Tests for the Gemini and OpenAI provider adapters."""

import asyncio
import base64
import json
from types import SimpleNamespace

from photoshoot.adapters.gemini_client import GeminiPhotoShootClient
from photoshoot.adapters.openai_client import OpenAIPhotoShootClient
from photoshoot.services.photoshoot import DESCRIPTION_SCHEMA
from tests.conftest import make_image

PNG_BYTES = b"\x89PNG\r\n\x1a\nimage-bytes"


class _FakeGeminiModels:
    def __init__(self, response: object) -> None:
        self.response = response
        self.last_kwargs: dict[str, object] | None = None

    async def generate_content(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_kwargs = kwargs
        return self.response


class _FakeGenaiClient:
    def __init__(self, response: object) -> None:
        self.aio = SimpleNamespace(models=_FakeGeminiModels(response))


def _part(text=None, data=None, mime_type=None):  # type: ignore[no-untyped-def]
    inline = SimpleNamespace(data=data, mime_type=mime_type) if data else None
    return SimpleNamespace(text=text, inline_data=inline)


def _candidates(*parts) -> SimpleNamespace:  # type: ignore[no-untyped-def]
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))]
    )


def test_gemini_describe_sends_both_images_and_parses_json() -> None:
    fake = _FakeGenaiClient(
        SimpleNamespace(text=json.dumps({"person": "p", "accessory": "a"}))
    )
    client = GeminiPhotoShootClient(client=fake)

    result = asyncio.run(
        client.describe(
            model="gemini-2.5-flash",
            prompt="Describe",
            images=[make_image(), make_image()],
            schema=DESCRIPTION_SCHEMA,
        )
    )

    assert result == {"person": "p", "accessory": "a"}
    kwargs = fake.aio.models.last_kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["config"].response_mime_type == "application/json"
    parts = kwargs["contents"][0].parts
    assert len(parts) == 3
    assert parts[0].text == "Describe"
    assert parts[1].inline_data.mime_type == "image/png"


def test_gemini_edit_returns_text_and_image_parts() -> None:
    fake = _FakeGenaiClient(
        _candidates(
            _part(text="Sure, here it is."),
            _part(data=PNG_BYTES, mime_type="image/png"),
        )
    )
    client = GeminiPhotoShootClient(client=fake)

    parts = asyncio.run(
        client.edit(model="edit-model", prompt="Make it pop", image=make_image())
    )

    assert parts[0].text == "Sure, here it is."
    assert not parts[0].is_image
    assert parts[1].is_image
    assert base64.b64decode(parts[1].data) == PNG_BYTES
    assert parts[1].to_data_url().startswith("data:image/png;base64,")
    config = fake.aio.models.last_kwargs["config"]
    assert "IMAGE" in [str(m).upper().split(".")[-1] for m in config.response_modalities]


def test_gemini_edit_without_candidates_returns_no_parts() -> None:
    client = GeminiPhotoShootClient(client=_FakeGenaiClient(SimpleNamespace(candidates=None)))

    parts = asyncio.run(client.edit(model="m", prompt="p", image=make_image()))

    assert parts == []


class _FakeResponses:
    def __init__(self) -> None:
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type(
            "Resp", (), {"output_text": json.dumps({"person": "p", "accessory": "a"})}
        )()


class _FakeImages:
    def __init__(self) -> None:
        self.last_payload: dict[str, object] | None = None

    async def edit(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        encoded = base64.b64encode(PNG_BYTES).decode()
        return SimpleNamespace(data=[SimpleNamespace(b64_json=encoded)])


class _FakeOpenAI:
    def __init__(self) -> None:
        self.responses = _FakeResponses()
        self.images = _FakeImages()


def test_openai_describe_uses_strict_json_schema() -> None:
    fake = _FakeOpenAI()
    client = OpenAIPhotoShootClient(client=fake)

    result = asyncio.run(
        client.describe(
            model="gpt-4.1-mini",
            prompt="Describe",
            images=[make_image(), make_image()],
            schema=DESCRIPTION_SCHEMA,
        )
    )

    assert result == {"person": "p", "accessory": "a"}
    payload = fake.responses.last_payload
    content = payload["input"][0]["content"]
    assert [item["type"] for item in content] == [
        "input_text",
        "input_image",
        "input_image",
    ]
    assert payload["text"]["format"]["strict"] is True


def test_openai_edit_uploads_image_and_returns_png_part() -> None:
    fake = _FakeOpenAI()
    client = OpenAIPhotoShootClient(client=fake)

    parts = asyncio.run(
        client.edit(model="gpt-image-1", prompt="Studio shot", image=make_image())
    )

    assert len(parts) == 1
    assert parts[0].mime_type == "image/png"
    filename, data, mime_type = fake.images.last_payload["image"]
    assert filename == "input.png"
    assert mime_type == "image/png"
    assert data.startswith(b"\x89PNG")
