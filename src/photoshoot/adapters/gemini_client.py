"""Gemini client for the describe and edit calls."""

import base64
import json
from dataclasses import dataclass

from google import genai
from google.genai import types

from photoshoot.domain.photoshoot import ContentPart
from photoshoot.services.images import detect_mime_type, parse_data_url
from photoshoot.services.photoshoot import PhotoShootClient


@dataclass
class GeminiPhotoShootClient(PhotoShootClient):
    """Photo shoot client backed by the google-genai SDK."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiPhotoShootClient":
        """Create a Gemini photo shoot client."""
        return cls(client=genai.Client(api_key=api_key))

    async def describe(
        self,
        *,
        model: str,
        prompt: str,
        images: list[str],
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call Gemini with JSON structured output over the given images."""
        parts = [types.Part.from_text(text=prompt)]
        parts.extend(_image_part(image) for image in images)
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[types.Content(role="user", parts=parts)],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_json_schema=schema,
            ),
        )
        if not response.text:
            raise RuntimeError("Gemini returned an empty description")
        return json.loads(response.text)

    async def edit(self, *, model: str, prompt: str, image: str) -> list[ContentPart]:
        """Ask Gemini to edit ``image`` and return every response part."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[
                types.Content(
                    role="user",
                    parts=[_image_part(image), types.Part.from_text(text=prompt)],
                )
            ],
            config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
        )
        return _content_parts(response)

    async def close(self) -> None:
        """Close the underlying async HTTP session."""
        await self.client.aio.aclose()


def _image_part(payload: str) -> types.Part:
    mime_type, data = parse_data_url(payload)
    return types.Part.from_bytes(data=data, mime_type=mime_type)


def _content_parts(response: object) -> list[ContentPart]:
    """Flatten the first candidate of a response into content parts."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates or candidates[0].content is None:
        return []
    parts: list[ContentPart] = []
    for part in candidates[0].content.parts or []:
        inline = part.inline_data
        if inline is not None and inline.data:
            raw = inline.data
            if isinstance(raw, str):
                raw = base64.b64decode(raw)
            parts.append(
                ContentPart(
                    mime_type=inline.mime_type or detect_mime_type(raw),
                    data=base64.b64encode(raw).decode("utf-8"),
                )
            )
        elif part.text:
            parts.append(ContentPart(text=part.text))
    return parts
