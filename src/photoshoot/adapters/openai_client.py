"""OpenAI client for the describe and edit calls."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from photoshoot.domain.photoshoot import ContentPart
from photoshoot.services.images import parse_data_url
from photoshoot.services.photoshoot import PhotoShootClient

_EXTENSIONS = {"image/png": "png", "image/jpeg": "jpg", "image/webp": "webp"}


@dataclass
class OpenAIPhotoShootClient(PhotoShootClient):
    """Photo shoot client backed by the OpenAI Responses and Images APIs."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIPhotoShootClient":
        """Create an OpenAI photo shoot client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def describe(
        self,
        *,
        model: str,
        prompt: str,
        images: list[str],
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call the Responses API with structured outputs."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        content.extend({"type": "input_image", "image_url": image} for image in images)
        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": content}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "subject_descriptions",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def edit(self, *, model: str, prompt: str, image: str) -> list[ContentPart]:
        """Call the Images edit endpoint and return base64 PNG parts."""
        mime_type, data = parse_data_url(image)
        filename = f"input.{_EXTENSIONS.get(mime_type, 'png')}"
        response = await self.client.images.edit(
            model=model,
            image=(filename, data, mime_type),
            prompt=prompt,
        )
        return [
            ContentPart(mime_type="image/png", data=item.b64_json)
            for item in response.data or []
            if item.b64_json
        ]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
