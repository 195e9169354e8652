"""Domain models for photo shoot sessions."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PORTRAIT_TITLE = "Full-Body Portrait"
PRODUCT_TITLE = "Accessory Photo"
LIFESTYLE_TITLE = "Lifestyle Scene"

DEFAULT_STYLE = "Editorial"
STYLES = ("Editorial", "Cinematográfico", "Retro", "Minimalista")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class GeneratedImage(_CamelModel):
    """One of the three output cards; ``src`` is absent while pending."""

    title: str
    src: str | None = None
    original: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.src is None


class PhotoShootSession(_CamelModel):
    """A completed generation request with its inputs and outputs."""

    id: str
    timestamp: datetime
    person_image: str
    accessory_image: str
    scenario: str
    style: str
    generated_images: list[GeneratedImage] = Field(min_length=3, max_length=3)


class SubjectDescriptions(BaseModel):
    """Structured output of the describe step."""

    person: str = Field(min_length=1)
    accessory: str = Field(min_length=1)


@dataclass(frozen=True)
class ContentPart:
    """Single part of an edit response."""

    text: str | None = None
    mime_type: str | None = None
    data: str | None = None

    @property
    def is_image(self) -> bool:
        return bool(self.mime_type and self.data)

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"
