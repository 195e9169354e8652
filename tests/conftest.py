"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from io import BytesIO
from uuid import uuid4

import pytest
from PIL import Image

from photoshoot.config import Settings
from photoshoot.containers import AppContainer
from photoshoot.domain.photoshoot import ContentPart, GeneratedImage, PhotoShootSession
from photoshoot.services.controller import PhotoShootController
from photoshoot.services.history import HistoryStore
from photoshoot.services.images import to_data_url
from photoshoot.services.photoshoot import PhotoShootClient, PhotoShootService
from photoshoot.services.storage import InMemoryStorage


def make_image(
    width: int = 40,
    height: int = 30,
    color: tuple[int, int, int] = (200, 40, 40),
    fmt: str = "PNG",
) -> str:
    """Return a solid-color image as a data URL."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    mime_type = "image/png" if fmt == "PNG" else "image/jpeg"
    return to_data_url(buffer.getvalue(), mime_type)


def make_session(
    session_id: str | None = None, scenario: str = "a beach at sunset"
) -> PhotoShootSession:
    image = make_image(8, 8)
    return PhotoShootSession(
        id=session_id or str(uuid4()),
        timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        person_image=image,
        accessory_image=image,
        scenario=scenario,
        style="Retro",
        generated_images=[
            GeneratedImage(title="Full-Body Portrait", src=image, original=image),
            GeneratedImage(title="Accessory Photo", src=image, original=image),
            GeneratedImage(title="Lifestyle Scene", src=image, original=image),
        ],
    )


@dataclass
class FakePhotoShootClient(PhotoShootClient):
    """Fake provider that records calls and returns canned results."""

    descriptions: dict[str, object] = field(
        default_factory=lambda: {
            "person": "woman in her thirties with short black hair",
            "accessory": "brown leather messenger bag",
        }
    )
    outputs: list[str] = field(
        default_factory=lambda: [
            make_image(60, 90, (10, 10, 10)),
            make_image(50, 50, (250, 250, 250)),
            make_image(90, 60, (20, 120, 20)),
        ]
    )
    describe_error: Exception | None = None
    empty_edit_index: int | None = None
    calls: list[str] = field(default_factory=list)
    edit_prompts: list[str] = field(default_factory=list)
    edit_images: list[str] = field(default_factory=list)
    on_edit: object | None = None

    async def describe(
        self,
        *,
        model: str,
        prompt: str,
        images: list[str],
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.calls.append("describe")
        if self.describe_error is not None:
            raise self.describe_error
        return self.descriptions

    async def edit(self, *, model: str, prompt: str, image: str) -> list[ContentPart]:
        index = len(self.edit_prompts)
        self.calls.append("edit")
        self.edit_prompts.append(prompt)
        self.edit_images.append(image)
        if callable(self.on_edit):
            self.on_edit(index)
        if index == self.empty_edit_index:
            return [ContentPart(text="I cannot edit this image.")]
        mime_type, _, data = self.outputs[index][len("data:") :].partition(";base64,")
        return [
            ContentPart(text="Here is your photo."),
            ContentPart(mime_type=mime_type, data=data),
        ]

    async def close(self) -> None:
        return None


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        gemini_api_key="gemini-key",
        history_backend="memory",
        history_path=str(tmp_path / "history"),
    )


@pytest.fixture
def fake_client() -> FakePhotoShootClient:
    return FakePhotoShootClient()


@pytest.fixture
def service(fake_client: FakePhotoShootClient) -> PhotoShootService:
    return PhotoShootService(
        client=fake_client,
        describe_model="describe-model",
        edit_model="edit-model",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def history(storage: InMemoryStorage) -> HistoryStore:
    return HistoryStore(storage)


@pytest.fixture
def controller(service: PhotoShootService, history: HistoryStore) -> PhotoShootController:
    return PhotoShootController(service=service, history=history)


@pytest.fixture
def container(
    settings: Settings,
    service: PhotoShootService,
    history: HistoryStore,
    controller: PhotoShootController,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        photo_shoot_service=service,
        history_store=history,
        controller=controller,
        close_resources=close_resources,
    )
