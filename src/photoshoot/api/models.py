"""Request and response payloads for the photo shoot API."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from photoshoot.domain.photoshoot import GeneratedImage, PhotoShootSession
from photoshoot.services.controller import PhotoShootController


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageUpload(ApiModel):
    """Image uploaded from the browser as a data URL; null clears it."""

    image: str | None = None


class ScenarioUpdate(ApiModel):
    scenario: str


class StyleUpdate(ApiModel):
    style: str


class HistoryEntry(ApiModel):
    """Compact history row for the list view."""

    id: str
    timestamp: str
    scenario: str
    style: str
    thumbnails: list[str]


class StatePayload(ApiModel):
    """Snapshot of the working state rendered by the UI."""

    person_image: str | None
    accessory_image: str | None
    scenario: str
    style: str
    generated_images: list[GeneratedImage]
    phase: str
    is_busy: bool
    can_generate: bool
    progress_message: str
    error: str | None
    error_kind: str | None
    history: list[HistoryEntry]


def history_entry(session: PhotoShootSession) -> HistoryEntry:
    return HistoryEntry(
        id=session.id,
        timestamp=session.timestamp.isoformat(),
        scenario=session.scenario,
        style=session.style,
        thumbnails=[image.src for image in session.generated_images if image.src],
    )


def state_payload(controller: PhotoShootController) -> dict[str, object]:
    """Serialize the controller state with camelCase keys."""
    state = controller.state
    payload = StatePayload(
        person_image=state.person_image,
        accessory_image=state.accessory_image,
        scenario=state.scenario,
        style=state.style,
        generated_images=state.generated_images,
        phase=state.phase.value,
        is_busy=state.is_busy,
        can_generate=controller.can_generate(),
        progress_message=state.progress_message,
        error=state.error,
        error_kind=state.error_kind,
        history=[history_entry(s) for s in controller.history.list_sessions()],
    )
    return payload.model_dump(mode="json", by_alias=True)
