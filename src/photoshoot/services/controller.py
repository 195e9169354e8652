"""Working state and generation flow for the photo shoot UI."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from photoshoot.domain.errors import (
    DecodeError,
    GenerationInProgressError,
    InputValidationError,
    PersistenceError,
    RemoteCallError,
    ResizeError,
    SessionNotFoundError,
)
from photoshoot.domain.photoshoot import (
    DEFAULT_STYLE,
    LIFESTYLE_TITLE,
    PORTRAIT_TITLE,
    PRODUCT_TITLE,
    STYLES,
    GeneratedImage,
    PhotoShootSession,
)
from photoshoot.services.history import HistoryStore
from photoshoot.services.images import UPLOAD_MIME_TYPES, parse_data_url, resize_image
from photoshoot.services.photoshoot import PhotoShootService

logger = logging.getLogger(__name__)

Downscaler = Callable[[str | None], Awaitable[str | None]]


class GenerationPhase(Enum):
    """Lifecycle of the current generation request."""

    IDLE = "idle"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class WorkingState:
    """Unsaved inputs and results shown in the UI."""

    person_image: str | None = None
    accessory_image: str | None = None
    scenario: str = ""
    style: str = DEFAULT_STYLE
    generated_images: list[GeneratedImage] = field(default_factory=list)
    phase: GenerationPhase = GenerationPhase.IDLE
    progress_message: str = ""
    error: str | None = None
    error_kind: str | None = None

    @property
    def is_busy(self) -> bool:
        return self.phase is GenerationPhase.GENERATING


@dataclass
class PhotoShootController:
    """Coordinates inputs, the generation pipeline and the history store."""

    service: PhotoShootService
    history: HistoryStore
    downscale: Downscaler = resize_image
    state: WorkingState = field(default_factory=WorkingState)

    def set_person_image(self, payload: str | None) -> None:
        """Replace the person photo."""
        self._ensure_idle()
        self.state.person_image = _validated_upload(payload)

    def set_accessory_image(self, payload: str | None) -> None:
        """Replace the accessory photo."""
        self._ensure_idle()
        self.state.accessory_image = _validated_upload(payload)

    def set_scenario(self, scenario: str) -> None:
        self._ensure_idle()
        self.state.scenario = scenario

    def set_style(self, style: str) -> None:
        """Select one of the picker styles."""
        self._ensure_idle()
        if style not in STYLES:
            raise InputValidationError(f"Unknown style: {style}")
        self.state.style = style

    def can_generate(self) -> bool:
        """Return whether a generation request would be accepted."""
        state = self.state
        return bool(
            state.person_image
            and state.accessory_image
            and state.scenario.strip()
            and not state.is_busy
        )

    async def generate(self) -> None:
        """Run one photo shoot and save it to history on success.

        Raises :class:`InputValidationError` without touching state when the
        request cannot start. Pipeline failures are recorded on the state.
        """
        self._ensure_idle()
        state = self.state
        if not (state.person_image and state.accessory_image):
            raise InputValidationError("Please upload both images.")
        if not state.scenario.strip():
            raise InputValidationError("Please describe a scenario.")

        person_image = state.person_image
        accessory_image = state.accessory_image
        scenario = state.scenario
        style = state.style

        state.phase = GenerationPhase.GENERATING
        state.error = None
        state.error_kind = None
        state.generated_images = _placeholders(person_image, accessory_image)
        try:
            results = await self.service.generate_photo_shoot(
                person_image,
                accessory_image,
                scenario,
                style,
                self._report_progress,
            )
            state.generated_images = [
                image.model_copy(update={"src": src})
                for image, src in zip(state.generated_images, results, strict=True)
            ]
            session = await self._build_session(
                person_image, accessory_image, scenario, style, results
            )
            self.history.add(session)
        except RemoteCallError as exc:
            state.generated_images = []
            self._fail(str(exc), "generation")
        except ResizeError as exc:
            self._fail(f"Failed to prepare the session for history: {exc}", "resize")
        except PersistenceError as exc:
            state.phase = GenerationPhase.SUCCEEDED
            self._record_error(str(exc), "persistence")
        else:
            state.phase = GenerationPhase.SUCCEEDED
            logger.info("Saved photo shoot session %s", session.id)
        finally:
            state.progress_message = ""
            if state.is_busy:
                state.phase = GenerationPhase.FAILED

    def load_session(self, session_id: str) -> PhotoShootSession:
        """Replace the working state with a stored session."""
        self._ensure_idle()
        session = self.history.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        self.state = WorkingState(
            person_image=session.person_image,
            accessory_image=session.accessory_image,
            scenario=session.scenario,
            style=session.style,
            generated_images=list(session.generated_images),
        )
        return session

    def delete_session(self, session_id: str) -> None:
        try:
            self.history.remove(session_id)
        except PersistenceError as exc:
            self._record_error(str(exc), "persistence")
            raise

    def clear_history(self) -> None:
        try:
            self.history.clear()
        except PersistenceError as exc:
            self._record_error(str(exc), "persistence")
            raise

    async def _build_session(
        self,
        person_image: str,
        accessory_image: str,
        scenario: str,
        style: str,
        results: list[str],
    ) -> PhotoShootSession:
        small_person = await self.downscale(person_image)
        small_accessory = await self.downscale(accessory_image)
        if not small_person or not small_accessory:
            raise ResizeError("Failed to resize input images for history session.")
        originals = [small_person, small_accessory, small_person]
        generated = []
        for image, src, original in zip(
            self.state.generated_images, results, originals, strict=True
        ):
            generated.append(
                GeneratedImage(
                    title=image.title, src=await self.downscale(src), original=original
                )
            )
        return PhotoShootSession(
            id=str(uuid4()),
            timestamp=datetime.now(tz=UTC),
            person_image=small_person,
            accessory_image=small_accessory,
            scenario=scenario,
            style=style,
            generated_images=generated,
        )

    def _report_progress(self, message: str) -> None:
        self.state.progress_message = message

    def _ensure_idle(self) -> None:
        if self.state.is_busy:
            raise GenerationInProgressError("A photo shoot is already being generated.")

    def _fail(self, message: str, kind: str) -> None:
        self.state.phase = GenerationPhase.FAILED
        self._record_error(message, kind)

    def _record_error(self, message: str, kind: str) -> None:
        logger.warning("Photo shoot error (%s): %s", kind, message)
        self.state.error = message
        self.state.error_kind = kind


def _placeholders(person_image: str, accessory_image: str) -> list[GeneratedImage]:
    return [
        GeneratedImage(title=PORTRAIT_TITLE, original=person_image),
        GeneratedImage(title=PRODUCT_TITLE, original=accessory_image),
        GeneratedImage(title=LIFESTYLE_TITLE, original=person_image),
    ]


def _validated_upload(payload: str | None) -> str | None:
    """Accept PNG, JPEG or WEBP data URLs; ``None`` clears the slot."""
    if payload is None:
        return None
    try:
        mime_type, _ = parse_data_url(payload)
    except DecodeError as exc:
        raise InputValidationError(str(exc)) from exc
    if mime_type not in UPLOAD_MIME_TYPES:
        raise InputValidationError(f"Unsupported image type: {mime_type}")
    return payload
