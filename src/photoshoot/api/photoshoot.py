"""Photo shoot API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from photoshoot.api.models import (
    ImageUpload,
    ScenarioUpdate,
    StyleUpdate,
    state_payload,
)
from photoshoot.domain.photoshoot import DEFAULT_STYLE, STYLES

if TYPE_CHECKING:
    from photoshoot.services.controller import PhotoShootController

router = APIRouter(prefix="/api", tags=["photoshoot"])


def _controller(request: Request) -> PhotoShootController:
    return request.app.state.container.controller


@router.get("/state")
async def get_state(request: Request) -> dict[str, object]:
    """Return the working state, progress and history summary."""
    return state_payload(_controller(request))


@router.get("/styles")
async def list_styles() -> dict[str, object]:
    """Return the style options shown in the picker."""
    return {"styles": list(STYLES), "default": DEFAULT_STYLE}


@router.put("/inputs/person")
async def set_person_image(body: ImageUpload, request: Request) -> dict[str, object]:
    """Store the uploaded person photo."""
    controller = _controller(request)
    controller.set_person_image(body.image)
    return state_payload(controller)


@router.put("/inputs/accessory")
async def set_accessory_image(
    body: ImageUpload, request: Request
) -> dict[str, object]:
    """Store the uploaded accessory photo."""
    controller = _controller(request)
    controller.set_accessory_image(body.image)
    return state_payload(controller)


@router.put("/inputs/scenario")
async def set_scenario(body: ScenarioUpdate, request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.set_scenario(body.scenario)
    return state_payload(controller)


@router.put("/inputs/style")
async def set_style(body: StyleUpdate, request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.set_style(body.style)
    return state_payload(controller)


@router.post("/generate")
async def generate(request: Request) -> dict[str, object]:
    """Run the photo shoot pipeline and return the resulting state."""
    controller = _controller(request)
    await controller.generate()
    return state_payload(controller)


@router.get("/history")
async def list_history(request: Request) -> dict[str, object]:
    """Return the stored sessions, newest first."""
    sessions = _controller(request).history.list_sessions()
    return {
        "sessions": [
            session.model_dump(mode="json", by_alias=True) for session in sessions
        ]
    }


@router.post("/history/{session_id}/load")
async def load_session(session_id: str, request: Request) -> dict[str, object]:
    """Replace the working state with a stored session."""
    controller = _controller(request)
    controller.load_session(session_id)
    return state_payload(controller)


@router.delete("/history/{session_id}")
async def delete_session(session_id: str, request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.delete_session(session_id)
    return state_payload(controller)


@router.delete("/history")
async def clear_history(request: Request) -> dict[str, object]:
    controller = _controller(request)
    controller.clear_history()
    return state_payload(controller)
