"""Error types raised across the photo shoot application."""


class PhotoShootError(Exception):
    """Base class for application errors."""


class InputValidationError(PhotoShootError):
    """A required input is missing or invalid; nothing was started."""


class GenerationInProgressError(InputValidationError):
    """A photo shoot is already being generated."""


class SessionNotFoundError(InputValidationError):
    """No history session exists for the requested id."""


class RemoteCallError(PhotoShootError):
    """The generation pipeline failed at a remote step."""

    def __init__(self, message: str, step: str | None = None) -> None:
        super().__init__(message)
        self.step = step


class GenerationFailure(RemoteCallError):
    """An edit call returned no usable image."""


class ResizeError(PhotoShootError):
    """An image could not be downscaled."""


class DecodeError(ResizeError):
    """Image data could not be decoded."""


class RenderSurfaceError(ResizeError):
    """A drawing surface could not be created, resampled or encoded."""


class PersistenceError(PhotoShootError):
    """Writing the history to storage failed."""


class StorageQuotaExceededError(PersistenceError):
    """A storage write would exceed the configured quota."""
