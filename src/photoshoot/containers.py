"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photoshoot.adapters.gemini_client import GeminiPhotoShootClient
from photoshoot.adapters.json_file_storage import JsonFileStorage
from photoshoot.adapters.openai_client import OpenAIPhotoShootClient
from photoshoot.adapters.supabase_kv_storage import SupabaseKeyValueStorage
from photoshoot.config import Settings
from photoshoot.services.controller import PhotoShootController
from photoshoot.services.history import HistoryStore
from photoshoot.services.photoshoot import PhotoShootService
from photoshoot.services.storage import InMemoryStorage, KeyValueStorage


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    photo_shoot_service: PhotoShootService
    history_store: HistoryStore
    controller: PhotoShootController
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage = build_storage(resolved_settings)
    history_store = HistoryStore(
        storage=storage,
        key=resolved_settings.history_key,
        limit=resolved_settings.history_limit,
    )
    if resolved_settings.ai_provider == "openai":
        client: GeminiPhotoShootClient | OpenAIPhotoShootClient = (
            OpenAIPhotoShootClient.create(resolved_settings.openai_api_key or "")
        )
        photo_shoot_service = PhotoShootService(
            client=client,
            describe_model=resolved_settings.openai_describe_model,
            edit_model=resolved_settings.openai_edit_model,
        )
    else:
        client = GeminiPhotoShootClient.create(resolved_settings.gemini_api_key or "")
        photo_shoot_service = PhotoShootService(
            client=client,
            describe_model=resolved_settings.gemini_describe_model,
            edit_model=resolved_settings.gemini_edit_model,
        )
    controller = PhotoShootController(
        service=photo_shoot_service, history=history_store
    )

    async def close_resources() -> None:
        await client.close()

    return AppContainer(
        settings=resolved_settings,
        photo_shoot_service=photo_shoot_service,
        history_store=history_store,
        controller=controller,
        close_resources=close_resources,
    )


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the key-value storage selected by ``history_backend``."""
    if settings.history_backend == "memory":
        return InMemoryStorage(quota_bytes=settings.storage_quota_bytes)
    if settings.history_backend == "supabase":
        supabase_client = create_client(
            settings.supabase_url or "", settings.supabase_service_key or ""
        )
        return SupabaseKeyValueStorage(supabase_client, table=settings.supabase_table)
    return JsonFileStorage.create(
        settings.history_path, quota_bytes=settings.storage_quota_bytes
    )
