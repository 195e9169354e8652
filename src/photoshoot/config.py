"""Application configuration."""

import os
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ai_provider: Literal["gemini", "openai"] = "gemini"
    gemini_api_key: str | None = None
    gemini_describe_model: str = "gemini-2.5-flash"
    gemini_edit_model: str = "gemini-2.5-flash-image-preview"
    openai_api_key: str | None = None
    openai_describe_model: str = "gpt-4.1-mini"
    openai_edit_model: str = "gpt-image-1"
    history_backend: Literal["file", "memory", "supabase"] = "file"
    history_path: str = ".photoshoot"
    history_key: str = "photoShootHistory"
    history_limit: int = 10
    storage_quota_bytes: int | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "kv_store"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_credentials(self) -> "Settings":
        if self.ai_provider == "gemini" and not self.gemini_api_key:
            raise ValueError("GEMINI_API_KEY must be set for the gemini provider")
        if self.ai_provider == "openai" and not self.openai_api_key:
            raise ValueError("OPENAI_API_KEY must be set for the openai provider")
        if self.history_backend == "supabase" and not (
            self.supabase_url and self.supabase_service_key
        ):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY must be set "
                "for the supabase history backend"
            )
        return self
