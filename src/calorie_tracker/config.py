"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-4o"
    openai_max_tokens: int = 300
    openai_temperature: float = 0.3
    openai_timeout_seconds: float = 30.0
    meal_name_language: str = "Brazilian Portuguese"
    timezone: str = "America/Sao_Paulo"
    default_daily_goal: int = 2000
    state_backend: Literal["file", "supabase"] = "file"
    state_dir: str = ".state"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    host: str = "127.0.0.1"
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
