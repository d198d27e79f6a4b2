"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutricu.services.localization import DEFAULT_LANGUAGE, supported_languages

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_language: str = DEFAULT_LANGUAGE
    seed_default_mixtures: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_language(requested: str | None, default: str) -> str:
    """Pick a supported language, falling back to the configured default."""
    if requested is None:
        return default
    cleaned = requested.strip().lower()
    if cleaned in supported_languages():
        return cleaned
    return default
