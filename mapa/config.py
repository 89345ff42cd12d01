"""
Application settings.

Loaded from environment variables and an optional `.env` file in the
working directory.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the MAPA reporting service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ── AI narrative (optional) ─────────────────────────────────────────
    gemini_api_key: Optional[str] = Field(default=None, validation_alias="GEMINI_API_KEY")
    gemini_model: str = "gemini-2.5-flash"
    narrative_enabled: bool = True
    narrative_timeout_seconds: float = 30.0
    narrative_temperature: float = 0.3
    narrative_max_output_tokens: int = 2000

    # ── Logging ─────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # ── Report defaults ─────────────────────────────────────────────────
    institution_name: str = "Ergo SaniTas SpA"
    default_specialty: str = "Cardiología"


settings = Settings()
