"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    state_path: str = "pawfuel_state.json"
    catalog_url: str | None = None
    catalog_timeout_seconds: float = 15.0
    timezone: str = "UTC"
    log_level: str = "INFO"
    pro_trial_days: int = 30
    founder_pro_days: int = 365
    lebanon_whatsapp_number: str = "96181678131"
    cyprus_whatsapp_number: str = "35700000000"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="PAWFUEL_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def branch_numbers(self) -> dict[str, str]:
        """Return messaging numbers keyed by branch."""
        return {
            "lebanon": self.lebanon_whatsapp_number,
            "cyprus": self.cyprus_whatsapp_number,
        }


def parse_allergy_tags(raw: str | list[str] | None) -> list[str]:
    """Normalise allergy input into unique lower-cased tags."""
    if raw is None:
        return []
    chunks = raw.split(",") if isinstance(raw, str) else raw
    tags: list[str] = []
    for chunk in chunks:
        value = chunk.strip().lower()
        if value and value not in tags:
            tags.append(value)
    return tags
