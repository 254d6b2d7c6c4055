"""Application configuration."""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_anon_key: str | None = None
    environment: str = _ENVIRONMENT
    period_timezone: str = "UTC"
    auth_timeout_seconds: float = 10

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("period_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        return parse_period_timezone(value)

    @property
    def auth_api_key(self) -> str:
        """Key sent as ``apikey`` to Supabase Auth."""
        return self.supabase_anon_key or self.supabase_service_key


def parse_period_timezone(raw: str | None) -> str:
    """Return a valid IANA timezone name, defaulting to UTC when blank."""
    cleaned = (raw or "").strip()
    if not cleaned:
        return "UTC"
    try:
        ZoneInfo(cleaned)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {cleaned}") from exc
    return cleaned
