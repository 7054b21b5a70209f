from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="TT_", case_sensitive=False, extra="ignore")
    """Editor runtime configuration."""

    history_depth: int = Field(default=50, ge=1)

    task_minutes: int = Field(default=60, ge=1)
    break_minutes: int = Field(default=15, ge=1)

    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        if not value:
            return "WARNING"
        return str(value).strip().upper()


settings = Settings()
