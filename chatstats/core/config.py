"""
Service configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Report service settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Chat Stats Report Service")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(default="sqlite:///./data/chatstats.db")

    # Reports
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone used to decide what 'today' is; server-local when unset",
    )
    report_max_days: int = Field(default=3660, ge=1)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject zone names zoneinfo cannot resolve."""
        if v:
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError):
                raise ValueError(f"Unknown timezone: {v}")
        return v or None

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
