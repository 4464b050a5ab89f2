from __future__ import annotations

import os
from zoneinfo import ZoneInfo

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="WL_", case_sensitive=False, extra="ignore")
    """Application runtime configuration."""

    app_name: str = "WorkLog"
    host: str = os.getenv("WL_HOST", "127.0.0.1")
    port: int = int(os.getenv("WL_PORT", "8080"))

    timezone: str = os.getenv("WL_TIMEZONE", "Europe/Rome")

    schedule_mon_thu: float = Field(default=float(os.getenv("WL_SCHEDULE_MON_THU", "8.5")), ge=0)
    schedule_fri: float = Field(default=float(os.getenv("WL_SCHEDULE_FRI", "4")), ge=0)
    schedule_sat_sun: float = Field(default=float(os.getenv("WL_SCHEDULE_SAT_SUN", "0")), ge=0)

    ordinary_leave_days: float = float(os.getenv("WL_ORDINARY_LEAVE_DAYS", "39"))
    retention_years: int = int(os.getenv("WL_RETENTION_YEARS", "5"))

    log_level: str = os.getenv("WL_LOG_LEVEL", "INFO")

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


settings = Settings()

LOCAL_TZ = ZoneInfo(settings.timezone)
