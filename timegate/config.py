from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timegate.services.time_ranges import TimeRanges, parse_time_ranges


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="", case_sensitive=False)

    ALLOWED_TIME_RANGES: str = ""  # e.g. "06:00-08:00,22:00-02:00"; empty means all day.
    TIMEZONE: str = ""  # IANA zone for the gate clock; empty means host local time.
    GATE_ENABLED: bool = Field(default=True)
    JOB_INTERVAL_SECONDS: int = 60
    MAX_SLEEP_SECONDS: int = 3600

    def time_ranges(self) -> TimeRanges:
        return parse_time_ranges(self.ALLOWED_TIME_RANGES)

    def non_secret_dict(self) -> dict:
        return self.model_dump()

    @field_validator("TIMEZONE")
    @classmethod
    def _strip_timezone(cls, value: str) -> str:
        return value.strip()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
