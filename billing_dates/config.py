from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

WEEK_START_DAYS = {"monday": 0, "sunday": 6}


class Settings(BaseSettings):
    DEFAULT_TIMEZONE: str = "UTC"
    WEEK_START: str = "monday"  # first day of a calendar week
    LOG_BOUNDARIES: bool = False

    model_config = SettingsConfigDict(env_prefix="BILLING_DATES_", env_file=".env", extra="ignore")

    @field_validator("WEEK_START")
    @classmethod
    def _known_week_start(cls, value: str) -> str:
        value = value.lower()
        if value not in WEEK_START_DAYS:
            raise ValueError(f"WEEK_START must be one of {sorted(WEEK_START_DAYS)}, got {value!r}")
        return value

    @property
    def week_start_weekday(self) -> int:
        return WEEK_START_DAYS[self.WEEK_START]


@lru_cache
def get_settings() -> Settings:
    return Settings()
