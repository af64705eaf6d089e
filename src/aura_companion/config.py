"""
Runtime settings for the companion engine.

Values are read from the environment (prefix 'AURA_') or a local '.env' file.
The two probabilities are policy constants: they decide how often a reply is
personalized with the user's first name and how often a coping-strategy
follow-up is scheduled. Timings are in seconds.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CompanionSettings(BaseSettings):
    personalization_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    follow_up_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    follow_up_delay: float = Field(default=2.0, ge=0.0)

    # simulated "thinking" time before a reply is persisted
    latency_min: float = Field(default=1.5, ge=0.0)
    latency_max: float = Field(default=2.5, ge=0.0)

    max_message_length: int = Field(default=500, gt=0)
    store_timeout: float = Field(default=10.0, gt=0.0)

    lexicon_path: Path | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="AURA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_latency_window(self) -> "CompanionSettings":
        if self.latency_min > self.latency_max:
            raise ValueError(f"latency_min ({self.latency_min}) must not exceed latency_max ({self.latency_max})")
        return self


@lru_cache(maxsize=1)
def get_settings() -> CompanionSettings:
    """Cached settings instance shared by every session in the process."""
    return CompanionSettings()
