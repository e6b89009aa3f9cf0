"""Settings loaded from environment variables with the ENVWIRE_ prefix."""

from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from envwire.domain import DEFAULT_LABEL


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Startup settings.

    ``profiles`` is a comma-separated list of active environment labels, e.g.
    ``ENVWIRE_PROFILES=dev,default``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENVWIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    profiles: str = DEFAULT_LABEL
    fallback_label: str = DEFAULT_LABEL
    log_level: LogLevel = LogLevel.INFO

    @field_validator("profiles")
    @classmethod
    def require_profile(cls, value: str) -> str:
        if not _split_labels(value):
            raise ValueError("at least one active profile is required")
        return value

    @property
    def active_profiles(self) -> frozenset[str]:
        return frozenset(_split_labels(self.profiles))


def _split_labels(value: str) -> list[str]:
    return [label.strip() for label in value.split(",") if label.strip()]


def build_settings(**overrides) -> Settings:
    """Build Settings, ignoring overrides that are None."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
