from __future__ import annotations

from pydantic import PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "Smarters/1.0"


class FetchConfig(BaseSettings):
    """Playlist fetch settings, overridable via ``SMARTERS_*`` environment variables."""

    connect_timeout: PositiveFloat = DEFAULT_CONNECT_TIMEOUT
    read_timeout: PositiveFloat = DEFAULT_READ_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    model_config = SettingsConfigDict(
        env_prefix="SMARTERS_",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, value: str) -> str:
        """Blank user agents fall back to the default."""
        return value.strip() or DEFAULT_USER_AGENT

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)
