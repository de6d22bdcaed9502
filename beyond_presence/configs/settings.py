"""Centralized settings for the Beyond Presence node."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from beyond_presence.ingestion.normalization.agent_id import AgentIdLookup


class Settings(BaseSettings):
    """
    Settings powered by pydantic-settings.

    Values come from ``BEY_``-prefixed environment variables or a local
    ``.env`` file.
    """

    # -------------------------------------------------------------------------
    # API
    # -------------------------------------------------------------------------
    API_KEY: SecretStr | None = None
    BASE_URL: str = "https://api.bey.dev/v1"
    REQUEST_TIMEOUT: int = Field(default=30, ge=1)
    MAX_RETRIES: int = Field(default=3, ge=0)

    # -------------------------------------------------------------------------
    # WEBHOOKS
    # -------------------------------------------------------------------------
    AGENT_ID_LOOKUP: AgentIdLookup = AgentIdLookup.CANONICAL

    # -------------------------------------------------------------------------
    # LOGGING
    # -------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    model_config = SettingsConfigDict(
        env_prefix="BEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def api_key_value(self) -> str:
        """
        Return the API key in clear text.

        Raises
        ------
        ValueError
            If no API key is configured.
        """
        if self.API_KEY is None:
            raise ValueError("BEY_API_KEY is not set")
        return self.API_KEY.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings.

    Returns
    -------
    Settings
        The singleton settings instance.
    """
    return Settings()
