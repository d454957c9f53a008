"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from study_aids.domain.value_objects import configured_credential


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: SecretStr | None = None
    llm_provider: Literal["gemini", "openai"] = "gemini"
    llm_model: str = "gemini-3-flash-preview"
    output_language: str = "Italian"
    regulation_text: str | None = None
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def credential(self) -> str | None:
        """Return the API key, or ``None`` when it is unset, blank or ``"undefined"``."""
        if self.api_key is None:
            return None
        return configured_credential(self.api_key.get_secret_value())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
