"""Library configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from `THREADCLEAN_*` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="THREADCLEAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="json")

    # Token-reduction compaction
    compaction_user_max_chars: int = Field(default=500, ge=1)
    compaction_assistant_max_chars: int = Field(default=1000, ge=1)
    compaction_question_marker: str = Field(default="PREGUNTA DEL USUARIO:")
    compaction_context_marker: str = Field(default="(Contexto adicional:")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
