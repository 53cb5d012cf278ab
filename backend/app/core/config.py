from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración centralizada del backend con validación de tipos."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    cors_origins: list[str] = Field(default=["http://localhost:5173", "http://127.0.0.1:5173"])

    # Groq (co-pilot; sin API key el co-pilot queda deshabilitado)
    groq_api_key: str | None = Field(default=None)
    groq_model: str = Field(default="openai/gpt-oss-120b")
    copilot_temperature: float = Field(default=0.1, ge=0.0, le=1.0)
    copilot_timeout_seconds: int = Field(default=60, ge=5, le=600)
    copilot_max_retries: int = Field(default=3, ge=0, le=10)

    # Timeline
    max_timeline_chars: int = Field(default=20000, ge=100, le=200000)

    # Calendar export
    ics_product_id: str = Field(default="-//Proposal Timeline Service//RFP Response Generator//EN")
    ics_uid_domain: str = Field(default="proposals.local", min_length=1)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def copilot_enabled(self) -> bool:
        return bool(self.groq_api_key)


@lru_cache
def get_settings() -> Settings:
    """Singleton cacheado para evitar recargar .env en cada request."""
    return Settings()


settings = get_settings()
