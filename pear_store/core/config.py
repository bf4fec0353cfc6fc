"""PEAR Store Configuration"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "PEAR Store"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3001
    seed_catalog: bool = True

    # Message provider: "template" is local and deterministic, "llm" calls
    # the text-generation API and falls back to templates without a key.
    message_provider: Literal["template", "llm"] = "template"
    provider_timeout_seconds: Optional[float] = Field(default=10.0, gt=0)
    provider_latency_seconds: float = Field(default=0.3, ge=0)

    # LLM Configuration
    anthropic_api_key: Optional[str] = None
    llm_model: str = "claude-3-5-haiku-latest"
    llm_base_url: str = "https://api.anthropic.com"
    llm_max_tokens: int = Field(default=200, gt=0)

    # Status progression timing (seconds)
    status_base_delay_seconds: float = Field(default=3.0, ge=0)
    status_jitter_min_seconds: float = Field(default=2.0, ge=0)
    status_jitter_max_seconds: float = Field(default=4.0, ge=0)

    # Idle session cleanup
    session_max_age_hours: float = Field(default=24.0, gt=0)
    session_cleanup_interval_seconds: float = Field(default=3600.0, gt=0)

    @model_validator(mode="after")
    def check_jitter_range(self) -> "Settings":
        if self.status_jitter_min_seconds > self.status_jitter_max_seconds:
            raise ValueError("status_jitter_min_seconds must not exceed status_jitter_max_seconds")
        return self

    @property
    def llm_configured(self) -> bool:
        """Check if the text-generation API can be called"""
        return bool(self.anthropic_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
