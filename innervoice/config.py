"""
Configuration for the InnerVoice service.

Settings are read from the environment (or a ``.env`` file) once, at startup,
and then passed explicitly to the components that need them. Provider settings
keep the OpenRouter variable names; service settings use the ``INNERVOICE_``
prefix.

Usage:
    from innervoice.config import get_settings

    settings = get_settings()
    settings.api_key
    settings.quote_model
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Read-only configuration for the gateway and the HTTP server."""

    model_config = SettingsConfigDict(
        env_prefix="INNERVOICE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # Provider
    api_key: str = Field(
        default="",
        validation_alias="OPENROUTER_API_KEY",
        description="Bearer credential for the provider",
    )
    base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        validation_alias="OPENROUTER_BASE_URL",
    )
    quote_model: str = Field(
        default="anthropic/claude-3-haiku:beta",
        validation_alias="OPENROUTER_MODEL_QUOTE",
        description="Model used for quote generation",
    )
    letter_model: str = Field(
        default="anthropic/claude-3-haiku:beta",
        validation_alias="OPENROUTER_MODEL_LETTER",
        description="Model used for letters and chat",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        validation_alias="APP_URL",
        description="Public app URL, sent as the HTTP-Referer header",
    )
    app_title: str = Field(default="InnerVoice")

    # Resilience
    max_retries: int = Field(default=3, ge=0, le=10)
    retry_base_delay: float = Field(default=1.0, ge=0.0, le=30.0)
    request_timeout: float = Field(default=30.0, gt=0)

    # Logging
    log_level: str = Field(default="INFO")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v_upper

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)


@lru_cache
def get_settings() -> Settings:
    """Settings loaded from the environment, cached for the process."""
    return Settings()
