"""Application configuration using Pydantic v2 Settings.

Values are read from the environment first and from a ``.env`` file
otherwise. Unknown variables are ignored.
"""

from __future__ import annotations

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, REQUEST_TIMEOUT_SECONDS

# Values shipped in example .env files that must not be sent upstream
_PLACEHOLDER_CREDENTIAL = re.compile(r"^(your[-_].*[-_]here|changeme|replace[-_]?me|xxx+)$", re.IGNORECASE)


def is_placeholder_credential(value: str | None) -> bool:
    """Return True when ``value`` cannot be a real credential."""
    if value is None:
        return True
    value = value.strip()
    return not value or bool(_PLACEHOLDER_CREDENTIAL.match(value))


class Settings(BaseSettings):
    """Settings for the letter pipeline and its HTTP surface."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Generative-text provider
    llm_provider: str = Field(
        default="openrouter",
        description="Provider used for letter generation: 'openrouter' or 'anthropic'.",
    )
    openrouter_api_key: str | None = Field(
        default=None,
        description="Bearer credential for the OpenRouter chat-completions API.",
    )
    openrouter_api_url: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        description="OpenRouter chat-completions endpoint.",
    )
    anthropic_api_key: str | None = Field(
        default=None,
        description="API key for the Anthropic Messages API.",
    )
    llm_model: str | None = Field(
        default=None,
        description="Optional model override; each provider has its own default.",
    )
    llm_max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    llm_temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    llm_timeout_seconds: float = Field(default=REQUEST_TIMEOUT_SECONDS, gt=0)

    # Attribution headers sent to OpenRouter
    app_url: str = Field(default="http://localhost:5174")
    app_title: str = Field(default="Steno Demand Letter Generator")

    # API
    cors_origins: str = Field(default="", description="Comma separated list of allowed origins.")
    log_level: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR.")

    @field_validator("llm_provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"openrouter", "anthropic"}:
            raise ValueError(f"Unsupported LLM provider: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings | None) -> None:
    """Replace the global Settings instance (``None`` forces a reload)."""
    global _settings
    _settings = settings
