"""
Configuration management for the Lexio backend.

Centralizes all configuration using Pydantic settings with environment variable support.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8080,
        description="API server port"
    )

    # LLM Configuration
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (required at runtime)"
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model used for the assistant, assessments and generation"
    )
    llm_timeout: int = Field(
        default=60,
        description="Per-request timeout in seconds for LLM calls"
    )
    llm_max_retries: int = Field(
        default=3,
        description="Attempts per LLM call on rate limits and timeouts"
    )
    llm_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for chat completions"
    )

    # Exercise Configuration
    max_questions_per_exercise: int = Field(
        default=10,
        description="Upper bound for the number of questions in one exercise"
    )
    default_question_count: int = Field(
        default=5,
        description="Question count used when the caller does not specify one"
    )

    # Assistant Configuration
    chat_max_messages: int = Field(
        default=50,
        description="Messages kept in each conversation's memory window"
    )
    max_tool_rounds: int = Field(
        default=8,
        description="Maximum tool-calling round trips per user message"
    )

    # Application Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    Returns:
        Settings: Application settings
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None


def validate_required_settings():
    """
    Validate that all required settings are present at runtime.

    Should be called after settings are loaded but before application starts.
    Raises ValueError if required settings are missing.
    """
    settings = get_settings()

    if not settings.openai_api_key or settings.openai_api_key == "":
        raise ValueError(
            "OPENAI_API_KEY environment variable is required but not set. "
            "Please ensure the secret is configured in your environment or .env file."
        )

    if settings.max_questions_per_exercise < 1:
        raise ValueError("MAX_QUESTIONS_PER_EXERCISE must be at least 1")

    return True
