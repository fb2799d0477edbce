"""Configuration management for examcraft.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from examcraft.models.flashcard import MasteryFilter

__all__ = [
    "ApiSettings",
    "ExamCraftConfig",
    "LLMSettings",
    "MongoSettings",
    "StudySettings",
]

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class MongoSettings(BaseSettings):
    """MongoDB connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="EXAMCRAFT_MONGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    uri: SecretStr = SecretStr("mongodb://localhost:27017")
    database: str = "examcraft"
    collection_prefix: str = ""


class LLMSettings(BaseSettings):
    """LLM provider settings.

    For OpenRouter, keep provider="openai" and set base_url to the
    OpenRouter endpoint.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXAMCRAFT_LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = "openai"  # "openai" or "anthropic"
    api_key: SecretStr | None = None
    model: str = "gpt-4o-mini"
    base_url: str | None = None
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4000, ge=1)
    app_title: str = "ExamCraft - AI Flashcard Generator"


class StudySettings(BaseSettings):
    """Study session defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EXAMCRAFT_STUDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_mastery_filter: MasteryFilter = MasteryFilter.LEARNING


class ApiSettings(BaseSettings):
    """HTTP API settings."""

    model_config = SettingsConfigDict(
        env_prefix="EXAMCRAFT_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    title: str = "examcraft"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_json: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class ExamCraftConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = ExamCraftConfig()
        mongo_uri = config.mongo.uri.get_secret_value()
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mongo: MongoSettings = Field(default_factory=MongoSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    study: StudySettings = Field(default_factory=StudySettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    @property
    def llm_enabled(self) -> bool:
        """Check if an LLM API key is configured."""
        return self.llm.api_key is not None
