"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NOTEORGANIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Data storage (draft, credential, preferences)
    data_path: Path = Path("data")

    # Remote generation settings
    llm_provider: Literal["gemini", "anthropic", "openai"] = "gemini"
    api_key: str | None = None  # a stored credential takes precedence
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    anthropic_model: str = "claude-haiku-4-5"
    openai_model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_output_tokens: int = 2048
    request_timeout: float = 30.0

    # Processing settings
    min_text_length: int = 10
    # Node IDs are single letters A-Z, so the cap cannot exceed 26
    max_diagram_nodes: int = Field(default=10, ge=1, le=26)
    label_max_chars: int = Field(default=20, ge=4)
    smart_mode: bool = False
    invalid_diagram_policy: Literal["local", "bullets"] = "local"

    # Debounce timers (seconds)
    process_debounce_seconds: float = 2.0
    autosave_debounce_seconds: float = 3.0

    # Credential heuristic
    min_api_key_length: int = 31


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
