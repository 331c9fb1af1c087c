"""Pydantic models for the settings YAML consumed by the SDK and CLI."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"


class DeepSeekSettings(BaseModel):
    """Credentials and endpoint for the DeepSeek OpenAI-compatible API."""

    api_key: str
    model: str = DEFAULT_DEEPSEEK_MODEL
    base_url: str
    timeout: float | None = 60.0

    @field_validator("api_key", "base_url")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return value


class LLMSettings(BaseModel):
    deepseek: DeepSeekSettings


class LogSettings(BaseModel):
    """Logging setup; ``file`` enables a size-rotated log file."""

    level: Literal["debug", "info", "warning", "error"] = "info"
    file: str | None = None
    max_size_mb: int = 0
    max_backups: int = 0

    @field_validator("level", mode="before")
    @classmethod
    def _lower(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


class Settings(BaseModel):
    """Top-level settings file."""

    llm: LLMSettings
    log: LogSettings = Field(default_factory=LogSettings)
