"""Model configuration — endpoint, credentials, model name."""

from pydantic import BaseModel, field_validator

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class ModelConfig(BaseModel):
    """Configuration for one OpenAI-compatible chat-completion endpoint.

    Injected at construction time by an external loader (see
    :mod:`otter.sdk.loader`).
    """

    model: str = ""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = 60.0

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        if not value.strip():
            msg = "API key is required. Please set the API key in the configuration"
            raise ValueError(msg)
        return value

    @field_validator("base_url")
    @classmethod
    def _default_base_url(cls, value: str) -> str:
        return value or DEFAULT_BASE_URL

    @property
    def chat_completions_url(self) -> str:
        """Full URL of the chat-completions endpoint."""
        return self.base_url.rstrip("/") + "/chat/completions"
