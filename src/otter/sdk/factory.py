"""Model construction from loaded settings."""

from __future__ import annotations

import httpx

from otter.core.interface.client import ModelClient
from otter.core.interface.config import ModelConfig
from otter.sdk.models import DEFAULT_DEEPSEEK_MODEL, DeepSeekSettings


def new_deepseek_model(
    settings: DeepSeekSettings,
    http_client: httpx.AsyncClient | None = None,
) -> ModelClient:
    """Build a :class:`ModelClient` for DeepSeek's OpenAI-compatible endpoint."""
    config = ModelConfig(
        model=settings.model or DEFAULT_DEEPSEEK_MODEL,
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )
    return ModelClient(config, http_client)
