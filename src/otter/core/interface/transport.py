"""HTTP transport for chat-completion requests.

Sends the JSON request with bearer auth and hands the still-open response
to the caller, who reads it whole or line by line. Non-2xx answers are read
fully and raised as :class:`UpstreamError`. There is no retry.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from otter.core.interface.config import ModelConfig
from otter.core.interface.errors import EncodeError, TransportError, UpstreamError

logger = logging.getLogger(__name__)


class HTTPTransport:
    """POSTs to ``{base_url}/chat/completions``.

    An injected ``httpx.AsyncClient`` is reused and left open; without one a
    client is created and closed around every request.
    """

    def __init__(self, config: ModelConfig, http_client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = http_client

    @property
    def url(self) -> str:
        return self._config.chat_completions_url

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._config.timeout) as client:
            yield client

    @asynccontextmanager
    async def post(self, payload: dict[str, Any]) -> AsyncIterator[httpx.Response]:
        """Send *payload* and yield the open, successful response.

        The response is closed when the context exits, including when the
        consumer stops early.
        """
        try:
            body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            msg = f"failed to marshal request: {exc}"
            raise EncodeError(msg) from exc

        async with self._session() as client:
            request = client.build_request("POST", self.url, content=body, headers=self._headers())
            try:
                response = await client.send(request, stream=True)
            except httpx.HTTPError as exc:
                logger.error("failed to send request: %s", exc)
                msg = f"failed to send request: {exc}"
                raise TransportError(msg) from exc

            try:
                if not response.is_success:
                    try:
                        text = (await response.aread()).decode("utf-8", errors="replace")
                    except httpx.HTTPError as exc:
                        text = f"<unreadable body: {exc}>"
                    logger.error("API error: status=%s body=%s", response.status_code, text)
                    raise UpstreamError(response.status_code, text)
                yield response
            finally:
                await response.aclose()
