"""OpenAI chat-completions wire shapes.

These mirror the JSON exchanged with ``POST {base_url}/chat/completions``.
The same message model serves request messages, response messages and
streaming deltas; absent and ``null`` fields in a delta both parse as
``None``/empty, which the stream decoder treats as "unchanged".
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, model_validator


class WireModel(BaseModel):
    """Base for wire shapes. A JSON ``null`` reads as an absent field."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# ---------------------------------------------------------------------------
# Content sub-parts: the mixed-content variant of a message
# ---------------------------------------------------------------------------


class MediaURL(WireModel):
    url: str


class FileSource(WireModel):
    file_data: str | None = None
    file_id: str | None = None


class TextSubPart(WireModel):
    type: Literal["text"] = "text"
    text: str


class ImageURLSubPart(WireModel):
    type: Literal["image_url"] = "image_url"
    image_url: MediaURL


class AudioURLSubPart(WireModel):
    type: Literal["audio_url"] = "audio_url"
    audio_url: MediaURL


class VideoURLSubPart(WireModel):
    type: Literal["video_url"] = "video_url"
    video_url: MediaURL


class FileSubPart(WireModel):
    type: Literal["file"] = "file"
    file: FileSource


ContentSubPart = Annotated[
    TextSubPart | ImageURLSubPart | AudioURLSubPart | VideoURLSubPart | FileSubPart,
    Field(discriminator="type"),
]

# Either plain string content or an ordered array of typed sub-parts.
MessageContent = str | list[ContentSubPart]


# ---------------------------------------------------------------------------
# Messages and tool calls
# ---------------------------------------------------------------------------


class WireFunctionCall(WireModel):
    name: str = ""
    arguments: str = ""


class WireToolCall(WireModel):
    """A tool call as carried on an assistant message or a stream delta.

    ``index`` is only present on streaming deltas.
    """

    index: int | None = None
    id: str = ""
    type: str = ""
    function: WireFunctionCall = Field(default_factory=WireFunctionCall)


class WireMessage(WireModel):
    role: str | None = None
    content: MessageContent | None = None
    tool_calls: list[WireToolCall] | None = None
    tool_call_id: str | None = None
    reasoning_content: Any = None


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class WireFunction(WireModel):
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None


class WireTool(WireModel):
    type: Literal["function"] = "function"
    function: WireFunction


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class ResponseFormat(WireModel):
    type: str


class WireRequest(WireModel):
    model: str
    messages: list[WireMessage] = []
    tools: list[WireTool] | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    stop: list[str] | None = None
    stream: bool = False
    response_format: ResponseFormat | None = None

    def to_payload(self) -> dict[str, Any]:
        """Dump to the JSON-ready dict sent upstream, omitting unset fields."""
        payload = self.model_dump(exclude_none=True)
        if not self.stream:
            payload.pop("stream", None)
        return payload


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class PromptTokensDetails(WireModel):
    cached_tokens: int = 0


class WireUsage(WireModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    prompt_tokens_details: PromptTokensDetails | None = None


class WireChoice(WireModel):
    index: int = 0
    message: WireMessage | None = None
    delta: WireMessage | None = None
    finish_reason: str | None = None


class WireResponse(WireModel):
    """A full completion response, or one streaming chunk of one."""

    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    choices: list[WireChoice] = []
    usage: WireUsage | None = None
