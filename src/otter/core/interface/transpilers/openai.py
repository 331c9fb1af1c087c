"""OpenAI transpiler — generic request/response <-> chat-completions JSON.

Covers the request direction (turns, tool declarations, generation
settings) and the non-streaming response direction. Streaming chunks are
handled by :class:`otter.core.interface.stream.StreamDecoder`, which shares
the response assembly in :mod:`otter.core.interface.assembler`.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from otter.core.interface.assembler import ResponseAssembler
from otter.core.interface.errors import ConversionError, DecodeError, EncodeError
from otter.core.interface.models import (
    FileDataPart,
    FunctionCallPart,
    FunctionResponsePart,
    InlineDataPart,
    LLMRequest,
    LLMResponse,
    Schema,
    TextPart,
    ToolDeclaration,
    Turn,
    new_call_id,
)
from otter.core.interface.wire import (
    AudioURLSubPart,
    ContentSubPart,
    FileSource,
    FileSubPart,
    ImageURLSubPart,
    MediaURL,
    ResponseFormat,
    TextSubPart,
    VideoURLSubPart,
    WireFunction,
    WireFunctionCall,
    WireMessage,
    WireRequest,
    WireResponse,
    WireTool,
    WireToolCall,
)
from otter.core.polyfills.inline_tool_calls import InlineToolCallParser

logger = logging.getLogger(__name__)

TEXT_SEPARATOR = "\n"

# Trailing user instructions that keep the model acting instead of idling.
KICKOFF_INSTRUCTION = "Handle the requests as specified in the System Instruction."
CONTINUE_INSTRUCTION = (
    "Continue processing previous requests as instructed. "
    "Exit or provide a summary if no more outputs are needed."
)

_FILE_MIME_TYPES = frozenset({"application/pdf", "application/json"})


class OpenAITranspiler:
    """Converts between the generic model and OpenAI's chat completion format."""

    def __init__(self) -> None:
        self._assembler = ResponseAssembler()
        self._inline_parser = InlineToolCallParser()

    # ------------------------------------------------------------------
    # Request direction
    # ------------------------------------------------------------------

    def to_provider(self, request: LLMRequest, *, model: str, stream: bool = False) -> WireRequest:
        """Build the full chat-completions request for *request*.

        The request itself is not modified; the trailing nudge turn is added
        to the outgoing copy only.
        """
        messages: list[WireMessage] = []
        if request.system_instruction:
            messages.append(WireMessage(role="system", content=request.system_instruction))

        for turn in _with_trailing_instruction(request.contents):
            try:
                messages.extend(self.convert_turn(turn))
            except ConversionError:
                logger.error("failed to convert %s turn", turn.role)
                raise

        wire = WireRequest(model=model, messages=messages, stream=stream)

        if request.tools:
            wire.tools = [self.convert_tool(tool) for tool in request.tools]

        config = request.config
        if config.temperature is not None:
            wire.temperature = config.temperature
        if config.max_output_tokens:
            wire.max_tokens = config.max_output_tokens
        if config.top_p is not None:
            wire.top_p = config.top_p
        if config.stop_sequences:
            wire.stop = list(config.stop_sequences)
        if config.response_mime_type == "application/json":
            wire.response_format = ResponseFormat(type="json_object")

        return wire

    def convert_turn(self, turn: Turn) -> list[WireMessage]:
        """Convert one turn into zero or more wire messages.

        Function responses win: a turn holding any of them becomes tool-role
        messages only. Otherwise the turn becomes a single message whose
        shape depends on what it holds (tool calls > multimodal > text).
        """
        role = "assistant" if turn.role == "model" else turn.role

        tool_messages = [
            WireMessage(
                role="tool",
                content=_encode_json(part.response, "function response"),
                tool_call_id=part.id or new_call_id(),
            )
            for part in turn.parts
            if isinstance(part, FunctionResponsePart)
        ]
        if tool_messages:
            return tool_messages

        texts: list[str] = []
        media: list[ContentSubPart] = []
        tool_calls: list[WireToolCall] = []

        for part in turn.parts:
            if isinstance(part, TextPart):
                if part.text and not part.thought:
                    texts.append(part.text)
            elif isinstance(part, InlineDataPart):
                converted = _inline_data_to_openai(part)
                if isinstance(converted, str):
                    texts.append(converted)
                elif converted is not None:
                    media.append(converted)
            elif isinstance(part, FileDataPart):
                if part.file_uri:
                    media.append(FileSubPart(file=FileSource(file_id=part.file_uri)))
            elif isinstance(part, FunctionCallPart):
                tool_calls.append(
                    WireToolCall(
                        id=part.id or new_call_id(),
                        type="function",
                        function=WireFunctionCall(
                            name=part.name,
                            arguments=_encode_json(part.args, "function call arguments"),
                        ),
                    )
                )

        if tool_calls:
            content = TEXT_SEPARATOR.join(texts) if texts else None
            return [WireMessage(role=role, content=content, tool_calls=tool_calls)]
        if media:
            mixed: list[ContentSubPart] = [TextSubPart(text=t) for t in texts]
            mixed.extend(media)
            return [WireMessage(role=role, content=mixed)]
        if texts:
            return [WireMessage(role=role, content=TEXT_SEPARATOR.join(texts))]
        return []

    def convert_tool(self, tool: ToolDeclaration) -> WireTool:
        """Convert a tool declaration into an OpenAI function tool."""
        return WireTool(
            function=WireFunction(
                name=tool.name,
                description=tool.description or None,
                parameters=_parameters_to_openai(tool),
            )
        )

    # ------------------------------------------------------------------
    # Response direction (non-streaming)
    # ------------------------------------------------------------------

    def from_provider(self, response: dict[str, Any]) -> LLMResponse:
        """Convert a complete chat completion response to an ``LLMResponse``."""
        try:
            wire = WireResponse.model_validate(response)
        except ValidationError as exc:
            logger.error("failed to decode response: %s", exc)
            msg = f"failed to decode response: {exc}"
            raise DecodeError(msg) from exc
        return self.decode_response(wire)

    def decode_response(self, response: WireResponse) -> LLMResponse:
        if not response.choices:
            msg = "no choices in response"
            raise DecodeError(msg)

        choice = response.choices[0]
        message = choice.message
        if message is None:
            logger.error("no message in response")
            msg = "no message in response"
            raise DecodeError(msg)

        text = _content_text(message.content)
        tool_calls = list(message.tool_calls or [])

        if not tool_calls and "{" in text:
            result = self._inline_parser.parse(text)
            if result.tool_calls:
                logger.debug("recovered %d inline tool call(s) from text", len(result.tool_calls))
                tool_calls = result.tool_calls
                text = result.remainder

        return self._assembler.build(
            text=text,
            tool_calls=tool_calls,
            reasoning=message.reasoning_content,
            usage=response.usage,
            finish_reason=choice.finish_reason,
        )


def _with_trailing_instruction(contents: list[Turn]) -> list[Turn]:
    """Return *contents* plus a trailing user nudge where one is needed."""
    if not contents:
        return [Turn.user(KICKOFF_INSTRUCTION)]
    if contents[-1].role == "user":
        return [*contents, Turn.user(CONTINUE_INSTRUCTION)]
    return list(contents)


def _encode_json(value: Any, what: str) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        msg = f"failed to marshal {what}: {exc}"
        raise EncodeError(msg) from exc


def _inline_data_to_openai(part: InlineDataPart) -> ContentSubPart | str | None:
    """Classify inline bytes by MIME type.

    Returns a sub-part, or a string for ``text/*`` payloads that fold into
    the message text, or ``None`` for empty payloads.
    """
    if not part.data:
        return None

    mime_type = part.mime_type
    if mime_type.startswith("text/"):
        try:
            return part.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"inline {mime_type} data is not valid UTF-8"
            raise ConversionError(msg) from exc

    encoded = base64.b64encode(part.data).decode("ascii")
    data_uri = f"data:{mime_type};base64,{encoded}"

    if mime_type.startswith("image/"):
        return ImageURLSubPart(image_url=MediaURL(url=data_uri))
    if mime_type.startswith("audio/"):
        return AudioURLSubPart(audio_url=MediaURL(url=data_uri))
    if mime_type.startswith("video/"):
        return VideoURLSubPart(video_url=MediaURL(url=data_uri))
    if mime_type in _FILE_MIME_TYPES:
        return FileSubPart(file=FileSource(file_data=data_uri))

    msg = f"unsupported inline data MIME type: {mime_type!r}"
    raise ConversionError(msg)


def _parameters_to_openai(tool: ToolDeclaration) -> dict[str, Any]:
    """Resolve a tool's parameter schema to a plain JSON-schema mapping.

    Never fails: unusable schemas degrade to ``{}``.
    """
    params = tool.parameters
    if params is None:
        return {}
    if isinstance(params, dict):
        return params
    if isinstance(params, Schema):
        return _schema_to_dict(params, top_level=True)

    try:
        if isinstance(params, BaseModel):
            converted: Any = params.model_dump(mode="json", exclude_none=True)
        else:
            converted = json.loads(json.dumps(params))
    except (TypeError, ValueError) as exc:
        logger.warning("unusable parameter schema for tool %s: %s", tool.name, exc)
        return {}

    if not isinstance(converted, dict):
        logger.warning("parameter schema for tool %s is not an object", tool.name)
        return {}
    return converted


def _schema_to_dict(schema: Schema, *, top_level: bool = False) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if schema.type:
        result["type"] = schema.type.lower()
    elif top_level:
        result["type"] = "object"
    if schema.description:
        result["description"] = schema.description
    if schema.items is not None:
        result["items"] = _schema_to_dict(schema.items)
    if schema.properties is not None:
        result["properties"] = {k: _schema_to_dict(v) for k, v in schema.properties.items()}
    if schema.enum is not None:
        result["enum"] = list(schema.enum)
    if schema.required:
        result["required"] = list(schema.required)
    return result


def _content_text(content: str | list[Any] | None) -> str:
    if isinstance(content, str):
        return content
    if content:
        return "".join(p.text for p in content if isinstance(p, TextSubPart))
    return ""
