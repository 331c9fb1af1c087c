"""Generic content model — the protocol-agnostic request/response shapes.

The agent runtime builds an ``LLMRequest`` per model invocation and consumes
the ``LLMResponse`` sequence the adapter yields back. Nothing in here knows
about any provider wire format; transpilers convert to/from these types.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

CALL_ID_PREFIX = "call_"


def new_call_id() -> str:
    """Fabricate a tool-call id for calls that arrive without one."""
    return f"{CALL_ID_PREFIX}{uuid4().hex[:8]}"


# ---------------------------------------------------------------------------
# Parts: the building blocks of a turn
# ---------------------------------------------------------------------------


class TextPart(BaseModel):
    """Plain text. ``thought`` marks model reasoning rather than answer text."""

    type: Literal["text"] = "text"
    text: str
    thought: bool = False


class InlineDataPart(BaseModel):
    """Raw bytes with a MIME type (image, audio, video, document...)."""

    type: Literal["inline_data"] = "inline_data"
    mime_type: str
    data: bytes


class FileDataPart(BaseModel):
    """Reference to a file already uploaded somewhere, by URI."""

    type: Literal["file_data"] = "file_data"
    file_uri: str
    mime_type: str | None = None


class FunctionCallPart(BaseModel):
    """A tool invocation issued by the model."""

    type: Literal["function_call"] = "function_call"
    id: str = ""
    name: str
    args: dict[str, Any] = {}


class FunctionResponsePart(BaseModel):
    """The result of a tool invocation, fed back to the model."""

    type: Literal["function_response"] = "function_response"
    id: str = ""
    name: str = ""
    response: dict[str, Any] = {}


Part = Annotated[
    TextPart | InlineDataPart | FileDataPart | FunctionCallPart | FunctionResponsePart,
    Field(discriminator="type"),
]


class Turn(BaseModel):
    """One conversation turn: a role and its ordered parts."""

    role: Literal["user", "model"]
    parts: list[Part] = []

    @classmethod
    def user(cls, text: str) -> Turn:
        """Create a user turn with a single text part."""
        return cls(role="user", parts=[TextPart(text=text)])

    @classmethod
    def model(cls, text: str) -> Turn:
        """Create a model turn with a single text part."""
        return cls(role="model", parts=[TextPart(text=text)])


# ---------------------------------------------------------------------------
# Tool declarations
# ---------------------------------------------------------------------------


class Schema(BaseModel):
    """Strongly-typed subset of JSON schema used by tool declarations."""

    type: str | None = None
    description: str = ""
    items: Schema | None = None
    properties: dict[str, Schema] | None = None
    enum: list[str] | None = None
    required: list[str] = []


class ToolDeclaration(BaseModel):
    """A function the model may call.

    ``parameters`` is produced by an external schema builder. It is either a
    plain JSON-schema mapping, a :class:`Schema`, or any other object that
    serializes to a JSON object.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str = ""
    parameters: Any = None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """Sampling and output settings for one invocation."""

    temperature: float | None = None
    max_output_tokens: int | None = None
    top_p: float | None = None
    stop_sequences: list[str] = []
    response_mime_type: str | None = None


class LLMRequest(BaseModel):
    """A complete model invocation, immutable once handed to the adapter."""

    model_config = ConfigDict(frozen=True)

    system_instruction: str | None = None
    contents: list[Turn] = []
    tools: list[ToolDeclaration] = []
    config: GenerationConfig = Field(default_factory=GenerationConfig)


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class FinishReason(str, Enum):
    """Why generation stopped."""

    STOP = "stop"
    MAX_TOKENS = "max_tokens"
    SAFETY = "safety"
    OTHER = "other"


class UsageMetadata(BaseModel):
    """Token accounting reported by the upstream model."""

    prompt_token_count: int = 0
    candidates_token_count: int = 0
    total_token_count: int = 0
    cached_content_token_count: int | None = None


class LLMResponse(BaseModel):
    """One element of the response sequence.

    ``partial`` responses carry a single increment and are never the final
    answer; the sequence is closed by exactly one non-partial response.
    """

    role: Literal["model"] = "model"
    parts: list[Part] = []
    finish_reason: FinishReason | None = None
    usage_metadata: UsageMetadata | None = None
    partial: bool = False

    @property
    def text(self) -> str:
        """Concatenated answer text, excluding reasoning parts."""
        return "".join(p.text for p in self.parts if isinstance(p, TextPart) and not p.thought)

    @property
    def thoughts(self) -> list[str]:
        """Texts of the reasoning-flagged parts."""
        return [p.text for p in self.parts if isinstance(p, TextPart) and p.thought]

    @property
    def function_calls(self) -> list[FunctionCallPart]:
        """All tool calls in order."""
        return [p for p in self.parts if isinstance(p, FunctionCallPart)]
