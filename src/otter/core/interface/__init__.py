"""Model protocol adapter: generic content model <-> OpenAI-compatible endpoints.

Exports resolve lazily so that submodules (models, wire shapes) can be
imported without pulling in the HTTP client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from otter.core.interface.client import ModelClient as ModelClient
    from otter.core.interface.config import ModelConfig as ModelConfig
    from otter.core.interface.errors import AdapterError as AdapterError
    from otter.core.interface.models import LLMRequest as LLMRequest
    from otter.core.interface.models import LLMResponse as LLMResponse

_EXPORTS = {
    "ModelClient": "otter.core.interface.client",
    "ModelConfig": "otter.core.interface.config",
    "AdapterError": "otter.core.interface.errors",
    "ConversionError": "otter.core.interface.errors",
    "DecodeError": "otter.core.interface.errors",
    "EncodeError": "otter.core.interface.errors",
    "StreamError": "otter.core.interface.errors",
    "TransportError": "otter.core.interface.errors",
    "UpstreamError": "otter.core.interface.errors",
    "FileDataPart": "otter.core.interface.models",
    "FinishReason": "otter.core.interface.models",
    "FunctionCallPart": "otter.core.interface.models",
    "FunctionResponsePart": "otter.core.interface.models",
    "GenerationConfig": "otter.core.interface.models",
    "InlineDataPart": "otter.core.interface.models",
    "LLMRequest": "otter.core.interface.models",
    "LLMResponse": "otter.core.interface.models",
    "Schema": "otter.core.interface.models",
    "TextPart": "otter.core.interface.models",
    "ToolDeclaration": "otter.core.interface.models",
    "Turn": "otter.core.interface.models",
    "UsageMetadata": "otter.core.interface.models",
    "Transpiler": "otter.core.interface.transpiler",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:
    module_path = _EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'otter.core.interface' has no attribute {name!r}")
