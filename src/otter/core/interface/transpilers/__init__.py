"""Provider-specific transpiler implementations."""

from otter.core.interface.transpilers.openai import OpenAITranspiler

__all__ = ["OpenAITranspiler"]
