"""OpenTelemetry tracing helpers for otter.

Provides a thin wrapper around the OpenTelemetry API so the rest of the
codebase can call ``get_tracer()`` without caring whether the SDK is
installed. When the SDK is *not* configured the API returns no-op
implementations.

Usage::

    from otter.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    span = _tracer.start_span("model.generate")
    span.set_attribute(ATTR_MODEL, "deepseek-chat")
    span.end()

Console export is switched on by :func:`configure_telemetry` (requires the
``otel`` extra: ``pip install otter-agent[otel]``).
"""

from __future__ import annotations

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout otter instrumentation
# ---------------------------------------------------------------------------

ATTR_MODEL = "otter.model"
ATTR_STREAM = "otter.stream"
ATTR_TOOL_COUNT = "otter.tools.count"
ATTR_TURN_COUNT = "otter.turns.count"
ATTR_TOKENS_PROMPT = "otter.tokens.prompt"
ATTR_TOKENS_COMPLETION = "otter.tokens.completion"
ATTR_TOKENS_TOTAL = "otter.tokens.total"
ATTR_FINISH_REASON = "otter.finish_reason"
ATTR_PARTIAL_COUNT = "otter.stream.partials"

_INSTRUMENTATION_NAME = "otter"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(*, service_name: str = "otter") -> None:
    """Install an SDK tracer provider that prints finished spans to stdout.

    Used by ``otter generate --telemetry``. Requires the ``otel`` extra.

    Raises:
        ImportError: If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for --telemetry. Install it with: pip install otter-agent[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
