"""OpenTelemetry tracing for stream translation.

``translate_stream`` opens one span per translated stream and tags it with the
``ATTR_*`` keys below. Without a configured SDK the API hands out no-op
tracers, so library callers pay nothing unless they opt in.

The CLI opts in with ``--trace`` (console) and ``--otlp-endpoint`` (OTLP/gRPC),
both of which need the ``otel`` extra::

    pip install llmwire[otel]
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

ATTR_PROVIDER = "llmwire.provider"
ATTR_MODEL = "llmwire.model"
ATTR_EVENTS = "llmwire.events"
ATTR_PAYLOADS = "llmwire.payloads"
ATTR_FINISH_REASON = "llmwire.finish_reason"
ATTR_ERROR = "llmwire.error"

_INSTRUMENTATION_NAME = "llmwire"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a tracer for *name*, a no-op one until telemetry is configured."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "llmwire",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider exporting translation spans.

    Spans go to stdout when *export_to_console* is set and to the collector
    at *otlp_endpoint* when one is given.

    Raises :class:`ImportError` naming the missing package when the ``otel``
    extra is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
    except ImportError as exc:
        raise ImportError(
            "opentelemetry-sdk is required for tracing; install llmwire[otel]"
        ) from exc

    processors: list[Any] = []
    if export_to_console:
        processors.append(SimpleSpanProcessor(_console_exporter()))
    if otlp_endpoint:
        processors.append(BatchSpanProcessor(_otlp_exporter(otlp_endpoint)))

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in processors:
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _console_exporter() -> Any:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter

    return ConsoleSpanExporter()


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    except ImportError as exc:
        raise ImportError(
            "opentelemetry-exporter-otlp is required for OTLP export; install llmwire[otel]"
        ) from exc

    return OTLPSpanExporter(endpoint=endpoint)
