"""Tracer provider for eviction passes.

TidyTabs runs inside someone else's application, so by default it keeps its
own tracer provider instead of replacing the process-wide one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import SpanExporter

logger = logging.getLogger(__name__)

TRACER_NAME = "tidytabs"

_tracer = None
_tracer_provider: TracerProvider | None = None


def setup_tracing(
    service_name: str = "tidytabs",
    endpoint: str | None = None,
    console: bool = False,
    headers: dict[str, str] | None = None,
    exporter: SpanExporter | None = None,
    host_name: str | None = None,
    set_global: bool = False,
) -> None:
    """Start recording a span for every eviction pass.

    Call this once when the host loads the engine, before the first pass.
    Calling it again replaces the previous provider.

    Args:
        service_name: Service name attached to every span
        endpoint: OTLP gRPC endpoint (e.g., "http://localhost:4317")
        console: Print spans to stdout, for development
        headers: Extra headers for the OTLP exporter
        exporter: Any span exporter, flushed after each span ends
        host_name: Name of the host application, recorded on the resource
        set_global: Also install the provider as the process-wide default
    """
    global _tracer, _tracer_provider

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError:
        logger.warning(
            "OpenTelemetry not installed. Install with: pip install tidytabs[opentelemetry]"
        )
        return

    shutdown_tracing()

    attributes: dict[str, Any] = {"service.name": service_name}
    if host_name:
        attributes["tidytabs.host"] = host_name
    provider = TracerProvider(resource=Resource.create(attributes))

    sinks = []
    if exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        sinks.append(type(exporter).__name__)
    if endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, headers=headers))
        )
        sinks.append(f"OTLP {endpoint}")
    if console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        sinks.append("console")

    if sinks:
        logger.info(f"TidyTabs tracing enabled: {', '.join(sinks)}")
    else:
        logger.warning("TidyTabs tracing enabled but no exporter configured")

    if set_global:
        trace.set_tracer_provider(provider)

    _tracer_provider = provider
    _tracer = provider.get_tracer(TRACER_NAME)


def shutdown_tracing() -> None:
    """Flush pending spans and stop tracing."""
    global _tracer, _tracer_provider

    provider = _tracer_provider
    _tracer = None
    _tracer_provider = None
    if provider is not None:
        provider.shutdown()


def get_tracer():
    """Get the pass tracer, or None if tracing is off."""
    return _tracer


def is_tracing_enabled() -> bool:
    return _tracer is not None


def pass_attributes(report: Any) -> dict[str, Any]:
    """Flatten a pass report into span attributes.

    Anything without a ``to_dict`` yields no attributes.

    Args:
        report: The value returned by a traced pass

    Returns:
        Attribute names mapped to primitive values
    """
    to_dict = getattr(report, "to_dict", None)
    if not callable(to_dict):
        return {}

    data = to_dict()
    attrs: dict[str, Any] = {}
    if "closed_count" in data:
        attrs["tidytabs.closed"] = data["closed_count"]
    if "pruned" in data:
        attrs["tidytabs.pruned"] = data["pruned"]
    if "skipped" in data:
        attrs["tidytabs.skipped"] = data["skipped"]

    for outcome in data.get("outcomes", []):
        prefix = f"tidytabs.{outcome['policy']}"
        attrs[f"{prefix}.target"] = outcome["target"]
        attrs[f"{prefix}.closed"] = len(outcome["closed"])
        attrs[f"{prefix}.attempted"] = outcome["attempted"]
    return attrs
