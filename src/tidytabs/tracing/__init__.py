"""OpenTelemetry tracing support for TidyTabs.

Each eviction pass can be recorded as a span carrying the trigger that
started it and, per policy, how many windows it wanted to close and closed.

Example:
    ```python
    from tidytabs.tracing import setup_tracing

    # Development: print spans to the console
    setup_tracing(service_name="my-editor", console=True)

    # Production: send to an OTLP collector
    setup_tracing(service_name="my-editor", endpoint="http://localhost:4317")
    ```
"""

from __future__ import annotations

from tidytabs.tracing.decorator import trace_async_method
from tidytabs.tracing.tracing import (
    get_tracer,
    is_tracing_enabled,
    pass_attributes,
    setup_tracing,
    shutdown_tracing,
)

__all__ = [
    "setup_tracing",
    "shutdown_tracing",
    "get_tracer",
    "is_tracing_enabled",
    "pass_attributes",
    "trace_async_method",
]
