"""Tracing decorator for instrumenting eviction passes."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from tidytabs.tracing.tracing import get_tracer, is_tracing_enabled, pass_attributes

P = ParamSpec("P")
T = TypeVar("T")


def trace_async_method(
    span_name: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator for tracing async methods.

    When tracing is off the wrapped coroutine runs untouched.

    Args:
        span_name: Name for the span. If None, uses the method name.
        attributes: Static attributes to add to all spans.

    Returns:
        Decorated async function that creates a span when called.

    Example:
        ```python
        class Engine:
            @trace_async_method("tidytabs.pass")
            async def tidy(self, trigger="manual"):
                ...
        ```
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            if not is_tracing_enabled():
                return await func(*args, **kwargs)

            tracer = get_tracer()
            if tracer is None:
                return await func(*args, **kwargs)

            name = span_name or f"{func.__module__}.{func.__name__}"
            attrs = dict(attributes) if attributes else {}

            with tracer.start_as_current_span(name) as span:
                for key, value in kwargs.items():
                    if value is not None and not key.startswith("_"):
                        attrs[key] = (
                            str(value) if not isinstance(value, (int, float, bool)) else value
                        )

                for key, value in attrs.items():
                    span.set_attribute(key, value)

                result = await func(*args, **kwargs)

                for key, value in pass_attributes(result).items():
                    span.set_attribute(key, value)

                return result

        return wrapper

    return decorator


__all__ = [
    "trace_async_method",
]
