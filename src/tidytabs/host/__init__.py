"""Host adapter implementations and factory."""

from __future__ import annotations

from typing import Any

from tidytabs.host.base import HostAdapter, HostEventListener
from tidytabs.host.callback import CallbackHost
from tidytabs.host.in_memory import InMemoryHost


def create_host(host_type: str, **kwargs: Any) -> HostAdapter:
    """Create a host adapter by type name.

    Args:
        host_type: The type of host to create
            - "in_memory" or "memory": InMemoryHost
            - "callback": CallbackHost
        **kwargs: Additional arguments passed to the host constructor

    Returns:
        A host adapter instance

    Raises:
        ValueError: If the host type is unknown
    """
    host_type = host_type.lower().replace("-", "_")

    if host_type in ("in_memory", "memory"):
        return InMemoryHost(settings=kwargs.get("settings"))

    if host_type == "callback":
        # CallbackHost needs at least enumerate_windows and close_window
        return CallbackHost(
            enumerate_windows=kwargs["enumerate_windows"],
            close_window=kwargs["close_window"],
            read_settings=kwargs.get("read_settings"),
        )

    raise ValueError(f"Unknown host type: {host_type}")


__all__ = [
    "CallbackHost",
    "HostAdapter",
    "HostEventListener",
    "InMemoryHost",
    "create_host",
]
