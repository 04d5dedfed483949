"""Core components of the TidyTabs library."""

from tidytabs.core.exceptions import (
    CloseRejectedError,
    ConfigurationError,
    HostError,
    TidyTabsError,
    ValidationError,
)
from tidytabs.core.window import (
    ActivityRecord,
    WindowHandle,
    WindowInfo,
    WindowKind,
    WindowSnapshot,
)

__all__ = [
    "CloseRejectedError",
    "ConfigurationError",
    "HostError",
    "TidyTabsError",
    "ValidationError",
    "ActivityRecord",
    "WindowHandle",
    "WindowInfo",
    "WindowKind",
    "WindowSnapshot",
]
