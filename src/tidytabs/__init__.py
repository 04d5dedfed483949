"""TidyTabs - activity-based eviction of open document windows.

This library keeps an editor's tab strip under control:
- Stale reclamation: windows unused for longer than a timeout are closed
  once more than a threshold of windows are open
- Oldest-window cap: the least recently used windows are closed whenever
  the number of unpinned windows exceeds a maximum

Pinned windows, the active window and unsaved documents are never closed,
and time the whole application spends in the background does not count
towards a window going stale.

Example:
    ```python
    from tidytabs import TidyTabs, capped_settings
    from tidytabs.host import InMemoryHost

    host = InMemoryHost(settings=capped_settings(max_open_tabs=5))
    engine = TidyTabs(host)
    await engine.initialize()

    for name in ["a.py", "b.py", "c.py"]:
        host.activate(host.open_window(name))

    report = await engine.tidy()
    await engine.close()
    ```
"""

from __future__ import annotations

from tidytabs.activity import ActivityStore, IdleCompensator
from tidytabs.config.defaults import (
    capped_settings,
    default_engine_config,
    default_settings,
    instant_engine_config,
    manual_only_settings,
)
from tidytabs.config.settings import EngineConfig, TabSettings
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
from tidytabs.eviction import (
    CloseGuard,
    EvictionOutcome,
    OldestWindowPolicy,
    StaleWindowPolicy,
    create_eviction_policy,
)
from tidytabs.host import CallbackHost, InMemoryHost, create_host
from tidytabs.tidytabs import PassReport, TidyTabs

__version__ = "1.10.1"

__all__ = [
    # Engine
    "TidyTabs",
    "PassReport",
    # Activity
    "ActivityStore",
    "IdleCompensator",
    # Eviction
    "CloseGuard",
    "EvictionOutcome",
    "OldestWindowPolicy",
    "StaleWindowPolicy",
    "create_eviction_policy",
    # Hosts
    "CallbackHost",
    "InMemoryHost",
    "create_host",
    # Config
    "TabSettings",
    "EngineConfig",
    "default_settings",
    "capped_settings",
    "manual_only_settings",
    "default_engine_config",
    "instant_engine_config",
    # Data model
    "ActivityRecord",
    "WindowHandle",
    "WindowInfo",
    "WindowKind",
    "WindowSnapshot",
    # Exceptions
    "TidyTabsError",
    "ConfigurationError",
    "HostError",
    "CloseRejectedError",
    "ValidationError",
]
