"""Configuration dataclasses for TidyTabs."""

from __future__ import annotations

from dataclasses import dataclass

from tidytabs.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class TabSettings:
    """User-facing settings that drive eviction.

    The host owns these values and may change them at any time; the engine
    reads a fresh copy at the start of every pass and never writes them.

    Attributes:
        purge_stale_tabs_on_save: Run a pass when a document is saved
        tab_timeout_minutes: Idle minutes after which a window is stale
        tab_close_threshold: Open-window count above which stale windows close
        max_open_tabs: Cap on unpinned windows (0 disables the cap)
    """

    purge_stale_tabs_on_save: bool = True
    tab_timeout_minutes: int = 30
    tab_close_threshold: int = 10
    max_open_tabs: int = 0

    def __post_init__(self) -> None:
        """Validate the settings after creation."""
        if self.tab_timeout_minutes <= 0:
            raise ConfigurationError(
                f"tab_timeout_minutes must be positive, got {self.tab_timeout_minutes}"
            )
        if self.tab_close_threshold < 0:
            raise ConfigurationError(
                f"tab_close_threshold must be non-negative, got {self.tab_close_threshold}"
            )
        if self.max_open_tabs < 0:
            raise ConfigurationError(
                f"max_open_tabs must be non-negative, got {self.max_open_tabs}"
            )

    @property
    def tab_timeout_seconds(self) -> float:
        return self.tab_timeout_minutes * 60.0

    @property
    def cap_enabled(self) -> bool:
        return self.max_open_tabs > 0


@dataclass(frozen=True)
class EngineConfig:
    """Tunables for the eviction engine itself.

    Attributes:
        settle_delay: Seconds to wait after a trigger before evaluating
        discard_changes_on_close: Passed to the host when closing a window
        prune_untracked: Drop records of windows that are no longer open
    """

    settle_delay: float = 0.1
    discard_changes_on_close: bool = True
    prune_untracked: bool = True

    def __post_init__(self) -> None:
        if self.settle_delay < 0:
            raise ConfigurationError(f"settle_delay must be non-negative, got {self.settle_delay}")
