"""Stale-window reclamation policy."""

from __future__ import annotations

from tidytabs.config.settings import TabSettings
from tidytabs.core.window import ActivityRecord, WindowHandle, WindowSnapshot


class StaleWindowPolicy:
    """Closes windows that have not been used for longer than the timeout.

    The policy only acts while more windows are open than the close
    threshold, and then closes at most the excess, most stale first.
    """

    @property
    def name(self) -> str:
        """Get the name of this policy."""
        return "stale"

    def close_target(self, snapshot: WindowSnapshot, settings: TabSettings) -> int:
        """Number of windows open above the close threshold.

        Args:
            snapshot: Currently open windows
            settings: Settings read for this pass

        Returns:
            The excess, or zero if at or below the threshold
        """
        return max(0, len(snapshot) - settings.tab_close_threshold)

    def select_candidates(
        self,
        snapshot: WindowSnapshot,
        records: list[ActivityRecord],
        settings: TabSettings,
        now: float,
    ) -> list[WindowHandle]:
        """Select open windows idle for longer than the timeout.

        Args:
            snapshot: Currently open windows
            records: Activity records sorted oldest first
            settings: Settings read for this pass
            now: Current Unix time

        Returns:
            Stale open windows, oldest activity first
        """
        timeout = settings.tab_timeout_seconds
        return [
            record.window
            for record in records
            if record.idle_seconds(now) > timeout and record.window in snapshot
        ]
