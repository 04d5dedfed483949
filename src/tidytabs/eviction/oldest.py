"""Oldest-window cap policy - keeps unpinned windows under a maximum."""

from __future__ import annotations

from tidytabs.config.settings import TabSettings
from tidytabs.core.window import ActivityRecord, WindowHandle, WindowSnapshot


class OldestWindowPolicy:
    """Closes the least recently used windows once the cap is exceeded.

    This policy is driven by capacity alone: the timeout plays no part in
    which windows are chosen.
    """

    @property
    def name(self) -> str:
        """Get the name of this policy."""
        return "oldest"

    def close_target(self, snapshot: WindowSnapshot, settings: TabSettings) -> int:
        """Number of unpinned windows open above the cap.

        Args:
            snapshot: Currently open windows
            settings: Settings read for this pass

        Returns:
            The overflow, or zero if the cap is disabled or not reached
        """
        if not settings.cap_enabled:
            return 0
        return max(0, snapshot.unpinned_count - settings.max_open_tabs)

    def select_candidates(
        self,
        snapshot: WindowSnapshot,
        records: list[ActivityRecord],
        settings: TabSettings,
        now: float,
    ) -> list[WindowHandle]:
        # Records are already oldest first
        return [record.window for record in records if record.window in snapshot]
