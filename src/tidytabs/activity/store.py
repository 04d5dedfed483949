"""Thread-safe store of per-window activity timestamps."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable

from tidytabs.core.window import ActivityRecord, WindowHandle

logger = logging.getLogger(__name__)


class ActivityStore:
    """Maps each tracked window to the last time it was seen in use.

    Every operation takes the same lock for a short, bounded section, so
    touches arriving from event callbacks on any thread never interleave
    with a snapshot being copied out for an eviction pass.

    Example:
        ```python
        store = ActivityStore()
        store.touch(window)
        oldest_first = store.snapshot()
        ```
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        """Initialize the activity store.

        Args:
            clock: Function returning the current Unix time
        """
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._last_seen: dict[WindowHandle, float] = {}

    def touch(self, window: WindowHandle | None, timestamp: float | None = None) -> bool:
        """Record activity on a window, creating its record if needed.

        Tool windows and None are ignored.

        Args:
            window: The window that was used
            timestamp: When it was used (defaults to now)

        Returns:
            True if a record was written
        """
        if window is None or window.is_tool_window:
            return False

        seen_at = self._clock() if timestamp is None else timestamp
        with self._lock:
            self._last_seen[window] = seen_at
        return True

    def seed(self, window: WindowHandle | None, timestamp: float | None = None) -> bool:
        """Start tracking a window unless it is already tracked.

        Args:
            window: The window to track
            timestamp: Initial activity time (defaults to now)

        Returns:
            True if a new record was created
        """
        if window is None or window.is_tool_window:
            return False

        seen_at = self._clock() if timestamp is None else timestamp
        with self._lock:
            if window in self._last_seen:
                return False
            self._last_seen[window] = seen_at
            return True

    def remove(self, window: WindowHandle) -> bool:
        """Stop tracking a window.

        Args:
            window: The window to forget

        Returns:
            True if a record was removed, False if the window was untracked
        """
        with self._lock:
            return self._last_seen.pop(window, None) is not None

    def remove_document(self, document_path: str) -> list[WindowHandle]:
        """Stop tracking every window that shows the given document.

        Args:
            document_path: Full path of the document being closed

        Returns:
            The windows whose records were removed
        """
        with self._lock:
            removed = [w for w in self._last_seen if w.document_path == document_path]
            for window in removed:
                del self._last_seen[window]
        return removed

    def get(self, window: WindowHandle) -> float | None:
        """Get the last activity time of a window, or None if untracked."""
        with self._lock:
            return self._last_seen.get(window)

    def snapshot(self) -> list[ActivityRecord]:
        """Copy out every record, oldest activity first.

        Returns:
            A point-in-time list of records sorted by last_seen_at
        """
        with self._lock:
            records = [ActivityRecord(w, t) for w, t in self._last_seen.items()]
        records.sort(key=lambda r: r.last_seen_at)
        return records

    def shift_all(self, delta: float, not_after: float | None = None) -> int:
        """Move records forward in time by the same amount.

        Args:
            delta: Seconds to add to each timestamp
            not_after: Only shift records last seen at or before this time

        Returns:
            The number of records shifted
        """
        if delta <= 0:
            return 0

        shifted = 0
        with self._lock:
            for window, seen_at in self._last_seen.items():
                if not_after is not None and seen_at > not_after:
                    continue
                self._last_seen[window] = seen_at + delta
                shifted += 1
        return shifted

    def prune(self, live: Iterable[WindowHandle], seen_before: float) -> list[WindowHandle]:
        """Drop records for windows that are no longer open.

        Records touched after ``seen_before`` are kept even when the window is
        missing from ``live``, since the window may have opened after the
        host was enumerated.

        Args:
            live: Windows currently open in the host
            seen_before: Time at which ``live`` was captured

        Returns:
            The windows whose records were dropped
        """
        live_set = set(live)
        with self._lock:
            dead = [
                w
                for w, seen_at in self._last_seen.items()
                if w not in live_set and seen_at <= seen_before
            ]
            for window in dead:
                del self._last_seen[window]

        if dead:
            logger.debug(f"Pruned {len(dead)} records for windows that are no longer open")
        return dead

    def clear(self) -> None:
        """Forget every record."""
        with self._lock:
            self._last_seen.clear()

    def __contains__(self, window: object) -> bool:
        with self._lock:
            return window in self._last_seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_seen)
