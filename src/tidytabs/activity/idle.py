"""Compensation for time the host application spent in the background."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class IdleCompensator:
    """Tracks the host's last action and measures background intervals.

    When the application regains the foreground, the time since the last
    recorded action is reported as idle time. Shifting every activity record
    forward by that amount makes staleness count only the time the user was
    actually working in the application.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_action_at: float | None = None

    @property
    def last_action_at(self) -> float | None:
        """Get the time of the last recorded action, if any."""
        return self._last_action_at

    def note_activity(self, now: float) -> None:
        """Record that the user did something at ``now``."""
        with self._lock:
            self._last_action_at = now

    def begin_foreground(self, now: float) -> float:
        """Measure the idle interval ending at ``now`` and restart tracking.

        Args:
            now: Time at which the application regained the foreground

        Returns:
            Seconds to shift activity records by (0.0 if none)
        """
        with self._lock:
            last = self._last_action_at
            self._last_action_at = now

        if last is None:
            return 0.0

        idle = now - last
        if idle <= 0:
            return 0.0

        logger.debug(f"Application was idle for {idle:.1f}s")
        return idle
