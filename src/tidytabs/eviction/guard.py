"""Admissibility checks and the close side effect."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tidytabs.activity.store import ActivityStore
from tidytabs.core.window import WindowHandle, WindowInfo, WindowSnapshot

if TYPE_CHECKING:
    from tidytabs.host.base import HostAdapter

logger = logging.getLogger(__name__)


class CloseGuard:
    """Decides whether a window may be closed and closes it.

    A window may be closed when it is neither active nor pinned and its
    document, if it has one, is saved. The activity record is removed only
    after the host confirms the close, so a window whose close fails stays a
    candidate for later passes.
    """

    def __init__(
        self,
        host: HostAdapter,
        store: ActivityStore,
        discard_changes: bool = True,
    ) -> None:
        """Initialize the guard.

        Args:
            host: Host used to close windows
            store: Activity store to update after a successful close
            discard_changes: Passed through to the host's close call
        """
        self._host = host
        self._store = store
        self._discard_changes = discard_changes

    @staticmethod
    def is_closeable(info: WindowInfo) -> bool:
        """Check if a window may be closed.

        Args:
            info: The window's live flags

        Returns:
            True if closing the window is allowed
        """
        if info.is_active or info.is_pinned:
            return False
        return not info.has_backing_document or not info.has_unsaved_changes

    async def close(self, window: WindowHandle, snapshot: WindowSnapshot) -> bool:
        """Close a window if it is allowed.

        Windows missing from the snapshot are skipped silently. Host errors
        are logged and leave the activity record in place.

        Args:
            window: The window to close
            snapshot: Live flags for the open windows

        Returns:
            True if the window was actually closed
        """
        info = snapshot.get(window)
        if info is None:
            return False

        if not self.is_closeable(info):
            logger.debug(f"Keeping {window}: active, pinned or unsaved")
            return False

        try:
            closed = await self._host.close_window(window, self._discard_changes)
        except Exception as e:
            logger.warning(f"Failed to close {window}: {e}")
            return False

        if not closed:
            logger.warning(f"Host declined to close {window}")
            return False

        self._store.remove(window)
        logger.debug(f"Closed {window}")
        return True
