"""Core data structures for window tracking."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from tidytabs.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class WindowKind(Enum):
    """Kinds of host windows."""

    DOCUMENT = "document"
    TOOL = "tool"


@dataclass(frozen=True)
class WindowHandle:
    """Opaque identity for an open window.

    Two handles are equal when the host assigned them the same id; the
    document path and kind are descriptive only.

    Attributes:
        id: Host-assigned identity, stable for the window's lifetime
        document_path: Full path of the backing document, if any
        kind: Whether this is a document window or a tool window
    """

    id: str
    document_path: str | None = field(default=None, compare=False)
    kind: WindowKind = field(default=WindowKind.DOCUMENT, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Window id must be a non-empty string")

    @property
    def is_tool_window(self) -> bool:
        return self.kind is WindowKind.TOOL

    def __str__(self) -> str:
        return self.document_path or self.id


@dataclass(frozen=True)
class ActivityRecord:
    """When a tracked window was last seen in use.

    Attributes:
        window: The tracked window
        last_seen_at: Unix timestamp of the last observed activity
    """

    window: WindowHandle
    last_seen_at: float

    def idle_seconds(self, now: float) -> float:
        """Seconds elapsed since the window was last seen."""
        return now - self.last_seen_at


@dataclass(frozen=True)
class WindowInfo:
    """A single open window as reported by the host.

    Attributes:
        handle: Identity of the window
        is_active: Whether the window currently receives user input
        is_pinned: Whether the user pinned the window's tab
        has_unsaved_changes: Whether the backing document has unsaved edits
        has_backing_document: Whether the window shows a document at all
    """

    handle: WindowHandle
    is_active: bool = False
    is_pinned: bool = False
    has_unsaved_changes: bool = False
    has_backing_document: bool = True


class WindowSnapshot:
    """Point-in-time view of the host's open document windows.

    The snapshot is built once per policy run and never changes afterwards,
    so walking it cannot race with the host opening or closing windows.
    """

    def __init__(self, windows: Iterable[WindowInfo], captured_at: float) -> None:
        """Initialize the snapshot.

        A host that reports several active windows is logged, and every one
        of them is treated as active, so the only effect is that fewer
        windows get closed.

        Args:
            windows: Open windows reported by the host
            captured_at: Unix timestamp at which the host was enumerated
        """
        self._windows: dict[WindowHandle, WindowInfo] = {}
        for info in windows:
            self._windows[info.handle] = info
        self._captured_at = captured_at

        active = [info.handle for info in self._windows.values() if info.is_active]
        if len(active) > 1:
            logger.warning(f"Host reported {len(active)} active windows, keeping all of them open")
        self._active_handles = frozenset(active)
        self._active = active[0] if len(active) == 1 else None

    @property
    def captured_at(self) -> float:
        return self._captured_at

    @property
    def active(self) -> WindowHandle | None:
        """Get the handle of the active window, if exactly one is flagged."""
        return self._active

    @property
    def active_handles(self) -> frozenset[WindowHandle]:
        """Get every window the host flagged as active."""
        return self._active_handles

    @property
    def unpinned_count(self) -> int:
        """Count the open windows that are not pinned."""
        return sum(1 for info in self._windows.values() if not info.is_pinned)

    @property
    def handles(self) -> frozenset[WindowHandle]:
        return frozenset(self._windows)

    def get(self, window: WindowHandle) -> WindowInfo | None:
        """Look up the live flags for a window.

        Args:
            window: The window to look up

        Returns:
            The window's info if it is open, None otherwise
        """
        return self._windows.get(window)

    def __contains__(self, window: object) -> bool:
        return window in self._windows

    def __iter__(self) -> Iterator[WindowInfo]:
        return iter(list(self._windows.values()))

    def __len__(self) -> int:
        return len(self._windows)

    def __repr__(self) -> str:
        return f"WindowSnapshot(windows={len(self)}, active={self._active!r})"
