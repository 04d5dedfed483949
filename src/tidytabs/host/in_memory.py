"""In-memory host for testing and development."""

from __future__ import annotations

from dataclasses import dataclass, replace
from itertools import count

from tidytabs.config.settings import TabSettings
from tidytabs.core.exceptions import CloseRejectedError, HostError
from tidytabs.core.window import WindowHandle, WindowInfo, WindowKind
from tidytabs.host.base import HostAdapter, HostEventListener


@dataclass
class _FakeWindow:
    info: WindowInfo
    order: int


class InMemoryHost(HostAdapter):
    """A simulated host application.

    Windows live in a dict and every user action is a method that updates
    that state and fires the matching event, the way a real editor would.
    Closing can be made to fail or be declined for chosen windows.

    Example:
        ```python
        host = InMemoryHost()
        a = host.open_window("a.py")
        b = host.open_window("b.py")
        host.activate(b)
        ```
    """

    def __init__(self, settings: TabSettings | None = None) -> None:
        """Initialize the in-memory host.

        Args:
            settings: Initial settings returned by read_settings
        """
        self.settings = settings or TabSettings()
        self._windows: dict[WindowHandle, _FakeWindow] = {}
        self._listeners: list[HostEventListener] = []
        self._ids = count(1)
        self._failing: set[WindowHandle] = set()
        self._declining: set[WindowHandle] = set()
        self.close_calls: list[WindowHandle] = []
        self.closed: list[WindowHandle] = []

    # -- capabilities used by the engine ------------------------------------

    async def enumerate_windows(self) -> list[WindowInfo]:
        """List the open document windows."""
        return [
            w.info
            for w in sorted(self._windows.values(), key=lambda w: w.order)
            if not w.info.handle.is_tool_window
        ]

    async def close_window(self, window: WindowHandle, discard_changes: bool) -> bool:
        """Close a window, honouring any configured failure."""
        self.close_calls.append(window)

        if window in self._failing:
            raise CloseRejectedError(f"Host refused to close {window}")
        if window in self._declining:
            return False

        fake = self._windows.get(window)
        if fake is None:
            return False
        if fake.info.has_unsaved_changes and not discard_changes:
            raise HostError(f"{window} has unsaved changes")

        del self._windows[window]
        self.closed.append(window)
        return True

    def read_settings(self) -> TabSettings:
        """Return the current settings."""
        return self.settings

    def subscribe(self, listener: HostEventListener) -> None:
        """Start delivering events to a listener."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: HostEventListener) -> None:
        """Stop delivering events to a listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    # -- simulation ---------------------------------------------------------

    def open_window(
        self,
        document_path: str | None = None,
        pinned: bool = False,
        unsaved: bool = False,
        tool: bool = False,
    ) -> WindowHandle:
        """Open a new window without giving it focus.

        Args:
            document_path: Path of the backing document (None for none)
            pinned: Whether the tab is pinned
            unsaved: Whether the document has unsaved changes
            tool: Open a tool window rather than a document window

        Returns:
            The new window's handle
        """
        order = next(self._ids)
        handle = WindowHandle(
            id=f"window-{order}",
            document_path=document_path,
            kind=WindowKind.TOOL if tool else WindowKind.DOCUMENT,
        )
        info = WindowInfo(
            handle=handle,
            is_pinned=pinned,
            has_unsaved_changes=unsaved,
            has_backing_document=document_path is not None,
        )
        self._windows[handle] = _FakeWindow(info=info, order=order)
        return handle

    def activate(self, window: WindowHandle) -> None:
        """Give a window focus and fire window-activated."""
        lost = self.active
        for handle, fake in self._windows.items():
            fake.info = replace(fake.info, is_active=handle == window)
        self._emit("on_window_activated", window, lost)

    def set_pinned(self, window: WindowHandle, pinned: bool = True) -> None:
        self._update(window, is_pinned=pinned)

    def edit(self, window: WindowHandle) -> None:
        """Make unsaved edits to a window's document and fire text-changed."""
        self._update(window, has_unsaved_changes=True)
        self._emit("on_text_changed")

    def save(self, window: WindowHandle) -> None:
        """Save a window's document and fire document-saved."""
        self._update(window, has_unsaved_changes=False)
        self._emit("on_document_saved", window)

    def close_document(self, window: WindowHandle) -> None:
        """Close a window as the user would, firing document-closing first."""
        if window.document_path is not None:
            self._emit("on_document_closing", window.document_path)
        self._windows.pop(window, None)

    def open_solution(self) -> None:
        self._emit("on_solution_opened")

    def begin_build(self) -> None:
        self._emit("on_build_begin")

    def invoke_command(self) -> None:
        self._emit("on_command")

    def switch_away(self) -> None:
        """Send the application to the background."""
        self._emit("on_app_deactivated")

    def switch_back(self) -> None:
        """Bring the application back to the foreground."""
        self._emit("on_app_activated")

    def fail_close(self, window: WindowHandle, fail: bool = True) -> None:
        """Make closing a window raise a host error."""
        if fail:
            self._failing.add(window)
        else:
            self._failing.discard(window)

    def decline_close(self, window: WindowHandle, decline: bool = True) -> None:
        """Make closing a window return False."""
        if decline:
            self._declining.add(window)
        else:
            self._declining.discard(window)

    @property
    def active(self) -> WindowHandle | None:
        for handle, fake in self._windows.items():
            if fake.info.is_active:
                return handle
        return None

    def is_open(self, window: WindowHandle) -> bool:
        return window in self._windows

    @property
    def open_windows(self) -> list[WindowHandle]:
        return [w.info.handle for w in sorted(self._windows.values(), key=lambda w: w.order)]

    def _update(self, window: WindowHandle, **flags: bool) -> None:
        fake = self._windows.get(window)
        if fake is None:
            raise HostError(f"No such window: {window}")
        fake.info = replace(fake.info, **flags)

    def _emit(self, event: str, *args: object) -> None:
        for listener in list(self._listeners):
            getattr(listener, event)(*args)
