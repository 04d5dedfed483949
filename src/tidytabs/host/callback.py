"""Host adapter backed by application-supplied callables."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

from tidytabs.config.settings import TabSettings
from tidytabs.core.exceptions import ConfigurationError, HostError
from tidytabs.core.window import WindowHandle, WindowInfo
from tidytabs.host.base import HostAdapter, HostEventListener

T = TypeVar("T")

_EVENTS = frozenset(
    {
        "on_window_activated",
        "on_document_saved",
        "on_document_closing",
        "on_solution_opened",
        "on_build_begin",
        "on_text_changed",
        "on_app_activated",
        "on_app_deactivated",
        "on_command",
    }
)


async def _resolve(value: T | Awaitable[T]) -> T:
    if inspect.isawaitable(value):
        return await value
    return value


class CallbackHost(HostAdapter):
    """Connects the engine to a real application through plain callables.

    The application supplies how to list windows, close one, and read the
    settings; each callable may be a regular function or a coroutine
    function. Events are forwarded by calling :meth:`emit` from the
    application's own event handlers.

    Example:
        ```python
        host = CallbackHost(
            enumerate_windows=editor.list_tabs,
            close_window=editor.close_tab,
            read_settings=lambda: prefs.tab_settings,
        )
        engine = TidyTabs(host)
        await engine.initialize()

        editor.on_focus(lambda new, old: host.emit("on_window_activated", new, old))
        ```
    """

    def __init__(
        self,
        enumerate_windows: Callable[[], Iterable[WindowInfo] | Awaitable[Iterable[WindowInfo]]],
        close_window: Callable[[WindowHandle, bool], bool | Awaitable[bool]],
        read_settings: Callable[[], TabSettings] | None = None,
    ) -> None:
        """Initialize the callback host.

        Args:
            enumerate_windows: Returns the open document windows
            close_window: Closes one window, returning True on success
            read_settings: Returns the current settings (defaults if omitted)
        """
        self._enumerate = enumerate_windows
        self._close = close_window
        self._read_settings = read_settings or TabSettings
        self._listeners: list[HostEventListener] = []

    async def enumerate_windows(self) -> list[WindowInfo]:
        """List the open document windows via the callback."""
        windows = await _resolve(self._enumerate())
        return list(windows)

    async def close_window(self, window: WindowHandle, discard_changes: bool) -> bool:
        """Close a window via the callback.

        Raises:
            HostError: If the callback raised
        """
        try:
            result = await _resolve(self._close(window, discard_changes))
        except HostError:
            raise
        except Exception as e:
            raise HostError(f"Closing {window} failed: {e}") from e
        return bool(result)

    def read_settings(self) -> TabSettings:
        """Read the current settings via the callback."""
        return self._read_settings()

    def subscribe(self, listener: HostEventListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: HostEventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: str, *args: Any) -> None:
        """Forward an application event to every listener.

        Args:
            event: Listener method name, e.g. "on_document_saved"
            *args: Arguments for the listener method

        Raises:
            ConfigurationError: If the event name is unknown
        """
        if event not in _EVENTS:
            raise ConfigurationError(f"Unknown host event: {event}")

        for listener in list(self._listeners):
            getattr(listener, event)(*args)
