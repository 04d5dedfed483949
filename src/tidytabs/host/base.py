"""Host adapter protocols - the engine's only view of the application."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from tidytabs.config.settings import TabSettings
from tidytabs.core.window import WindowHandle, WindowInfo


class HostEventListener(Protocol):
    """Protocol for receivers of host application events.

    Every method is called on the host's interaction thread and must
    return promptly without raising.
    """

    def on_window_activated(self, gained: WindowHandle | None, lost: WindowHandle | None) -> None:
        """A window gained focus, optionally taking it from another."""
        ...

    def on_document_saved(self, window: WindowHandle | None) -> None:
        """A document was saved."""
        ...

    def on_document_closing(self, document_path: str) -> None:
        """A document is about to close."""
        ...

    def on_solution_opened(self) -> None:
        """A solution or workspace finished opening."""
        ...

    def on_build_begin(self) -> None:
        """A build started."""
        ...

    def on_text_changed(self) -> None:
        """The user edited text in any editor."""
        ...

    def on_app_activated(self) -> None:
        """The application regained the foreground."""
        ...

    def on_app_deactivated(self) -> None:
        """The application lost the foreground."""
        ...

    def on_command(self) -> None:
        """The user invoked the tidy command explicitly."""
        ...


class HostAdapter(Protocol):
    """Protocol defining the capabilities the engine needs from its host.

    Window enumeration and closing must happen on the host's interaction
    thread, which is the event loop the engine runs on.
    """

    @abstractmethod
    async def enumerate_windows(self) -> list[WindowInfo]:
        """List the open document windows with their current flags.

        Returns:
            One WindowInfo per open document window
        """
        ...

    @abstractmethod
    async def close_window(self, window: WindowHandle, discard_changes: bool) -> bool:
        """Close a window.

        Args:
            window: The window to close
            discard_changes: Close without prompting to save

        Returns:
            True if the window was closed, False if the host declined

        Raises:
            HostError: If the host failed while closing
        """
        ...

    @abstractmethod
    def read_settings(self) -> TabSettings:
        """Read the current user settings.

        Returns:
            The settings in effect right now
        """
        ...

    @abstractmethod
    def subscribe(self, listener: HostEventListener) -> None:
        """Start delivering host events to a listener."""
        ...

    @abstractmethod
    def unsubscribe(self, listener: HostEventListener) -> None:
        """Stop delivering host events to a listener."""
        ...
