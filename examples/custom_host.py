"""Example of connecting TidyTabs to your own editor through CallbackHost."""

import asyncio
import logging
from dataclasses import dataclass, field


@dataclass
class Tab:
    """A tab in a toy editor."""

    path: str
    pinned: bool = False
    dirty: bool = False


@dataclass
class ToyEditor:
    """Stands in for a real application's tab model."""

    tabs: dict[str, Tab] = field(default_factory=dict)
    focused: str | None = None


async def main():
    """Demonstrate wiring an application to the engine."""
    from tidytabs import CallbackHost, TidyTabs, WindowHandle, WindowInfo, capped_settings

    logging.basicConfig(level=logging.INFO)

    editor = ToyEditor()

    def list_tabs():
        return [
            WindowInfo(
                handle=WindowHandle(id=path, document_path=path),
                is_active=path == editor.focused,
                is_pinned=tab.pinned,
                has_unsaved_changes=tab.dirty,
            )
            for path, tab in editor.tabs.items()
        ]

    def close_tab(window, discard_changes):
        return editor.tabs.pop(window.id, None) is not None

    host = CallbackHost(
        enumerate_windows=list_tabs,
        close_window=close_tab,
        read_settings=lambda: capped_settings(max_open_tabs=3),
    )
    engine = TidyTabs(host)
    await engine.initialize()

    print("=== Custom Host Example ===\n")

    previous = None
    for name in ["README.md", "setup.cfg", "app.py", "views.py", "models.py"]:
        editor.tabs[name] = Tab(path=name)
        editor.focused = name
        handle = WindowHandle(id=name, document_path=name)
        # Forward the editor's focus event to the engine
        host.emit("on_window_activated", handle, previous)
        previous = handle
        await asyncio.sleep(0.01)

    await engine.drain()

    print(f"Tabs left open: {list(editor.tabs)}")

    await engine.close()
    print("\nCustom host example complete!")


if __name__ == "__main__":
    asyncio.run(main())
