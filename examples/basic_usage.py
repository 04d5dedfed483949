"""Basic usage example for TidyTabs.

This example drives the engine with the in-memory host, the same way an
editor would feed it events while you work.
"""

import asyncio
import logging


async def main():
    """Run a basic usage demonstration."""
    from tidytabs import TabSettings, TidyTabs
    from tidytabs.config import instant_engine_config
    from tidytabs.host import InMemoryHost

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    # A fake clock lets the demo skip ahead in time
    now = [0.0]

    host = InMemoryHost(
        settings=TabSettings(
            tab_timeout_minutes=20,
            tab_close_threshold=4,
            max_open_tabs=6,
        )
    )
    engine = TidyTabs(host, config=instant_engine_config(), clock=lambda: now[0])
    await engine.initialize()

    print("=== TidyTabs Basic Usage Demo ===\n")

    print("Opening eight files over the course of an hour...")
    windows = []
    for i in range(8):
        window = host.open_window(f"src/module_{i}.py")
        host.activate(window)
        windows.append(window)
        now[0] += 8 * 60
    await engine.drain()

    print(f"Open tabs: {[str(w) for w in host.open_windows]}")

    # Pin one tab and leave edits unsaved in another
    host.set_pinned(windows[4])
    host.edit(windows[5])

    print("\n--- Stepping away for two hours ---")
    host.switch_away()
    now[0] += 2 * 60 * 60
    host.switch_back()
    await engine.drain()

    print("\n--- Saving the current file ---")
    host.save(windows[-1])
    await engine.drain()

    report = engine.last_report
    print(f"Closed: {[str(w) for w in report.closed]}")
    print(f"Open tabs: {[str(w) for w in host.open_windows]}")

    print("\n--- Statistics ---")
    stats = engine.get_stats()
    print(f"Tracked windows: {stats['tracked_windows']}")
    print(f"Passes run: {stats['passes_run']}")
    print(f"Windows closed: {stats['windows_closed']}")

    await engine.close()
    print("\nDemo complete!")


if __name__ == "__main__":
    asyncio.run(main())
