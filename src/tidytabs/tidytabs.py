"""TidyTabs main engine class."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

from tidytabs.activity.idle import IdleCompensator
from tidytabs.activity.store import ActivityStore
from tidytabs.config.defaults import default_engine_config
from tidytabs.config.settings import EngineConfig, TabSettings
from tidytabs.core.window import WindowHandle, WindowSnapshot
from tidytabs.eviction.base import EvictionOutcome, EvictionPolicy, apply_policy
from tidytabs.eviction.guard import CloseGuard
from tidytabs.eviction.oldest import OldestWindowPolicy
from tidytabs.eviction.stale import StaleWindowPolicy
from tidytabs.host.base import HostAdapter
from tidytabs.tracing import trace_async_method

logger = logging.getLogger(__name__)


@dataclass
class PassReport:
    """Summary of one eviction pass.

    Attributes:
        trigger: What started the pass (e.g. "window_activated")
        started_at: Unix time the pass acquired the lock
        outcomes: One outcome per policy, in the order they ran
        pruned: Records dropped because their window was gone
        skipped: True if the pass did nothing because of the settings
    """

    trigger: str
    started_at: float
    outcomes: list[EvictionOutcome] = field(default_factory=list)
    pruned: int = 0
    skipped: bool = False

    @property
    def closed(self) -> list[WindowHandle]:
        """All windows closed during the pass, in closing order."""
        return [window for outcome in self.outcomes for window in outcome.closed]

    @property
    def closed_count(self) -> int:
        return len(self.closed)

    def outcome(self, policy: str) -> EvictionOutcome | None:
        """Get the outcome of a policy by name."""
        for outcome in self.outcomes:
            if outcome.policy == policy:
                return outcome
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "trigger": self.trigger,
            "started_at": self.started_at,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
            "closed_count": self.closed_count,
            "pruned": self.pruned,
            "skipped": self.skipped,
        }


class TidyTabs:
    """Activity-based window eviction engine.

    TidyTabs listens to the host's events, remembers when each document
    window was last used, and closes windows that went stale or that push
    the number of open tabs over the cap. Pinned windows, the active window
    and windows with unsaved changes are never closed.

    Event handlers return immediately. Anything that has to talk to the host
    runs as a task on the event loop, waits a short settle delay, then takes
    the pass lock so only one pass runs at a time.

    Example:
        ```python
        from tidytabs import TidyTabs
        from tidytabs.host import InMemoryHost

        host = InMemoryHost()
        engine = TidyTabs(host)
        await engine.initialize()

        host.activate(host.open_window("main.py"))
        await engine.drain()

        await engine.close()
        ```
    """

    def __init__(
        self,
        host: HostAdapter,
        config: EngineConfig | None = None,
        store: ActivityStore | None = None,
        policies: list[EvictionPolicy] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            host: Adapter for the host application
            config: Engine tunables
            store: Pre-populated activity store (for advanced use)
            policies: Policies to run on each pass, in order
            clock: Function returning the current Unix time
        """
        self._host = host
        self._config = config or default_engine_config()
        self._clock = clock or time.time
        self._store = store if store is not None else ActivityStore(clock=self._clock)
        self._idle = IdleCompensator()
        self._guard = CloseGuard(host, self._store, self._config.discard_changes_on_close)
        self._policies: list[EvictionPolicy] = (
            policies if policies is not None else [StaleWindowPolicy(), OldestWindowPolicy()]
        )

        self._pass_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._tasks: set[asyncio.Task[None]] = set()

        self._passes_run = 0
        self._windows_closed = 0
        self._last_report: PassReport | None = None
        self._initialized = False

    async def initialize(self) -> None:
        """Bind to the running event loop and subscribe to host events."""
        if self._initialized:
            return

        self._loop = asyncio.get_running_loop()
        self._host.subscribe(self)
        self._initialized = True
        logger.info("TidyTabs initialized")

    async def close(self) -> None:
        """Unsubscribe from the host and wait for scheduled passes."""
        self._host.unsubscribe(self)
        await self.drain()
        self._initialized = False
        logger.info("TidyTabs closed")

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def store(self) -> ActivityStore:
        """Get the activity store."""
        return self._store

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def last_report(self) -> PassReport | None:
        """Get the report of the most recent pass."""
        return self._last_report

    @property
    def pending(self) -> int:
        """Number of scheduled tasks that have not finished yet."""
        return len(self._tasks)

    # -- host events ----------------------------------------------------------

    def on_window_activated(self, gained: WindowHandle | None, lost: WindowHandle | None) -> None:
        """Record activity on both windows and schedule a pass."""
        try:
            now = self._clock()
            self._idle.note_activity(now)
            self._store.touch(gained, now)
            if lost is not None:
                self._store.touch(lost, now)

            self._schedule_pass("window_activated")
        except Exception:
            logger.exception("TidyTabs error on WindowActivated")

    def on_document_saved(self, window: WindowHandle | None) -> None:
        """Schedule a pass that only runs if purging on save is enabled."""
        try:
            self._idle.note_activity(self._clock())
            self._schedule_pass("document_saved", save_triggered=True)
        except Exception:
            logger.exception("TidyTabs error on DocumentSaved")

    def on_document_closing(self, document_path: str) -> None:
        """Stop tracking a document the user is closing."""
        try:
            removed = self._store.remove_document(document_path)
            if removed:
                logger.debug(f"Stopped tracking {len(removed)} windows for {document_path}")
        except Exception:
            logger.exception("TidyTabs error on DocumentClosing")

    def on_solution_opened(self) -> None:
        """Start tracking the windows that were restored with the solution."""
        try:
            self._spawn(self._seed_open_windows(), "SolutionOpened")
        except Exception:
            logger.exception("TidyTabs error on SolutionOpened")

    def on_build_begin(self) -> None:
        try:
            self._idle.note_activity(self._clock())
            self._schedule_pass("build_begin")
        except Exception:
            logger.exception("TidyTabs error on BuildBegin")

    def on_text_changed(self) -> None:
        try:
            self._idle.note_activity(self._clock())
        except Exception:
            logger.exception("TidyTabs error on TextChanged")

    def on_app_deactivated(self) -> None:
        try:
            self._idle.note_activity(self._clock())
        except Exception:
            logger.exception("TidyTabs error on AppDeactivated")

    def on_app_activated(self) -> None:
        """Discount the time the application spent in the background."""
        try:
            now = self._clock()
            idle = self._idle.begin_foreground(now)
            if idle > 0:
                self.compensate_idle(idle, regained_at=now)
        except Exception:
            logger.exception("TidyTabs error on AppActivated")

    def on_command(self) -> None:
        try:
            logger.info("Tidy Tabs command invoked")
            self._idle.note_activity(self._clock())
            self._schedule_pass("command")
        except Exception:
            logger.exception("TidyTabs error on Command")

    # -- passes ---------------------------------------------------------------

    @trace_async_method("tidytabs.pass")
    async def tidy(self, trigger: str = "manual", save_triggered: bool = False) -> PassReport:
        """Run one eviction pass now.

        Stale windows are reclaimed first, then the oldest windows are closed
        until the cap is met. Settings are read fresh for every pass.

        Args:
            trigger: Label describing what started the pass
            save_triggered: Skip the pass unless purging on save is enabled

        Returns:
            A report of what was closed
        """
        async with self._pass_lock:
            settings = self._host.read_settings()
            report = PassReport(trigger=trigger, started_at=self._clock())

            if save_triggered and not settings.purge_stale_tabs_on_save:
                report.skipped = True
                self._last_report = report
                return report

            snapshot: WindowSnapshot | None = None
            for policy in self._policies:
                snapshot = await self._capture()
                outcome = await apply_policy(
                    policy,
                    snapshot,
                    self._store.snapshot(),
                    settings,
                    self._guard,
                    self._clock(),
                )
                report.outcomes.append(outcome)
                self._log_outcome(outcome, settings)

            if snapshot is not None and self._config.prune_untracked:
                report.pruned = len(self._store.prune(snapshot.handles, snapshot.captured_at))

            self._passes_run += 1
            self._windows_closed += report.closed_count
            self._last_report = report
            return report

    def compensate_idle(self, idle: float, regained_at: float | None = None) -> int:
        """Shift every activity record forward by the idle interval.

        The shift is applied at once, so any pass that runs afterwards,
        including one already waiting on the pass lock, sees shifted records.
        A pass that is mid-walk keeps the record copy it started with.

        Args:
            idle: Seconds the application spent in the background
            regained_at: When the foreground was regained; records touched
                after this are left alone

        Returns:
            The number of records shifted
        """
        shifted = self._store.shift_all(idle, not_after=regained_at)
        if shifted:
            logger.info(f"Discounted {idle:.0f}s of background time for {shifted} tabs")
        return shifted

    async def drain(self) -> None:
        """Wait until every scheduled task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def get_stats(self) -> dict[str, Any]:
        """Get diagnostic statistics about the engine.

        Returns:
            Dictionary with engine statistics
        """
        return {
            "tracked_windows": len(self._store),
            "passes_run": self._passes_run,
            "windows_closed": self._windows_closed,
            "pending_tasks": self.pending,
            "last_action_at": self._idle.last_action_at,
            "last_report": self._last_report.to_dict() if self._last_report else None,
        }

    # -- internals ------------------------------------------------------------

    async def _capture(self) -> WindowSnapshot:
        windows = await self._host.enumerate_windows()
        return WindowSnapshot(windows, captured_at=self._clock())

    async def _seed_open_windows(self) -> None:
        snapshot = await self._capture()
        seeded = sum(1 for info in snapshot if self._store.seed(info.handle, snapshot.captured_at))
        logger.info(f"Tracking {seeded} windows restored with the solution")

    async def _tidy_after_delay(self, trigger: str, save_triggered: bool) -> None:
        # Let bookkeeping events fired right after the trigger land first
        if self._config.settle_delay > 0:
            await asyncio.sleep(self._config.settle_delay)
        await self.tidy(trigger=trigger, save_triggered=save_triggered)

    def _schedule_pass(self, trigger: str, save_triggered: bool = False) -> None:
        self._spawn(self._tidy_after_delay(trigger, save_triggered), trigger)

    def _spawn(self, coro: Coroutine[Any, Any, None], label: str) -> None:
        """Run a coroutine as a background task on the engine's loop."""
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is not None and (self._loop is None or running is self._loop):
            self._track(running, coro, label)
        elif self._loop is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._track, self._loop, coro, label)
        else:
            coro.close()
            logger.warning(f"TidyTabs not initialized, dropping {label}")

    def _track(
        self,
        loop: asyncio.AbstractEventLoop,
        coro: Coroutine[Any, Any, None],
        label: str,
    ) -> None:
        task = loop.create_task(self._run_logged(coro, label))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_logged(self, coro: Coroutine[Any, Any, None], label: str) -> None:
        try:
            await coro
        except Exception:
            logger.exception(f"TidyTabs error on {label}")

    def _log_outcome(self, outcome: EvictionOutcome, settings: TabSettings) -> None:
        if not outcome.closed_count:
            return

        if outcome.policy == "stale":
            logger.info(
                f"Closed {outcome.closed_count} tabs that were inactive for longer than "
                f"{settings.tab_timeout_minutes} minutes"
            )
        elif outcome.policy == "oldest":
            logger.info(
                f"Closed {outcome.closed_count} tabs to keep open tabs at {settings.max_open_tabs}"
            )
        else:
            logger.info(f"Closed {outcome.closed_count} tabs ({outcome.policy})")
