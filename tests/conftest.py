"""Pytest configuration and fixtures for TidyTabs tests."""

import pytest

from tidytabs.activity import ActivityStore
from tidytabs.config.defaults import instant_engine_config
from tidytabs.config.settings import TabSettings
from tidytabs.host import InMemoryHost
from tidytabs.tidytabs import TidyTabs

START = 1_700_000_000.0


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: float = START):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now

    def advance_minutes(self, minutes: float) -> float:
        return self.advance(minutes * 60)

    def minutes_ago(self, minutes: float) -> float:
        return self.now - minutes * 60


def open_aged_windows(host, store, clock, ages_minutes, prefix="file"):
    """Open one window per age and record its last activity that long ago.

    Args:
        ages_minutes: Minutes since each window was last used

    Returns:
        The handles in the same order as ``ages_minutes``
    """
    handles = []
    for i, age in enumerate(ages_minutes):
        handle = host.open_window(f"{prefix}{i}.cs")
        store.touch(handle, clock.minutes_ago(age))
        handles.append(handle)
    return handles


@pytest.fixture
def clock():
    """Create a fake clock for deterministic timestamps."""
    return FakeClock()


@pytest.fixture
def store(clock):
    """Create an empty activity store on the fake clock."""
    return ActivityStore(clock=clock)


@pytest.fixture
def host():
    """Create an in-memory host with the stale threshold at 8 windows."""
    return InMemoryHost(
        settings=TabSettings(
            purge_stale_tabs_on_save=True,
            tab_timeout_minutes=20,
            tab_close_threshold=8,
            max_open_tabs=0,
        )
    )


@pytest.fixture
def engine(host, store, clock):
    """Create an engine that has not subscribed to the host yet."""
    return TidyTabs(host, config=instant_engine_config(), store=store, clock=clock)


@pytest.fixture
async def running_engine(engine):
    """Create an engine that receives host events."""
    await engine.initialize()
    yield engine
    await engine.close()


@pytest.fixture
def open_aged(host, store, clock):
    """Open windows on the host with the given ages in minutes."""

    def _open(ages_minutes, prefix="file"):
        return open_aged_windows(host, store, clock, ages_minutes, prefix=prefix)

    return _open
