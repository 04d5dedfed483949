"""Default configuration presets for TidyTabs."""

from __future__ import annotations

from tidytabs.config.settings import EngineConfig, TabSettings


def default_settings() -> TabSettings:
    """Create the out-of-the-box settings.

    Stale windows are reclaimed once more than ten windows are open and
    the oldest-window cap is disabled.

    Returns:
        The default TabSettings
    """
    return TabSettings()


def capped_settings(
    max_open_tabs: int = 15,
    tab_timeout_minutes: int = 30,
    tab_close_threshold: int = 10,
) -> TabSettings:
    """Create settings with the oldest-window cap enabled.

    Args:
        max_open_tabs: Maximum number of unpinned windows to keep open
        tab_timeout_minutes: Idle minutes after which a window is stale
        tab_close_threshold: Open-window count above which stale windows close

    Returns:
        A TabSettings with the cap turned on
    """
    return TabSettings(
        purge_stale_tabs_on_save=True,
        tab_timeout_minutes=tab_timeout_minutes,
        tab_close_threshold=tab_close_threshold,
        max_open_tabs=max_open_tabs,
    )


def manual_only_settings(tab_timeout_minutes: int = 30) -> TabSettings:
    """Create settings that never purge on save.

    Passes still run on activation, build and the explicit command.

    Args:
        tab_timeout_minutes: Idle minutes after which a window is stale

    Returns:
        A TabSettings with save-triggered purging disabled
    """
    return TabSettings(
        purge_stale_tabs_on_save=False,
        tab_timeout_minutes=tab_timeout_minutes,
    )


def default_engine_config() -> EngineConfig:
    """Create the engine configuration used inside a host.

    Returns:
        An EngineConfig with a 100ms settle delay
    """
    return EngineConfig()


def instant_engine_config() -> EngineConfig:
    """Create an engine configuration with no settle delay.

    This keeps scheduled passes deterministic in tests and scripts.

    Returns:
        An EngineConfig with settle_delay set to zero
    """
    return EngineConfig(settle_delay=0.0)
