"""Configuration presets and settings for TidyTabs."""

from tidytabs.config.defaults import (
    capped_settings,
    default_engine_config,
    default_settings,
    instant_engine_config,
    manual_only_settings,
)
from tidytabs.config.settings import EngineConfig, TabSettings

__all__ = [
    # Presets
    "default_settings",
    "capped_settings",
    "manual_only_settings",
    "default_engine_config",
    "instant_engine_config",
    # Settings
    "TabSettings",
    "EngineConfig",
]
