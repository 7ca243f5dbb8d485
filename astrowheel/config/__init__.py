"""Persisted configuration."""

from __future__ import annotations

from .settings import (
    CURRENT_SETTINGS_SCHEMA_VERSION,
    AspectsCfg,
    DisplayCfg,
    RenderingCfg,
    Settings,
    config_path,
    default_settings,
    ensure_default_config,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "AspectsCfg",
    "DisplayCfg",
    "RenderingCfg",
    "Settings",
    "config_path",
    "default_settings",
    "ensure_default_config",
    "get_config_home",
    "load_settings",
    "save_settings",
]
