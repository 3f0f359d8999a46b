"""Settings management.

This package provides:
- GobeatSettings: the persisted target/user/game record
- load_settings / save_settings: JSON persistence with atomic writes
- apply_defaults / resolve_url: helpers used by the commands
"""

from gobeat.settings.store import (
    GobeatSettings,
    apply_defaults,
    current_username,
    load_settings,
    resolve_url,
    save_settings,
    settings_path,
)

__all__ = [
    "GobeatSettings",
    "apply_defaults",
    "current_username",
    "load_settings",
    "resolve_url",
    "save_settings",
    "settings_path",
]
