"""Configuration helpers for Prompt Shelf.

Updates: v0.2.0 - 2026-10-14 - Expose log file helpers alongside the settings loader.
Updates: v0.1.0 - 2026-09-28 - Expose settings loader and configuration error types.
"""

from .settings import (
    DEFAULT_CONFIG_JSON,
    DEFAULT_EDITOR,
    DEFAULT_STORAGE_PATH,
    ENV_PREFIX,
    LOG_FILE_NAME,
    PromptShelfSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_CONFIG_JSON",
    "DEFAULT_EDITOR",
    "DEFAULT_STORAGE_PATH",
    "ENV_PREFIX",
    "LOG_FILE_NAME",
    "PromptShelfSettings",
    "SettingsError",
    "load_settings",
]
