"""Printable summaries for Prompt Shelf configuration.

Updates:
  v0.1.0 - 2026-10-05 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

import os

from config import ENV_PREFIX, PromptShelfSettings

from .utils import describe_path


def print_settings_summary(settings: PromptShelfSettings) -> None:
    """Emit a readable summary of resolved configuration and storage health."""
    config_json = os.getenv(f"{ENV_PREFIX}CONFIG_JSON") or "default lookup"
    lines = [
        "Prompt Shelf configuration",
        f"  Storage directory: {describe_path(settings.storage_path, expect_directory=True)}",
        f"  Prompts directory: {describe_path(settings.prompts_path, expect_directory=True)}",
        f"  User templates: {describe_path(settings.templates_path, expect_directory=True)}",
        f"  Editor command: {settings.editor}",
        f"  Default template: {settings.default_template}",
        f"  Seed example prompts: {'yes' if settings.seed_defaults else 'no'}",
        "  Interactive log file: "
        + describe_path(settings.resolved_log_file, expect_directory=False, allow_missing_file=True),
        f"  JSON config: {config_json}",
    ]
    print("\n".join(lines))
