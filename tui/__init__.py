"""Terminal interface for Prompt Shelf built on Textual.

Updates: v0.1.0 - 2026-10-05 - Package scaffold exposing the launcher.
"""

from __future__ import annotations

from .application import PromptShelfApp, launch_prompt_shelf

__all__ = ["PromptShelfApp", "launch_prompt_shelf"]
