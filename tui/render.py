"""Turn a :class:`core.session.view.SessionView` into rich text.

Kept free of Textual so it can be exercised without a running app.

Updates:
  v0.2.0 - 2026-10-12 - Show build order numbers and the tag picker.
  v0.1.0 - 2026-10-05 - Render the prompt list, preview and status line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

if TYPE_CHECKING:  # pragma: no cover - typing only
    from core.session.view import SessionView

__all__ = ["PREVIEW_LINES", "render_list", "render_side", "render_status"]

PREVIEW_LINES = 40


def render_list(view: SessionView) -> Text:
    """Return the prompt list with the cursor row highlighted."""
    text = Text()
    if not view.rows:
        message = "No prompts match the current filters" if view.total else "No prompts yet"
        text.append(message, style="dim italic")
        return text
    for index, row in enumerate(view.rows):
        if index:
            text.append("\n")
        style = "reverse bold" if row.selected else ""
        marker = "> " if row.selected else "  "
        text.append(marker, style=style)
        if row.build_position is not None:
            text.append(f"[{row.build_position}] ", style="bold green")
        text.append(row.name, style=style)
        if row.tags:
            text.append("  " + " ".join(f"#{tag}" for tag in row.tags), style="cyan dim")
    return text


def render_side(view: SessionView) -> Text:
    """Return the right-hand pane: dialog, tag picker or preview, in that order."""
    text = Text()
    if view.dialog is not None:
        text.append(view.dialog.title, style="bold underline")
        for line in view.dialog.lines:
            text.append("\n")
            text.append(line)
        return text
    if view.tag_rows:
        text.append("Filter by tags", style="bold underline")
        for row in view.tag_rows:
            text.append("\n")
            box = "[x]" if row.active else "[ ]"
            text.append(f"{box} {row.tag}", style="reverse" if row.highlighted else "")
        return text
    if view.mode_label == "Tag Filter":
        text.append("No tags in the library", style="dim italic")
        return text
    if view.preview is None:
        text.append("Select a prompt to preview", style="dim italic")
        return text
    lines = view.preview.splitlines()
    text.append("\n".join(lines[:PREVIEW_LINES]))
    if len(lines) > PREVIEW_LINES:
        text.append(f"\n... {len(lines) - PREVIEW_LINES} more lines", style="dim")
    return text


def render_status(view: SessionView) -> Text:
    """Return the banner, notice, filter summary and key hints."""
    text = Text()
    if view.banner:
        text.append(view.banner, style="bold white on red")
        text.append("\n")
    if view.notice is not None:
        text.append(view.notice.text, style="bold red" if view.notice.is_error else "green")
        text.append("\n")
    text.append(f"{view.mode_label}", style="bold")
    text.append(f"  {view.summary}")
    if view.query or view.searching:
        text.append("  search: ", style="dim")
        text.append(view.query + ("_" if view.searching else ""), style="yellow")
    if view.active_tags:
        text.append("  tags: ", style="dim")
        text.append(", ".join(view.active_tags), style="cyan")
    text.append("\n")
    text.append("  ".join(view.hints), style="dim")
    return text
