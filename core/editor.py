"""External text editor collaborator.

Updates:
  v0.2.0 - 2026-10-12 - Return None when the editor removes the buffer file.
  v0.1.0 - 2026-10-05 - Launch the configured editor on a temporary Markdown file.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

from .exceptions import EditorError

logger = logging.getLogger(__name__)

__all__ = ["EditorLauncher", "ExternalEditor"]


class EditorLauncher(Protocol):
    """Interface used by the session engine and CLI to obtain edited text."""

    def edit(self, initial_text: str, *, suffix: str = ".md") -> str | None:
        ...


class ExternalEditor:
    """Run an editor command such as ``vim`` or ``code --wait`` on a temp file."""

    def __init__(self, command: str) -> None:
        self._argv = shlex.split(command) if command else []
        if not self._argv:
            raise EditorError("No editor configured; set PROMPT_SHELF_EDITOR or EDITOR.")

    @property
    def command(self) -> str:
        return shlex.join(self._argv)

    def edit(self, initial_text: str, *, suffix: str = ".md") -> str | None:
        """Open *initial_text* in the editor and return the saved text.

        Returns ``None`` when the editor deleted the buffer file, which callers
        treat as a cancelled edit.
        """
        with tempfile.TemporaryDirectory(prefix="prompt-shelf-") as workdir:
            buffer_path = Path(workdir) / f"prompt{suffix}"
            buffer_path.write_text(initial_text, encoding="utf-8")
            argv = [*self._argv, str(buffer_path)]
            logger.debug("Launching editor: %s", shlex.join(argv))
            try:
                result = subprocess.run(argv, check=False)
            except OSError as exc:
                raise EditorError(f"Unable to launch editor '{self._argv[0]}': {exc}") from exc
            if result.returncode != 0:
                raise EditorError(
                    f"Editor '{self._argv[0]}' exited with status {result.returncode}"
                )
            if not buffer_path.exists():
                logger.info("Editor removed the buffer file; treating as cancelled")
                return None
            try:
                return buffer_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise EditorError(f"Unable to read editor buffer: {exc}") from exc
