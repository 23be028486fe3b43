"""File-backed repository for persistent prompt storage.

Layout of the storage directory::

    <storage>/
      .initialized      # marker written once default prompts were seeded
      prompts/
        <name>.md       # one Markdown file with YAML front matter per prompt

The repository is the only component that touches these files. Writes go to
a temporary file in the same directory and are moved into place with
:func:`os.replace`, so readers never observe a half-written prompt.

Updates: v0.4.1 - 2026-10-19 - Skip unreadable files when listing; finish interrupted seeding.
Updates: v0.4.0 - 2026-10-12 - Add tag add/remove helper used by the ``tag`` command.
Updates: v0.3.0 - 2026-10-05 - Seed default prompts once, gated on the initialization flag.
Updates: v0.2.0 - 2026-09-30 - Build immutable snapshots with a derived tag index.
Updates: v0.1.0 - 2026-09-28 - Introduce PromptRepository over a Markdown directory.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path

from models.prompt_model import Prompt, PromptDocumentError, normalise_tags, prompt_name_problem
from models.snapshot import RepositorySnapshot
from prompt_templates import DEFAULT_PROMPTS

from .exceptions import (
    InvalidPromptNameError,
    PromptAlreadyExistsError,
    PromptNotFoundError,
    PromptStorageError,
)

logger = logging.getLogger("prompt_shelf.repository")

PROMPTS_DIR = "prompts"
PROMPT_SUFFIX = ".md"
INITIALIZED_FLAG = ".initialized"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PromptRepository:
    """Create, read, update and delete prompts stored as Markdown files."""

    def __init__(
        self,
        storage_path: str | Path,
        *,
        default_prompts: Mapping[str, tuple[Iterable[str], str]] | None = None,
    ) -> None:
        """Bind the repository to *storage_path*; nothing is created until a write."""
        self._root = Path(storage_path).expanduser()
        self._prompts_dir = self._root / PROMPTS_DIR
        self._flag_path = self._root / INITIALIZED_FLAG
        self._default_prompts = DEFAULT_PROMPTS if default_prompts is None else default_prompts

    @property
    def storage_path(self) -> Path:
        return self._root

    @property
    def prompts_dir(self) -> Path:
        return self._prompts_dir

    @property
    def templates_dir(self) -> Path:
        return self._root / "templates"

    def path_for(self, name: str) -> Path:
        """Return the file path used for the prompt called *name*."""
        self._validate_name(name)
        return self._prompts_dir / f"{name}{PROMPT_SUFFIX}"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list(self) -> list[Prompt]:
        """Return every prompt sorted by name."""
        if not self._prompts_dir.exists():
            return []
        try:
            entries = sorted(self._prompts_dir.iterdir())
        except OSError as exc:
            raise PromptStorageError(
                f"Unable to read prompt directory {self._prompts_dir}: {exc}"
            ) from exc

        prompts: list[Prompt] = []
        for path in entries:
            if path.suffix != PROMPT_SUFFIX or path.name.startswith("."):
                continue
            if prompt_name_problem(path.stem) is not None:
                logger.warning("Skipping prompt file with unsupported name: %s", path.name)
                continue
            if not path.is_file():
                continue
            try:
                prompts.append(self._load(path))
            except (PromptNotFoundError, PromptStorageError) as exc:
                logger.warning("Skipping unreadable prompt file %s: %s", path.name, exc)
        prompts.sort(key=lambda prompt: prompt.name)
        return prompts

    def get(self, name: str) -> Prompt:
        """Return the prompt called *name*."""
        if prompt_name_problem(name) is not None:
            raise PromptNotFoundError(name)
        path = self._prompts_dir / f"{name}{PROMPT_SUFFIX}"
        if not path.is_file():
            raise PromptNotFoundError(name)
        return self._load(path)

    def exists(self, name: str) -> bool:
        if prompt_name_problem(name) is not None:
            return False
        return (self._prompts_dir / f"{name}{PROMPT_SUFFIX}").is_file()

    def snapshot(self) -> RepositorySnapshot:
        """Return a fresh immutable snapshot of the whole library."""
        return RepositorySnapshot.build(self.list())

    def read_document(self, name: str) -> str:
        """Return the raw on-disk document for *name* (front matter included)."""
        path = self.path_for(name)
        if not path.is_file():
            raise PromptNotFoundError(name)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PromptStorageError(f"Unable to read prompt {name}: {exc}") from exc

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(
        self,
        name: str,
        content: str,
        tags: Iterable[str] = (),
        template_origin: str | None = None,
    ) -> Prompt:
        """Persist a new prompt, refusing to overwrite an existing one."""
        path = self.path_for(name)
        if path.exists():
            raise PromptAlreadyExistsError(name)
        prompt = Prompt(
            name=name,
            content=content,
            tags=normalise_tags(tags),
            template_origin=template_origin,
            modified_at=_utc_now(),
        )
        self._write(path, prompt)
        logger.info("Created prompt %s", name)
        return prompt

    def update(self, name: str, content: str, tags: Iterable[str] | None = None) -> Prompt:
        """Rewrite *name* with new content; ``tags=None`` keeps the current tags."""
        current = self.get(name)
        updated = current.with_changes(
            content=content,
            tags=current.tags if tags is None else normalise_tags(tags),
            modified_at=_utc_now(),
        )
        self._write(self.path_for(name), updated)
        logger.info("Updated prompt %s", name)
        return updated

    def update_tags(
        self,
        name: str,
        *,
        add: Iterable[str] = (),
        remove: Iterable[str] = (),
    ) -> Prompt:
        """Add and remove tags on *name* without touching its content."""
        current = self.get(name)
        tags = (current.tags | normalise_tags(add)) - normalise_tags(remove)
        return self.update(name, current.content, tags)

    def delete(self, name: str, force: bool = False) -> None:
        """Remove the prompt file for *name*.

        The repository never prompts; when *force* is false the caller has
        already collected an interactive confirmation.
        """
        path = self._prompts_dir / f"{name}{PROMPT_SUFFIX}"
        if prompt_name_problem(name) is not None or not path.is_file():
            raise PromptNotFoundError(name)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise PromptNotFoundError(name) from exc
        except OSError as exc:
            raise PromptStorageError(f"Unable to delete prompt {name}: {exc}") from exc
        logger.info("Deleted prompt %s (force=%s)", name, force)

    def ensure_initialized(self) -> bool:
        """Seed the default prompts on first run; return True when seeding happened.

        Only the flag decides: once written, deleting the defaults never
        brings them back. A library holding nothing but default names is
        treated as an interrupted seeding run and completed.
        """
        if self._flag_path.exists():
            return False
        seeded = False
        if all(prompt.name in self._default_prompts for prompt in self.list()):
            for name, (tags, content) in self._default_prompts.items():
                if self.exists(name):
                    continue
                self.create(name, content, tags)
                seeded = True
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            self._flag_path.write_text(_utc_now().isoformat() + "\n", encoding="utf-8")
        except OSError as exc:
            raise PromptStorageError(
                f"Unable to write initialization flag {self._flag_path}: {exc}"
            ) from exc
        if seeded:
            logger.info("Seeded %d default prompts into %s", len(self._default_prompts), self._root)
        return seeded

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _validate_name(name: str) -> None:
        problem = prompt_name_problem(name)
        if problem is not None:
            raise InvalidPromptNameError(name, problem)

    def _load(self, path: Path) -> Prompt:
        try:
            text = path.read_text(encoding="utf-8")
            mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
        except FileNotFoundError as exc:
            raise PromptNotFoundError(path.stem) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise PromptStorageError(f"Unable to read prompt file {path}: {exc}") from exc
        try:
            return Prompt.from_document(path.stem, text, fallback_modified_at=mtime)
        except PromptDocumentError as exc:
            logger.warning("Ignoring malformed front matter in %s: %s", path.name, exc)
            return Prompt(name=path.stem, content=text, modified_at=mtime)

    def _write(self, path: Path, prompt: Prompt) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{prompt.name}.",
                suffix=".tmp",
                delete=False,
            )
            try:
                with handle:
                    handle.write(prompt.to_document())
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(handle.name, path)
            except BaseException:
                Path(handle.name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PromptStorageError(f"Unable to write prompt {prompt.name}: {exc}") from exc


__all__ = [
    "INITIALIZED_FLAG",
    "PROMPTS_DIR",
    "PROMPT_SUFFIX",
    "PromptRepository",
]
