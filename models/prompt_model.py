"""Prompt data model definitions.

Prompts are stored one per Markdown file with a YAML front-matter header. The
helpers below convert between :class:`Prompt` instances and that document
format; the filename stem is always authoritative for the prompt name.

Updates: v0.4.0 - 2026-10-12 - Record the creation template in front matter.
Updates: v0.3.0 - 2026-10-05 - Parse hand-written front matter timestamps and tag strings.
Updates: v0.2.0 - 2026-09-30 - Add name validation and normalisation helpers.
Updates: v0.1.0 - 2026-09-28 - Initial Prompt schema with document serialization helpers.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

import yaml

_FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<header>.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")
_PATH_SEPARATORS = ("/", "\\")


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def _ensure_datetime(value: Any) -> datetime | None:
    """Parse front matter timestamps (isoformat strings or YAML datetimes)."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def normalise_tags(value: Iterable[Any] | str | None) -> frozenset[str]:
    """Coerce tag inputs (iterables or comma separated strings) into a clean set."""
    if value is None:
        return frozenset()
    if isinstance(value, str):
        raw_items: Iterable[Any] = value.split(",")
    else:
        raw_items = value
    tags: set[str] = set()
    for raw in raw_items:
        if raw is None:
            continue
        text = str(raw).strip()
        if text:
            tags.add(text)
    return frozenset(tags)


def prompt_name_problem(name: str | None) -> str | None:
    """Return why *name* is not a safe prompt filename, or None when it is."""
    if name is None or not name.strip():
        return "name must not be empty"
    if name != name.strip():
        return "name must not start or end with whitespace"
    if any(separator in name for separator in _PATH_SEPARATORS):
        return "name must not contain path separators"
    if name.startswith("."):
        return "name must not start with '.'"
    if _CONTROL_CHARACTERS.search(name):
        return "name must not contain control characters"
    return None


def normalize_prompt_name(value: str) -> str:
    """Return the canonical filename form of a user supplied prompt name."""
    return "-".join(value.strip().lower().split())


class PromptDocumentError(ValueError):
    """Raised when a prompt file carries front matter that cannot be parsed."""


@dataclass(frozen=True, slots=True)
class PromptDocument:
    """Parsed representation of a prompt file before it is bound to a name."""

    content: str
    tags: frozenset[str] = frozenset()
    template_origin: str | None = None
    modified_at: datetime | None = None
    declared_name: str | None = None


def parse_prompt_document(text: str) -> PromptDocument:
    """Split *text* into YAML front matter and body.

    Text without a leading ``---`` block is treated as a bare prompt body.
    """
    match = _FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return PromptDocument(content=text)
    try:
        header = yaml.safe_load(match.group("header")) if match.group("header").strip() else {}
    except yaml.YAMLError as exc:
        raise PromptDocumentError(f"Invalid front matter: {exc}") from exc
    if header is None:
        header = {}
    if not isinstance(header, Mapping):
        raise PromptDocumentError("Front matter must be a mapping")

    template = header.get("template")
    declared = header.get("name")
    return PromptDocument(
        content=text[match.end():],
        tags=normalise_tags(header.get("tags")),
        template_origin=str(template).strip() or None if template is not None else None,
        modified_at=_ensure_datetime(header.get("modified_at")),
        declared_name=str(declared) if declared is not None else None,
    )


@dataclass(frozen=True, slots=True)
class Prompt:
    """Named, tagged block of reusable text stored as one file."""

    name: str
    content: str
    tags: frozenset[str] = field(default_factory=frozenset)
    template_origin: str | None = None
    modified_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Accept any iterable of tags while keeping the stored value immutable."""
        object.__setattr__(self, "tags", normalise_tags(self.tags))

    @property
    def sorted_tags(self) -> tuple[str, ...]:
        """Return tags in a stable, case-insensitive order for display."""
        return tuple(sorted(self.tags, key=lambda tag: (tag.lower(), tag)))

    def has_tags(self, required: Iterable[str]) -> bool:
        """Return True when every tag in *required* is attached to the prompt."""
        return self.tags.issuperset(required)

    def with_changes(self, **changes: Any) -> Prompt:
        """Return a copy of the prompt with *changes* applied."""
        return replace(self, **changes)

    def to_document(self) -> str:
        """Serialise the prompt into its on-disk Markdown representation."""
        header: dict[str, Any] = {
            "name": self.name,
            "tags": list(self.sorted_tags),
        }
        if self.template_origin:
            header["template"] = self.template_origin
        header["modified_at"] = self.modified_at.isoformat()
        dumped = yaml.safe_dump(
            header,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=None,
        )
        return f"---\n{dumped}---\n{self.content}"

    @classmethod
    def from_document(
        cls,
        name: str,
        text: str,
        *,
        fallback_modified_at: datetime | None = None,
    ) -> Prompt:
        """Create a Prompt named *name* from the file contents in *text*."""
        document = parse_prompt_document(text)
        return cls(
            name=name,
            content=document.content,
            tags=document.tags,
            template_origin=document.template_origin,
            modified_at=document.modified_at or fallback_modified_at or _utc_now(),
        )


__all__ = [
    "Prompt",
    "PromptDocument",
    "PromptDocumentError",
    "normalise_tags",
    "normalize_prompt_name",
    "parse_prompt_document",
    "prompt_name_problem",
]
