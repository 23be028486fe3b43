"""Immutable point-in-time view over the prompt library.

Updates: v0.1.0 - 2026-09-30 - Introduce RepositorySnapshot with derived tag index.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .prompt_model import Prompt


@dataclass(frozen=True, slots=True)
class RepositorySnapshot:
    """Ordered prompts plus a read-only ``tag -> names`` index.

    Snapshots are rebuilt from scratch after every mutation; nothing patches
    an existing instance.
    """

    prompts: tuple[Prompt, ...] = ()
    tag_index: Mapping[str, frozenset[str]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(cls, prompts: Iterable[Prompt]) -> RepositorySnapshot:
        """Return a snapshot sorted by name with a freshly derived tag index."""
        ordered = tuple(sorted(prompts, key=lambda prompt: prompt.name))
        index: dict[str, set[str]] = {}
        for prompt in ordered:
            for tag in prompt.tags:
                index.setdefault(tag, set()).add(prompt.name)
        frozen = {tag: frozenset(names) for tag, names in index.items()}
        return cls(prompts=ordered, tag_index=MappingProxyType(frozen))

    def __len__(self) -> int:
        return len(self.prompts)

    def __iter__(self) -> Iterator[Prompt]:
        return iter(self.prompts)

    def get(self, name: str) -> Prompt | None:
        """Return the prompt called *name* when present."""
        for prompt in self.prompts:
            if prompt.name == name:
                return prompt
        return None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(prompt.name for prompt in self.prompts)

    def tags(self) -> tuple[str, ...]:
        """Return every tag in use, sorted case-insensitively."""
        return tuple(sorted(self.tag_index, key=lambda tag: (tag.lower(), tag)))

    def names_with_tags(self, tags: Iterable[str]) -> frozenset[str]:
        """Return names of prompts carrying all of *tags* (AND semantics)."""
        required = list(tags)
        if not required:
            return frozenset(self.names)
        result: frozenset[str] | None = None
        for tag in required:
            names = self.tag_index.get(tag, frozenset())
            result = names if result is None else result & names
            if not result:
                return frozenset()
        return result or frozenset()


__all__ = ["RepositorySnapshot"]
