"""Application-layer value objects."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from content_publisher.schemas import StalenessSnapshot


@dataclass(frozen=True)
class ParsedPage:
    """One record split out of a source file."""

    attributes: Mapping[str, Any]
    body: str


@dataclass(frozen=True)
class RenderedPage:
    """Parsed page whose body has been converted and highlighted."""

    path: str
    attributes: Mapping[str, Any]
    body: str


@dataclass(frozen=True)
class Collection:
    """Named, ordered sequence of built entries.

    Entries keep the discovery order of (file, record) pairs. The snapshot
    records what the collection was compiled from so hosts can ask whether it
    went stale.
    """

    name: str
    entries: tuple[Any, ...]
    snapshot: StalenessSnapshot = field(compare=False)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Any:
        return self.entries[index]

    def needs_rebuild(self) -> bool:
        """Return ``True`` when sources changed since this collection was built."""
        from content_publisher.staleness import needs_rebuild

        return needs_rebuild(self.snapshot.patterns, self.snapshot)
