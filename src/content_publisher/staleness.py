"""Staleness tracking for compiled collections.

Staleness is decided from the matched path set and file modification times,
not file contents: touching a file without changing it still reports a
rebuild, and clock skew can hide a change.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from content_publisher.adapters.sources import discover
from content_publisher.schemas import StalenessSnapshot
from content_publisher.types import Patterns

logger = logging.getLogger(__name__)


def normalize_patterns(patterns: Patterns) -> tuple[str, ...]:
    """Return patterns as a tuple, wrapping a single pattern."""
    if isinstance(patterns, str):
        return (patterns,)
    return tuple(patterns)


def snapshot_paths(patterns: Patterns, paths: Sequence[str]) -> StalenessSnapshot:
    """Record modification times for already discovered paths."""
    mtimes = {path: Path(path).stat().st_mtime for path in paths}
    return StalenessSnapshot(
        patterns=normalize_patterns(patterns),
        paths=tuple(paths),
        mtimes=mtimes,
    )


def take_snapshot(patterns: Patterns) -> StalenessSnapshot:
    """Discover sources and record their modification times."""
    return snapshot_paths(patterns, discover(patterns))


def needs_rebuild(
    patterns: Patterns,
    previous: StalenessSnapshot | None,
) -> bool:
    """Decide whether a collection compiled into ``previous`` is out of date.

    Parameters
    ----------
    patterns : str | Sequence[str]
        Currently configured source pattern(s).
    previous : StalenessSnapshot | None
        Snapshot recorded by the last successful compilation, if any.

    Returns
    -------
    bool
        ``True`` when there is no snapshot, the patterns changed, a file was
        added or removed, or a recorded file has a newer modification time.
    """
    if previous is None:
        logger.debug("no previous snapshot; rebuild required")
        return True

    if normalize_patterns(patterns) != previous.patterns:
        logger.debug("source patterns changed; rebuild required")
        return True

    current = set(discover(patterns))
    if current != set(previous.paths):
        logger.debug(
            "source set changed (+%d/-%d); rebuild required",
            len(current - set(previous.paths)),
            len(set(previous.paths) - current),
        )
        return True

    for path in sorted(current):
        recorded = previous.mtimes.get(path)
        try:
            mtime = Path(path).stat().st_mtime
        except FileNotFoundError:
            logger.debug("%s vanished; rebuild required", path)
            return True
        if recorded is None or mtime > recorded:
            logger.debug("%s modified; rebuild required", path)
            return True
    return False
