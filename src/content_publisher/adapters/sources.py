"""Source discovery and reading."""

from __future__ import annotations

import glob
import logging
import os

from content_publisher.errors import InvalidPatternError
from content_publisher.types import Patterns

logger = logging.getLogger(__name__)


def _split_alternatives(inner: str) -> list[str]:
    """Split brace contents on commas that are not nested in other braces."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in inner:
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current.append(char)
    parts.append("".join(current))
    return parts


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternations into plain glob patterns.

    Parameters
    ----------
    pattern : str
        Glob pattern possibly containing (nested) brace alternations.

    Returns
    -------
    list[str]
        Patterns without braces, in left-to-right alternative order.

    Raises
    ------
    InvalidPatternError
        If braces are unbalanced.
    """
    depth = 0
    start = 0
    for index, char in enumerate(pattern):
        if char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}":
            if depth == 0:
                raise InvalidPatternError(f"Unbalanced '}}' in pattern {pattern!r}.")
            depth -= 1
            if depth == 0:
                prefix = pattern[:start]
                suffix = pattern[index + 1 :]
                expanded: list[str] = []
                for alternative in _split_alternatives(pattern[start + 1 : index]):
                    expanded.extend(expand_braces(prefix + alternative + suffix))
                return expanded
    if depth:
        raise InvalidPatternError(f"Unclosed '{{' in pattern {pattern!r}.")
    return [pattern]


def _expand_pattern(pattern: str) -> list[str]:
    matches: set[str] = set()
    for candidate in expand_braces(pattern):
        for path in glob.glob(candidate, recursive=True):
            if os.path.isfile(path):
                matches.add(path)
    return sorted(matches)


def discover(patterns: Patterns) -> list[str]:
    """Expand one pattern or an ordered list of patterns into file paths.

    Each pattern is expanded on its own and sorted lexicographically; the
    per-pattern results are concatenated in pattern order without removing
    duplicates.

    Parameters
    ----------
    patterns : str | Sequence[str]
        Glob pattern(s). ``**`` recurses and ``{a,b}`` alternates.

    Returns
    -------
    list[str]
        Matched regular files. A pattern matching nothing contributes nothing.

    Raises
    ------
    InvalidPatternError
        If a pattern is empty or has unbalanced braces.
    """
    if isinstance(patterns, str):
        patterns = [patterns]

    paths: list[str] = []
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern.strip():
            raise InvalidPatternError(f"Invalid source pattern {pattern!r}.")
        matched = _expand_pattern(pattern)
        logger.debug("pattern %r matched %d file(s)", pattern, len(matched))
        paths.extend(matched)
    return paths


def read_source(path: str) -> str:
    """Read a source file as UTF-8 text with line endings left untouched."""
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()
