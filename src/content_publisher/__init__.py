"""Top-level API for compiling front-matter content into collections."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from content_publisher.application.results import Collection, ParsedPage, RenderedPage
from content_publisher.errors import (
    BuilderError,
    ConfigurationError,
    ConverterWarning,
    InvalidAttributesError,
    InvalidPatternError,
    MissingSeparatorError,
    PluginError,
    PublisherError,
    UnresolvedHighlightLanguage,
)
from content_publisher.schemas import PublisherConfig, StalenessSnapshot
from content_publisher.types import Patterns

__version__ = "0.1.0"


def compile_collection(
    sources: Patterns,
    *,
    name: str,
    build: Any,
    parser: Any = None,
    html_converter: Any = None,
    highlighters: Iterable[Any] = (),
    highlight_pattern: str | None = None,
    **options: Any,
) -> Collection:
    """Compile every file matching ``sources`` into a named collection.

    Parameters
    ----------
    sources : str | Sequence[str]
        Glob pattern(s) selecting source files.
    name : str
        Name the collection is exposed under.
    build
        Entry builder: ``build(path, attrs, body)`` or an object with
        a ``build`` method.
    parser, optional
        Replaces the front-matter parser: ``parse(path, content)``.
    html_converter, optional
        Replaces extension-based rendering:
        ``convert(path, body, attrs, options)``.
    highlighters : Iterable, default=()
        Highlighter names or plugin objects; empty leaves code blocks as
        plain escaped text.
    highlight_pattern : str, optional
        Regex capturing (language, code) for code blocks.
    **options
        Forwarded verbatim to the HTML converter.

    Returns
    -------
    Collection
        Entries in discovery order.
    """
    from .api import compile_collection as _impl

    return _impl(
        sources,
        name=name,
        build=build,
        parser=parser,
        html_converter=html_converter,
        highlighters=highlighters,
        highlight_pattern=highlight_pattern,
        **options,
    )


def publish(config: PublisherConfig | Mapping[str, Any]) -> Collection:
    """Compile a collection from a ``{"from": ..., "as": ..., ...}`` mapping."""
    from .api import publish as _impl

    return _impl(config)


def highlight(
    html: str,
    *,
    highlighters: Iterable[Any] | None = None,
    pattern: str | re.Pattern[str] | None = None,
) -> str:
    """Syntax-highlight code blocks in rendered HTML.

    Parameters
    ----------
    html : str
        Rendered HTML.
    highlighters : Iterable, optional
        Highlighter names or plugin objects. Defaults to every built-in
        highlighter.
    pattern : str | re.Pattern[str], optional
        Regex capturing (language, code); defaults to ``<pre><code>`` blocks.

    Returns
    -------
    str
        HTML with code blocks rewritten.
    """
    from .codeblocks import highlight as _impl

    return _impl(html, highlighters=highlighters, pattern=pattern)


def discover(patterns: Patterns) -> list[str]:
    """Expand source pattern(s) into file paths."""
    from .adapters.sources import discover as _impl

    return _impl(patterns)


def take_snapshot(patterns: Patterns) -> StalenessSnapshot:
    """Record the current matched paths and modification times."""
    from .staleness import take_snapshot as _impl

    return _impl(patterns)


def needs_rebuild(patterns: Patterns, previous: StalenessSnapshot | None) -> bool:
    """Return whether sources changed since ``previous`` was recorded."""
    from .staleness import needs_rebuild as _impl

    return _impl(patterns, previous)


__all__ = [
    "BuilderError",
    "Collection",
    "ConfigurationError",
    "ConverterWarning",
    "InvalidAttributesError",
    "InvalidPatternError",
    "MissingSeparatorError",
    "ParsedPage",
    "PluginError",
    "PublisherConfig",
    "PublisherError",
    "RenderedPage",
    "StalenessSnapshot",
    "UnresolvedHighlightLanguage",
    "compile_collection",
    "discover",
    "highlight",
    "needs_rebuild",
    "publish",
    "take_snapshot",
]
