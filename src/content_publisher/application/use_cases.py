"""Application use-cases orchestrating content compilation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from types import MappingProxyType
from typing import Any

from content_publisher.adapters.converters import ExtensionHtmlConverter
from content_publisher.adapters.parsers import FrontMatterParser, normalize_parse_result
from content_publisher.adapters.sources import discover, read_source
from content_publisher.application.options import CompileOptions, HighlightOptions
from content_publisher.application.ports import CodeHighlighter, DiagnosticSink
from content_publisher.application.results import Collection, ParsedPage, RenderedPage
from content_publisher.infrastructure.diagnostics import (
    StderrDiagnostics,
    forward_converter_warnings,
)
from content_publisher.infrastructure.highlighting import HtmlCodeHighlighter
from content_publisher.schemas import PublisherConfig, StalenessSnapshot
from content_publisher.staleness import needs_rebuild as _needs_rebuild
from content_publisher.staleness import snapshot_paths
from content_publisher.types import Patterns

logger = logging.getLogger(__name__)


def _capability(value: Any, method: str) -> Callable[..., Any]:
    """Return the callable behind a strategy object or plain function."""
    bound = getattr(value, method, None)
    if callable(bound):
        return bound
    return value


def build_compile_options(
    config: PublisherConfig,
    *,
    highlight_modules: Iterable[str] | None = None,
) -> CompileOptions:
    """Build typed option object from a validated configuration."""
    return CompileOptions(
        highlight=HighlightOptions(
            highlighters=config.highlighters,
            pattern=config.highlight_pattern,
            modules=tuple(highlight_modules or ()),
        ),
        converter_options=MappingProxyType(config.options),
    )


def render_page(
    path: str,
    page: ParsedPage,
    *,
    convert: Callable[..., str],
    highlighter: CodeHighlighter,
    options: CompileOptions,
    diagnostics: DiagnosticSink,
) -> RenderedPage:
    """Convert and highlight one parsed page.

    Converters get a read-only view of the attributes; the rendered page keeps
    the parser's own mapping.
    """
    with forward_converter_warnings(path, diagnostics):
        html = convert(
            path,
            page.body,
            MappingProxyType(page.attributes),
            options.converter_options,
        )
    return RenderedPage(
        path=path,
        attributes=page.attributes,
        body=highlighter.highlight(html),
    )


def compile_collection(
    config: PublisherConfig,
    *,
    highlight_modules: Iterable[str] | None = None,
    highlighter: CodeHighlighter | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> Collection:
    """Use-case: compile matching sources into a named collection.

    Parameters
    ----------
    config : PublisherConfig
        Validated publisher configuration.
    highlight_modules : Iterable[str] | None, optional
        Extra highlighter plugin modules to register before resolving
        ``config.highlighters``.
    highlighter : CodeHighlighter | None, optional
        Replaces the default highlighting pass.
    diagnostics : DiagnosticSink | None, optional
        Receives converter warnings; defaults to standard error.

    Returns
    -------
    Collection
        Entries in discovery order plus the snapshot they were built from.

    Raises
    ------
    PublisherError
        On discovery, parsing or plugin failures. Builder exceptions
        propagate unchanged.
    """
    options = build_compile_options(config, highlight_modules=highlight_modules)
    parse = (
        _capability(config.parser, "parse")
        if config.parser is not None
        else FrontMatterParser().parse
    )
    convert = (
        _capability(config.html_converter, "convert")
        if config.html_converter is not None
        else ExtensionHtmlConverter().convert
    )
    build = _capability(config.build, "build")
    highlighter = highlighter or HtmlCodeHighlighter(options.highlight)
    diagnostics = diagnostics or StderrDiagnostics()

    paths = discover(config.sources)
    # mtimes are taken before reading so edits made mid-compilation read as stale
    snapshot = snapshot_paths(config.sources, paths)

    entries: list[Any] = []
    for path in paths:
        pages = normalize_parse_result(path, parse(path, read_source(path)))
        logger.debug("%s: %d record(s)", path, len(pages))
        for page in pages:
            rendered = render_page(
                path,
                page,
                convert=convert,
                highlighter=highlighter,
                options=options,
                diagnostics=diagnostics,
            )
            entries.append(build(rendered.path, rendered.attributes, rendered.body))

    logger.debug(
        "compiled %d entr%s into %r from %d file(s)",
        len(entries),
        "y" if len(entries) == 1 else "ies",
        config.name,
        len(paths),
    )
    return Collection(name=config.name, entries=tuple(entries), snapshot=snapshot)


def needs_rebuild(
    patterns: Patterns,
    previous: StalenessSnapshot | None,
) -> bool:
    """Use-case: report whether sources changed since ``previous``."""
    return _needs_rebuild(patterns, previous)
