"""Application-layer use-cases and option objects."""

from __future__ import annotations

from collections.abc import Iterable

from content_publisher.application.options import CompileOptions, HighlightOptions
from content_publisher.application.ports import CodeHighlighter, DiagnosticSink
from content_publisher.application.results import Collection, ParsedPage, RenderedPage
from content_publisher.schemas import PublisherConfig, StalenessSnapshot
from content_publisher.types import Patterns


def build_compile_options(
    config: PublisherConfig,
    *,
    highlight_modules: Iterable[str] | None = None,
) -> CompileOptions:
    """Build typed compile options via lazy use-case import."""
    from content_publisher.application.use_cases import build_compile_options as _impl

    return _impl(config, highlight_modules=highlight_modules)


def compile_collection(
    config: PublisherConfig,
    *,
    highlight_modules: Iterable[str] | None = None,
    highlighter: CodeHighlighter | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> Collection:
    """Compile a collection via lazy use-case import."""
    from content_publisher.application.use_cases import compile_collection as _impl

    return _impl(
        config,
        highlight_modules=highlight_modules,
        highlighter=highlighter,
        diagnostics=diagnostics,
    )


def needs_rebuild(patterns: Patterns, previous: StalenessSnapshot | None) -> bool:
    """Check staleness via lazy use-case import."""
    from content_publisher.application.use_cases import needs_rebuild as _impl

    return _impl(patterns, previous)


__all__ = [
    "CompileOptions",
    "HighlightOptions",
    "Collection",
    "ParsedPage",
    "RenderedPage",
    "build_compile_options",
    "compile_collection",
    "needs_rebuild",
]
