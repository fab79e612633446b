"""HTML converters implementing the ``HtmlConverter`` port."""

from __future__ import annotations

import re
import warnings
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import markdown
from markdown_it import MarkdownIt

from content_publisher.errors import ConverterWarning
from content_publisher.types import Attributes, OptionMap

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown", ".livemd"})
DEFAULT_EXTENSIONS: tuple[str, ...] = ("fenced_code", "tables")
# Fenced blocks keep the bare language as their class for the highlighter.
DEFAULT_EXTENSION_CONFIGS: Mapping[str, Mapping[str, Any]] = {
    "fenced_code": {"lang_prefix": ""},
}

_BACKQUOTES = re.compile(r"(?<![\\`])`+")
_BLOCKS = MarkdownIt("commonmark", {"html": True}).enable("table")


def is_markdown_path(path: str) -> bool:
    """Return whether the path has a markdown-family extension."""
    return Path(path).suffix.lower() in MARKDOWN_SUFFIXES


def _unclosed_runs(paragraph: list[tuple[int, str]]) -> list[tuple[int, str]]:
    runs = [
        (number, match.group())
        for number, text in paragraph
        for match in _BACKQUOTES.finditer(text)
    ]
    problems: list[tuple[int, str]] = []
    index = 0
    while index < len(runs):
        number, run = runs[index]
        closer = next(
            (later for later in range(index + 1, len(runs)) if runs[later][1] == run),
            None,
        )
        if closer is None:
            problems.append((number, f"Closing unclosed backquotes {run} at end of input"))
            index += 1
        else:
            index = closer + 1
    return problems


def lint_markdown(body: str) -> list[tuple[int, str]]:
    """Find unterminated inline code spans.

    Blocks come from markdown-it's CommonMark tokenizer. Only inline content
    is scanned; code and raw HTML blocks never are.

    Parameters
    ----------
    body : str
        Markdown source.

    Returns
    -------
    list[tuple[int, str]]
        ``(line, message)`` pairs with 1-based body line numbers.
    """
    problems: list[tuple[int, str]] = []
    block_map: list[int] | None = None
    for token in _BLOCKS.parse(body):
        # Table body cells carry no map of their own; their row does.
        block_map = token.map or block_map
        if token.type != "inline" or block_map is None:
            continue
        first_line = block_map[0] + 1
        lines = [
            (first_line + offset, text)
            for offset, text in enumerate(token.content.split("\n"))
        ]
        problems.extend(_unclosed_runs(lines))
    return problems


def render_markdown(body: str, markdown_options: Mapping[str, Any] | None = None) -> str:
    """Render markdown to HTML with Python-Markdown.

    ``markdown_options`` may override ``extensions`` and ``extension_configs``.
    """
    markdown_options = markdown_options or {}
    extensions = list(markdown_options.get("extensions", DEFAULT_EXTENSIONS))
    extension_configs = {
        key: dict(value)
        for key, value in markdown_options.get(
            "extension_configs", DEFAULT_EXTENSION_CONFIGS
        ).items()
    }
    return markdown.markdown(
        body,
        extensions=extensions,
        extension_configs=extension_configs,
    )


class ExtensionHtmlConverter:
    """Render markdown-family files; pass every other extension through."""

    def convert(
        self,
        path: str,
        body: str,
        attributes: Attributes,
        options: OptionMap,
    ) -> str:
        """Convert a page body according to the path extension.

        Parameters
        ----------
        path : str
            Source path; its suffix selects the rendering.
        body : str
            Raw page body.
        attributes : Mapping[str, Any]
            Page attributes (unused by the default converter).
        options : Mapping[str, Any]
            Options bag; ``markdown_options`` is honored.

        Returns
        -------
        str
            Rendered HTML, or the untouched body for non-markdown files.
        """
        del attributes
        if not is_markdown_path(path):
            return body

        for line, message in lint_markdown(body):
            warnings.warn(ConverterWarning(message, path=path, line=line), stacklevel=2)
        return render_markdown(body, options.get("markdown_options"))
