#!/usr/bin/env python3
"""Example highlighter plugin marking added and removed lines of a diff.

Load it with ``--highlighter-module examples/diff_highlighter.py`` and select
it with ``--highlighter plain-diff``.
"""

from __future__ import annotations

from html import escape

_LINE_CLASSES = {"+": "gi", "-": "gd", "@": "gu"}


class PlainDiffHighlighter:
    """Wrap diff lines in Pygments-compatible ``gi``/``gd``/``gu`` spans."""

    name = "plain-diff"

    def can_highlight(self, language: str) -> bool:
        """Accept ``diff`` and ``patch`` blocks."""
        return language.lower() in {"diff", "patch"}

    def highlight(self, code: str, language: str) -> str:
        """Tokenize each line by its leading marker."""
        del language
        rendered: list[str] = []
        for line in code.splitlines(keepends=True):
            css_class = _LINE_CLASSES.get(line[:1])
            text = escape(line, quote=False)
            if css_class is None:
                rendered.append(text)
            else:
                rendered.append(f'<span class="{css_class}">{text}</span>')
        return "".join(rendered)


HIGHLIGHTER = PlainDiffHighlighter()
