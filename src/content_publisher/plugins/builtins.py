"""Built-in highlighter plugins."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import pygments
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from content_publisher.errors import UnresolvedHighlightLanguage


class PygmentsHighlighter:
    """Highlight code with Pygments lexers.

    Notes
    -----
    Tokens are rendered with ``HtmlFormatter(nowrap=True)``, so the output is
    a run of ``<span class="...">`` elements using Pygments' short token
    classes (``nb``, ``s2``, ...). Passing ``languages`` restricts the plugin
    to an allow-list of language tags.
    """

    def __init__(
        self,
        name: str = "pygments",
        languages: Iterable[str] | None = None,
        formatter_options: Mapping[str, Any] | None = None,
    ) -> None:
        self.name = name
        self._languages = (
            frozenset(language.lower() for language in languages)
            if languages is not None
            else None
        )
        self._formatter = HtmlFormatter(nowrap=True, **dict(formatter_options or {}))
        self._lexers: dict[str, Lexer] = {}

    def _lexer(self, language: str) -> Lexer:
        key = language.lower()
        if self._languages is not None and key not in self._languages:
            raise UnresolvedHighlightLanguage(language)
        if key not in self._lexers:
            try:
                self._lexers[key] = get_lexer_by_name(key, stripnl=False, ensurenl=False)
            except ClassNotFound as exc:
                raise UnresolvedHighlightLanguage(language) from exc
        return self._lexers[key]

    def can_highlight(self, language: str) -> bool:
        """Return whether Pygments knows a lexer for the language."""
        if not language:
            return False
        try:
            self._lexer(language)
        except UnresolvedHighlightLanguage:
            return False
        return True

    def highlight(self, code: str, language: str) -> str:
        """Tokenize code into span-tagged HTML.

        Raises
        ------
        UnresolvedHighlightLanguage
            If no lexer is available for the language.
        """
        return pygments.highlight(code, self._lexer(language), self._formatter)
