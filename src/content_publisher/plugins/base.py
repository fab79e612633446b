"""Plugin protocol for code block highlighting."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HighlighterPlugin(Protocol):
    """Protocol implemented by highlighter plugins."""

    name: str

    def can_highlight(self, language: str) -> bool:
        """Check whether plugin has a lexer for the language.

        Parameters
        ----------
        language : str
            Language tag taken from the code block.

        Returns
        -------
        bool
            ``True`` if :meth:`highlight` can tokenize this language.
        """

    def highlight(self, code: str, language: str) -> str:
        """Tokenize code into span-tagged HTML.

        Parameters
        ----------
        code : str
            Unescaped source code.
        language : str
            Language tag, already accepted by :meth:`can_highlight`.

        Returns
        -------
        str
            HTML-escaped tokens wrapped in ``<span class="...">`` tags, without
            an enclosing ``<pre>``/``<code>``.
        """
