"""Code block highlighting over rendered HTML."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from html import escape, unescape

from content_publisher.errors import UnresolvedHighlightLanguage
from content_publisher.plugins.base import HighlighterPlugin
from content_publisher.plugins.registry import create_default_registry

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = re.compile(r'<pre><code(?:\s+class="([^"]*)")?>([^<]*)</code></pre>')


def compile_pattern(pattern: str | re.Pattern[str] | None) -> re.Pattern[str]:
    """Return the code block regex, defaulting to fenced ``<pre><code>`` output."""
    if pattern is None:
        return DEFAULT_PATTERN
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def lexer_for(
    language: str,
    highlighters: Sequence[HighlighterPlugin],
) -> HighlighterPlugin:
    """Return the first highlighter able to tokenize the language.

    Raises
    ------
    UnresolvedHighlightLanguage
        If the language is empty or no highlighter accepts it.
    """
    if language:
        for plugin in highlighters:
            if plugin.can_highlight(language):
                return plugin
    raise UnresolvedHighlightLanguage(language)


def highlight_code_block(
    language: str,
    code: str,
    highlighters: Sequence[HighlighterPlugin],
) -> str:
    """Render one code block, falling back to escaped plain text."""
    source = unescape(code)
    try:
        plugin = lexer_for(language, highlighters)
    except UnresolvedHighlightLanguage:
        if language:
            logger.debug("no highlighter for %r; leaving block plain", language)
        return f"<pre><code>{escape(source)}</code></pre>"

    tokens = plugin.highlight(source, language)
    css_class = escape(f"{plugin.name} {language}")
    return f'<pre><code class="{css_class}">{tokens}</code></pre>'


def highlight_with(
    html_text: str,
    highlighters: Sequence[HighlighterPlugin],
    pattern: str | re.Pattern[str] | None = None,
) -> str:
    """Rewrite every code block matched by ``pattern`` using resolved plugins."""
    regex = compile_pattern(pattern)

    def _replace(match: re.Match[str]) -> str:
        raw_language = match.group(1) or ""
        language = raw_language.split()[0] if raw_language.strip() else ""
        return highlight_code_block(language, match.group(2) or "", highlighters)

    return regex.sub(_replace, html_text)


def highlight(
    html_text: str,
    *,
    highlighters: Iterable[str | HighlighterPlugin] | None = None,
    pattern: str | re.Pattern[str] | None = None,
) -> str:
    """Syntax-highlight code blocks inside rendered HTML.

    Parameters
    ----------
    html_text : str
        Rendered page HTML.
    highlighters : Iterable[str | HighlighterPlugin] | None, default=None
        Highlighter names and/or plugin objects, consulted in order. ``None``
        uses every built-in highlighter.
    pattern : str | re.Pattern[str] | None, default=None
        Regex capturing the language (group 1) and escaped code (group 2).

    Returns
    -------
    str
        HTML with recognized blocks replaced by
        ``<pre><code class="<highlighter> <language>">`` token markup and the
        rest by ``<pre><code>`` escaped text.
    """
    registry = create_default_registry()
    plugins = registry.plugins() if highlighters is None else registry.resolve(highlighters)
    return highlight_with(html_text, plugins, pattern)
