"""Highlighting adapter implementation."""

from __future__ import annotations

from content_publisher.application.options import HighlightOptions
from content_publisher.codeblocks import compile_pattern, highlight_with
from content_publisher.plugins.registry import create_default_registry


class HtmlCodeHighlighter:
    """Default ``CodeHighlighter`` resolving its plugins once per compilation."""

    def __init__(self, options: HighlightOptions) -> None:
        """Resolve configured highlighters.

        Parameters
        ----------
        options : HighlightOptions
            Highlighter identifiers/objects, plugin modules and block pattern.

        Raises
        ------
        PluginError
            If an identifier is unknown or a plugin module cannot be loaded.
        """
        registry = create_default_registry(extra_modules=options.modules)
        self._plugins = registry.resolve(options.highlighters)
        self._pattern = compile_pattern(options.pattern)

    def highlight(self, html: str) -> str:
        """Highlight code blocks; without plugins every block stays plain text."""
        return highlight_with(html, self._plugins, self._pattern)
