"""Highlighter interfaces and registry for code block rendering."""

from .base import HighlighterPlugin
from .builtins import PygmentsHighlighter
from .registry import HighlighterRegistry, create_default_registry

__all__ = [
    "HighlighterPlugin",
    "HighlighterRegistry",
    "PygmentsHighlighter",
    "create_default_registry",
]
