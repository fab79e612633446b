"""Application ports for the pluggable pipeline stages."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeAlias

from content_publisher.application.results import ParsedPage
from content_publisher.types import Attributes, Entry, OptionMap

ParseResult: TypeAlias = (
    ParsedPage
    | tuple[Attributes, str]
    | Sequence[ParsedPage | tuple[Attributes, str]]
)


class PageParser(Protocol):
    """Split raw file content into one or more (attributes, body) records."""

    def parse(self, path: str, content: str) -> ParseResult:
        """Parse file content."""


class HtmlConverter(Protocol):
    """Render a page body into HTML."""

    def convert(
        self,
        path: str,
        body: str,
        attributes: Attributes,
        options: OptionMap,
    ) -> str:
        """Return HTML for the body; may warn with ``ConverterWarning``."""


class CodeHighlighter(Protocol):
    """Rewrite code blocks inside rendered HTML."""

    def highlight(self, html: str) -> str:
        """Return HTML with code blocks highlighted."""


class EntryBuilder(Protocol):
    """Turn a rendered page into a caller-owned entry."""

    def build(self, path: str, attributes: Attributes, body: str) -> Entry:
        """Build one entry."""


class DiagnosticSink(Protocol):
    """Receive recoverable diagnostics produced during compilation."""

    def warn(self, path: str, line: int, message: str) -> None:
        """Report one warning."""
