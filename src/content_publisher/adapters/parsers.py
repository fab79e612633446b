"""Page parsers implementing the ``PageParser`` port."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

import yaml

from content_publisher.application.results import ParsedPage
from content_publisher.errors import InvalidAttributesError, MissingSeparatorError

_SEPARATOR = re.compile(r"^---(?:\r?\n|\Z)", re.MULTILINE)


class FrontMatterParser:
    """Split ``<header>\\n---\\n<body>`` files.

    The header is a YAML literal (for example ``{hello: "world"}``) that must
    load as a mapping. The body is everything after the separator line,
    untouched.
    """

    def parse(self, path: str, content: str) -> ParsedPage:
        """Parse one source file into a single page.

        Parameters
        ----------
        path : str
            Source path, used in error messages.
        content : str
            Raw file content.

        Returns
        -------
        ParsedPage
            Header attributes and raw body.

        Raises
        ------
        MissingSeparatorError
            If no standalone ``---`` line exists.
        InvalidAttributesError
            If the header fails to load or does not load as a mapping.
        """
        match = _SEPARATOR.search(content)
        if match is None:
            raise MissingSeparatorError(path)

        header = content[: match.start()]
        body = content[match.end() :]
        return ParsedPage(attributes=load_attributes(path, header), body=body)


def load_attributes(path: str, header: str) -> dict[object, object]:
    """Load a front-matter header as a mapping."""
    try:
        attributes = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise InvalidAttributesError(path, str(exc).splitlines()[0]) from exc
    if not isinstance(attributes, Mapping):
        raise InvalidAttributesError(path)
    return dict(attributes)


def _as_page(path: str, item: object) -> ParsedPage:
    if isinstance(item, ParsedPage):
        page = item
    elif isinstance(item, tuple) and len(item) == 2:
        page = ParsedPage(attributes=item[0], body=item[1])
    else:
        raise InvalidAttributesError(
            path, f"parser returned {type(item).__name__}, expected (attrs, body)"
        )
    if not isinstance(page.attributes, Mapping):
        raise InvalidAttributesError(path)
    if not isinstance(page.body, str):
        raise InvalidAttributesError(path, "parser returned a non-string body")
    return page


def normalize_parse_result(path: str, result: object) -> list[ParsedPage]:
    """Turn any supported parser return shape into a list of pages.

    A single ``ParsedPage`` or ``(attrs, body)`` pair yields one page; a
    sequence of either yields one page per item, in order.
    """
    if isinstance(result, ParsedPage):
        return [_as_page(path, result)]
    if (
        isinstance(result, tuple)
        and len(result) == 2
        and isinstance(result[0], Mapping)
    ):
        return [_as_page(path, result)]
    if isinstance(result, Sequence) and not isinstance(result, (str, bytes)):
        return [_as_page(path, item) for item in result]
    raise InvalidAttributesError(
        path, f"parser returned {type(result).__name__}, expected (attrs, body)"
    )
