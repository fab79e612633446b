"""Unit tests for publisher configuration validation."""

from __future__ import annotations

from typing import Any

import pytest

from content_publisher.errors import ConfigurationError
from content_publisher.schemas import PublisherConfig


def _build(path: str, attributes: Any, body: str) -> tuple[str, str]:
    del attributes
    return path, body


def _config(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"from": "posts/*.md", "as": "posts", "build": _build}
    payload.update(overrides)
    return payload


def test_single_pattern_is_wrapped() -> None:
    """Accept a single pattern string for ``from``."""
    config = PublisherConfig.from_mapping(_config())
    assert config.sources == ("posts/*.md",)
    assert config.name == "posts"
    assert config.highlighters == ()


def test_unrecognized_keys_become_converter_options() -> None:
    """Keep unknown keys as the options bag."""
    config = PublisherConfig.from_mapping(
        _config(markdown_options={"extensions": []}, theme="dark")
    )
    assert config.options == {"markdown_options": {"extensions": []}, "theme": "dark"}


@pytest.mark.parametrize(
    "missing",
    ["from", "as", "build"],
)
def test_required_keys(missing: str) -> None:
    """Reject configurations missing a required key."""
    payload = _config()
    del payload[missing]
    with pytest.raises(ConfigurationError, match="Invalid publisher configuration"):
        PublisherConfig.from_mapping(payload)


@pytest.mark.parametrize(
    "overrides",
    [
        {"from": []},
        {"from": ["posts/*.md", "  "]},
        {"as": " "},
        {"build": "not callable"},
        {"parser": 42},
        {"html_converter": object()},
        {"highlighters": [""]},
        {"highlighters": [object()]},
        {"highlight_pattern": "(only-one-group)"},
        {"highlight_pattern": "(unclosed"},
    ],
)
def test_invalid_values_are_rejected(overrides: dict[str, Any]) -> None:
    """Wrap validation failures as ConfigurationError."""
    with pytest.raises(ConfigurationError):
        PublisherConfig.from_mapping(_config(**overrides))


def test_strategy_objects_are_accepted() -> None:
    """Accept objects exposing the strategy methods instead of callables."""

    class Builder:
        def build(self, path: str, attributes: Any, body: str) -> str:
            return path

    class Parser:
        def parse(self, path: str, content: str) -> list[Any]:
            return []

    config = PublisherConfig.from_mapping(
        _config(build=Builder(), parser=Parser(), highlighters="pygments")
    )
    assert isinstance(config.build, Builder)
    assert config.highlighters == ("pygments",)


def test_highlight_pattern_with_two_groups_is_kept() -> None:
    """Keep a valid custom highlight pattern."""
    pattern = r'<code lang="([^"]*)">([^<]*)</code>'
    assert PublisherConfig.from_mapping(_config(highlight_pattern=pattern)).highlight_pattern == pattern


class _InstanceBuilder:
    def build(self, path: str, attributes: Any, body: str) -> str:
        return body


class _InstanceParser:
    def parse(self, path: str, content: str) -> list[Any]:
        return []


class _StaticParser:
    @staticmethod
    def parse(path: str, content: str) -> list[Any]:
        return []


class _ClassBuilder:
    @classmethod
    def build(cls, path: str, attributes: Any, body: str) -> str:
        return body


class _EntryType:
    def __init__(self, path: str, attributes: Any, body: str) -> None:
        self.path = path


@pytest.mark.parametrize(
    "overrides",
    [{"build": _InstanceBuilder}, {"parser": _InstanceParser}],
)
def test_classes_with_instance_methods_are_rejected(overrides: dict[str, Any]) -> None:
    """An unbound instance method cannot be called with the page arguments."""
    with pytest.raises(ConfigurationError, match="staticmethod or classmethod"):
        PublisherConfig.from_mapping(_config(**overrides))


def test_classes_with_static_methods_or_constructors_are_accepted() -> None:
    """Accept static/class methods, and classes without the method as callables."""
    config = PublisherConfig.from_mapping(_config(build=_ClassBuilder, parser=_StaticParser))
    assert config.build is _ClassBuilder
    assert PublisherConfig.from_mapping(_config(build=_EntryType)).build is _EntryType
