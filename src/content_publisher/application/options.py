"""Typed option objects shared across compilation use-cases."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class HighlightOptions:
    """Code highlighting configuration.

    An empty ``highlighters`` tuple renders every code block as plain text.
    """

    highlighters: tuple[Any, ...] = ()
    pattern: str | None = None
    modules: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompileOptions:
    """Options passed through the compile use-case."""

    highlight: HighlightOptions = HighlightOptions()
    converter_options: Mapping[str, Any] = field(default_factory=dict)
