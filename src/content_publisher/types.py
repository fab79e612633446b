"""Shared type aliases for compilation modules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

SourcePath: TypeAlias = str
Patterns: TypeAlias = str | Sequence[str]
Attributes: TypeAlias = Mapping[str, Any]
OptionMap: TypeAlias = Mapping[str, Any]
Entry: TypeAlias = Any
