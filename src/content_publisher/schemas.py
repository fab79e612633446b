"""Pydantic schemas for runtime validation of publisher inputs."""

from __future__ import annotations

import inspect
import re
from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from content_publisher.errors import ConfigurationError

RECOGNIZED_KEYS = frozenset(
    {
        "from",
        "as",
        "build",
        "parser",
        "html_converter",
        "highlighters",
        "highlight_pattern",
    }
)


def _exposes(value: object, method: str) -> bool:
    if isinstance(value, type):
        # Classes must carry the method as a static or class method.
        attribute = inspect.getattr_static(value, method, None)
        return attribute is None or isinstance(attribute, (staticmethod, classmethod))
    return callable(value) or callable(getattr(value, method, None))


class PublisherConfig(BaseModel):
    """Validated configuration for one compiled collection.

    Unknown keys are kept and forwarded verbatim to the HTML converter as its
    options bag (see :attr:`options`).
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    sources: tuple[str, ...] = Field(alias="from")
    name: str = Field(alias="as", min_length=1)
    build: Any
    parser: Any | None = None
    html_converter: Any | None = None
    highlighters: tuple[Any, ...] = ()
    highlight_pattern: str | None = None

    @field_validator("sources", mode="before")
    @classmethod
    def _normalize_sources(cls, value: object) -> object:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("sources")
    @classmethod
    def _validate_sources(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("'from' must name at least one pattern.")
        if any(not item.strip() for item in value):
            raise ValueError("'from' cannot contain empty patterns.")
        return value

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("'as' cannot be blank.")
        return value

    @field_validator("build")
    @classmethod
    def _validate_build(cls, value: object) -> object:
        if not _exposes(value, "build"):
            raise ValueError(
                "'build' must be callable or expose build(path, attrs, body); "
                "classes must declare it as a staticmethod or classmethod."
            )
        return value

    @field_validator("parser")
    @classmethod
    def _validate_parser(cls, value: object) -> object:
        if value is not None and not _exposes(value, "parse"):
            raise ValueError(
                "'parser' must be callable or expose parse(path, content); "
                "classes must declare it as a staticmethod or classmethod."
            )
        return value

    @field_validator("html_converter")
    @classmethod
    def _validate_converter(cls, value: object) -> object:
        if value is not None and not _exposes(value, "convert"):
            raise ValueError(
                "'html_converter' must be callable or expose "
                "convert(path, body, attrs, options); classes must declare it as a "
                "staticmethod or classmethod."
            )
        return value

    @field_validator("highlighters", mode="before")
    @classmethod
    def _normalize_highlighters(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("highlighters")
    @classmethod
    def _validate_highlighters(cls, value: tuple[Any, ...]) -> tuple[Any, ...]:
        for item in value:
            if isinstance(item, str):
                if not item.strip():
                    raise ValueError("highlighter identifiers cannot be blank.")
                continue
            if not (
                callable(getattr(item, "highlight", None))
                and callable(getattr(item, "can_highlight", None))
            ):
                raise ValueError(
                    "highlighters must be identifiers or objects exposing "
                    "can_highlight(language) and highlight(code, language)."
                )
        return value

    @field_validator("highlight_pattern")
    @classmethod
    def _validate_pattern(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            compiled = re.compile(value)
        except re.error as exc:
            raise ValueError(f"highlight_pattern is not a valid regex: {exc}") from exc
        if compiled.groups < 2:
            raise ValueError(
                "highlight_pattern must capture the language and the code (two groups)."
            )
        return value

    @property
    def options(self) -> dict[str, Any]:
        """Return unrecognized keys, forwarded to the HTML converter."""
        return dict(self.model_extra or {})

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> PublisherConfig:
        """Validate a configuration mapping using the ``from``/``as`` keys.

        Raises
        ------
        ConfigurationError
            If the mapping does not satisfy the configuration contract.
        """
        try:
            return cls.model_validate(dict(mapping))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid publisher configuration: {exc}") from exc


class StalenessSnapshot(BaseModel):
    """Matched paths and modification times recorded after a compilation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    patterns: tuple[str, ...]
    paths: tuple[str, ...]
    mtimes: dict[str, float] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _mtimes_cover_known_paths(self) -> StalenessSnapshot:
        unknown = set(self.mtimes) - set(self.paths)
        if unknown:
            raise ValueError(
                f"mtimes recorded for unmatched paths: {', '.join(sorted(unknown))}"
            )
        return self

    def to_json(self) -> str:
        """Serialize the snapshot for embedding in a compiled artifact."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, payload: str | bytes) -> StalenessSnapshot:
        """Load a snapshot previously produced by :meth:`to_json`.

        Raises
        ------
        ConfigurationError
            If the payload is not a valid snapshot.
        """
        try:
            return cls.model_validate_json(payload)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid staleness snapshot: {exc}") from exc
