"""Public compilation API (delegates to application use-cases)."""

from __future__ import annotations

from typing import Any
from typing import Iterable
from typing import Mapping
from typing import Optional

from content_publisher.application.ports import DiagnosticSink
from content_publisher.application.results import Collection
from content_publisher.application.use_cases import compile_collection as _compile
from content_publisher.schemas import PublisherConfig
from content_publisher.types import Patterns


def publish(
    config: PublisherConfig | Mapping[str, Any],
    *,
    highlight_modules: Optional[Iterable[str]] = None,
    diagnostics: Optional[DiagnosticSink] = None,
) -> Collection:
    """Compile a collection from a configuration mapping.

    The mapping uses the literal ``from``/``as`` keys; unrecognized keys are
    forwarded to the HTML converter.
    """
    if not isinstance(config, PublisherConfig):
        config = PublisherConfig.from_mapping(config)
    return _compile(
        config,
        highlight_modules=highlight_modules,
        diagnostics=diagnostics,
    )


def compile_collection(
    sources: Patterns,
    *,
    name: str,
    build: Any,
    parser: Any = None,
    html_converter: Any = None,
    highlighters: Iterable[Any] = (),
    highlight_pattern: Optional[str] = None,
    highlight_modules: Optional[Iterable[str]] = None,
    diagnostics: Optional[DiagnosticSink] = None,
    **options: Any,
) -> Collection:
    """Compile sources matching ``sources`` into a collection named ``name``.

    Extra keyword arguments form the converter options bag.
    """
    mapping: dict[str, Any] = {
        **options,
        "from": sources if isinstance(sources, str) else list(sources),
        "as": name,
        "build": build,
        "parser": parser,
        "html_converter": html_converter,
        "highlighters": list(highlighters),
        "highlight_pattern": highlight_pattern,
    }
    return publish(
        mapping,
        highlight_modules=highlight_modules,
        diagnostics=diagnostics,
    )
