"""Diagnostic stream implementation and converter-warning capture."""

from __future__ import annotations

import logging
import sys
import warnings
from collections.abc import Iterator
from contextlib import contextmanager

from content_publisher.application.ports import DiagnosticSink
from content_publisher.errors import ConverterWarning

logger = logging.getLogger(__name__)


class StderrDiagnostics:
    """Write ``<path>:<line>: warning: <message>`` lines to standard error."""

    def warn(self, path: str, line: int, message: str) -> None:
        """Write one warning line and flush it immediately."""
        stream = sys.stderr
        stream.write(f"{path}:{line}: warning: {message}\n")
        stream.flush()


@contextmanager
def forward_converter_warnings(path: str, sink: DiagnosticSink) -> Iterator[None]:
    """Route ``ConverterWarning``s raised in the block to ``sink``.

    Warnings of any other category are re-issued unchanged once the block
    exits. Captured warnings are delivered even if the block raises.

    Parameters
    ----------
    path : str
        Source path used when a warning carries no location.
    sink : DiagnosticSink
        Destination for converter diagnostics.
    """
    caught: list[warnings.WarningMessage] = []
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            yield
    finally:
        for record in caught:
            warning = record.message
            if isinstance(warning, ConverterWarning):
                logger.debug("converter warning for %s: %s", path, warning.message)
                sink.warn(warning.path or path, warning.line or 1, warning.message)
            else:
                warnings.warn_explicit(
                    warning,
                    record.category,
                    record.filename,
                    record.lineno,
                    source=record.source,
                )
