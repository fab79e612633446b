"""Shared pytest configuration, fixtures and marker assignment."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample content files."""
    return FIXTURES


class RecordingDiagnostics:
    """Diagnostic sink test double keeping every warning."""

    def __init__(self) -> None:
        self.warnings: list[tuple[str, int, str]] = []

    def warn(self, path: str, line: int, message: str) -> None:
        self.warnings.append((path, line, message))


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    """Fresh recording diagnostic sink."""
    return RecordingDiagnostics()
