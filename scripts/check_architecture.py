#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/content_publisher"

RENDERING_IMPORTS = [
    "import markdown",
    "from markdown",
    "import pygments",
    "from pygments",
    "import yaml",
]
CLI_IMPORTS = ["import typer", "from typer"]


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    _assert_no_imports(PACKAGE / "cli/cli.py", RENDERING_IMPORTS)

    for name in ["options.py", "ports.py", "results.py", "use_cases.py"]:
        _assert_no_imports(PACKAGE / "application" / name, RENDERING_IMPORTS + CLI_IMPORTS)

    for layer in ["adapters", "infrastructure", "plugins"]:
        for path in (PACKAGE / layer).glob("*.py"):
            _assert_no_imports(path, CLI_IMPORTS)

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
