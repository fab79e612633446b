#!/usr/bin/env python3
"""Statement-count guard for the compilation use-cases."""

from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
APPLICATION = ROOT / "src/content_publisher/application"
MAX_STATEMENTS = 40


def _statement_count(node: ast.AST) -> int:
    return sum(isinstance(child, ast.stmt) for child in ast.walk(node)) - 1


def violations() -> list[str]:
    """Return ``module.function: count`` for functions over the threshold."""
    found: list[str] = []
    for path in sorted(APPLICATION.glob("*.py")):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in tree.body:
            if isinstance(node, ast.FunctionDef):
                count = _statement_count(node)
                if count > MAX_STATEMENTS:
                    found.append(f"{path.stem}.{node.name}: {count} statements")
    return found


def main() -> None:
    """Fail when a use-case function grows past the statement threshold."""
    found = violations()
    if found:
        raise SystemExit(
            "Use-case complexity threshold exceeded:\n"
            + "\n".join(f"- {item}" for item in found)
        )
    print("Orchestrator complexity check passed.")


if __name__ == "__main__":
    main()
