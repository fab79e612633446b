#!/usr/bin/env python3
"""
content_publisher.cli.cli

Typer-based CLI for compiling front-matter sources into a JSON collection.

Examples
--------
Compile every markdown post into ``posts.json``:

    content-publisher build "posts/**/*.md" --as posts --output posts.json

Highlight fenced code with Pygments:

    content-publisher build "docs/*.md" --as docs -o docs.json --highlighter pygments

Ask whether the artifact is out of date:

    content-publisher check posts.json
"""

from __future__ import annotations

import hashlib
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any

import typer
from pydantic import TypeAdapter, ValidationError

from content_publisher.errors import ConfigurationError, PluginError, PublisherError

app = typer.Typer(
    name="content-publisher",
    help="Compile front-matter content files into an ordered JSON collection.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

CAPABILITY_HELP = "Import path 'module:attr' or file path 'file.py:attr'."
_ENTRIES: TypeAdapter[Any] = TypeAdapter(Any)


def default_builder(path: str, attributes: dict[str, Any], body: str) -> dict[str, Any]:
    """Build a plain JSON-ready entry."""
    return {"path": path, "attributes": dict(attributes), "body": body}


# -----------------------------
# Utilities
# -----------------------------
def _load_object(reference: str) -> Any:
    """Load ``module:attr`` (or ``path/to/file.py:attr``).

    Raises
    ------
    typer.BadParameter
        If the reference is malformed or cannot be imported.
    """
    from content_publisher.plugins.registry import _import_module_or_path

    module_ref, _, attribute = reference.rpartition(":")
    if not module_ref or not attribute:
        raise typer.BadParameter(
            f"Invalid reference '{reference}'. Use module:attr or file.py:attr."
        )
    try:
        module = _import_module_or_path(module_ref)
    except PluginError as exc:
        raise typer.BadParameter(str(exc)) from exc
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise typer.BadParameter(
            f"Module '{module_ref}' has no attribute '{attribute}'."
        ) from exc


def _coerce_option_value(raw: str) -> object:
    """Best-effort coercion for CLI key/value options."""
    lowered = raw.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        return raw


def _parse_options(option_items: list[str] | None) -> dict[str, object]:
    """Parse repeatable KEY=VALUE converter options."""
    parsed: dict[str, object] = {}
    for item in option_items or []:
        if "=" not in item:
            raise typer.BadParameter(
                f"Invalid option entry '{item}'. Use KEY=VALUE format."
            )
        key, raw_value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter("Option key cannot be empty.")
        parsed[key] = _coerce_option_value(raw_value)
    return parsed


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error and return the process exit code."""
    typer.secho(f"✗ {type(exc).__name__}: {exc}", err=True, fg=typer.colors.RED)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _read_artifact_snapshot(path: Path) -> Any:
    """Return the snapshot embedded in a compiled artifact.

    Raises
    ------
    ConfigurationError
        If the file is not a compiled artifact.
    """
    from content_publisher.schemas import StalenessSnapshot

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return StalenessSnapshot.model_validate(payload["snapshot"])
    except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
        raise ConfigurationError(f"{path} is not a compiled collection: {exc}") from exc


def _settings_fingerprint(settings: dict[str, Any]) -> str:
    """Digest of the build settings recorded alongside the snapshot."""
    encoded = json.dumps(settings, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def _artifact_is_current(path: Path, sources: list[str], fingerprint: str) -> bool:
    """Return whether ``path`` was built with the same settings from unchanged sources."""
    from content_publisher.staleness import needs_rebuild

    try:
        snapshot = _read_artifact_snapshot(path)
        recorded = json.loads(path.read_text(encoding="utf-8")).get("fingerprint")
    except (ConfigurationError, OSError, ValueError, AttributeError) as exc:
        logger.debug("ignoring unreadable artifact: %s", exc)
        return False
    if recorded != fingerprint:
        logger.debug("build settings changed since %s was written", path)
        return False
    return not needs_rebuild(sources, snapshot)


def _write_artifact(path: Path, collection: Any, fingerprint: str | None = None) -> None:
    payload = {
        "name": collection.name,
        "entries": _ENTRIES.dump_python(collection.entries, mode="json"),
        "snapshot": collection.snapshot.model_dump(mode="json"),
        "fingerprint": fingerprint,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and full tracebacks."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and traceback output.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("build")
def build_cmd(
    ctx: typer.Context,
    sources: list[str] = typer.Argument(
        ..., help="Source glob pattern(s); '**' recurses, '{a,b}' alternates."
    ),
    name: str = typer.Option(..., "--as", help="Collection name."),
    output: Path = typer.Option(..., "--output", "-o", help="Where to write the JSON collection."),
    builder: str | None = typer.Option(None, "--builder", help=f"Entry builder. {CAPABILITY_HELP}"),
    parser: str | None = typer.Option(None, "--parser", help=f"Page parser. {CAPABILITY_HELP}"),
    html_converter: str | None = typer.Option(
        None, "--html-converter", help=f"HTML converter. {CAPABILITY_HELP}"
    ),
    highlighter: list[str] | None = typer.Option(
        None, "--highlighter", help="Highlighter name, e.g. pygments (repeatable)."
    ),
    highlighter_module: list[str] | None = typer.Option(
        None,
        "--highlighter-module",
        help="Highlighter plugin module import path or file path (repeatable).",
    ),
    highlight_pattern: str | None = typer.Option(
        None, "--highlight-pattern", help="Regex capturing (language, code) of code blocks."
    ),
    option: list[str] | None = typer.Option(
        None, "--option", help="Converter option KEY=VALUE (repeatable)."
    ),
    force: bool = typer.Option(False, "--force", help="Rebuild even if the output is fresh."),
) -> None:
    """Compile sources into a JSON collection.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    sources : list[str]
        Source glob patterns, expanded in order.
    name : str
        Collection name stored in the artifact.
    output : Path
        Destination JSON file.
    force : bool, default=False
        Skip the staleness check of an existing artifact.

    Notes
    -----
    - Without ``--builder`` every entry is ``{"path", "attributes", "body"}``.
    - Entries are serialized through a pydantic ``TypeAdapter`` in JSON mode.
    - An existing artifact is reused only when its recorded settings
      fingerprint matches and no source changed.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    options_payload = _parse_options(option)
    config: dict[str, Any] = {
        **options_payload,
        "from": sources,
        "as": name,
        "build": _load_object(builder) if builder else default_builder,
        "highlighters": highlighter or [],
        "highlight_pattern": highlight_pattern,
    }
    if parser:
        config["parser"] = _load_object(parser)
    if html_converter:
        config["html_converter"] = _load_object(html_converter)

    fingerprint = _settings_fingerprint(
        {
            "name": name,
            "builder": builder,
            "parser": parser,
            "html_converter": html_converter,
            "highlighters": highlighter or [],
            "highlighter_modules": highlighter_module or [],
            "highlight_pattern": highlight_pattern,
            "options": options_payload,
        }
    )

    try:
        from content_publisher.api import publish

        if not force and output.exists() and _artifact_is_current(output, sources, fingerprint):
            typer.echo(f"✓ Up to date: {output}")
            return

        collection = publish(config, highlight_modules=highlighter_module)
        _write_artifact(output, collection, fingerprint)
        typer.secho(
            f"✓ Compiled {len(collection)} entries into '{collection.name}': {output}",
            fg=typer.colors.GREEN,
        )
    except PublisherError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Builder and converter failures: clean message, traceback with --debug.
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("check")
def check_cmd(
    ctx: typer.Context,
    artifact: Path = typer.Argument(
        ..., exists=True, readable=True, help="JSON collection written by 'build'."
    ),
    sources: list[str] | None = typer.Option(
        None, "--from", help="Override the recorded source pattern(s) (repeatable)."
    ),
) -> None:
    """Report whether a compiled collection is stale (exit code 1 when stale)."""
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from content_publisher.staleness import needs_rebuild

        snapshot = _read_artifact_snapshot(artifact)
        patterns = sources or list(snapshot.patterns)
        stale = needs_rebuild(patterns, snapshot)
    except PublisherError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    typer.echo("stale" if stale else "fresh")
    if stale:
        raise typer.Exit(code=1)


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed toolchain versions and available highlighters."""
    import importlib.metadata as metadata

    modules = [
        "markdown",
        "markdown-it-py",
        "pygments",
        "pyyaml",
        "pydantic",
        "typer",
    ]

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in modules:
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    try:
        from content_publisher.plugins.registry import create_default_registry

        registry = create_default_registry()
        typer.echo(f"highlighters: {', '.join(registry.names())}")
    except Exception:
        typer.echo("highlighters: <unavailable>")


if __name__ == "__main__":
    app()
