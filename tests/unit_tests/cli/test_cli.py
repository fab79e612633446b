"""Unit tests for CLI command behavior."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest
import typer
from typer.testing import CliRunner

from content_publisher.cli import cli as cli_module

runner = CliRunner()


def _write_sources(directory: Path) -> str:
    (directory / "a.md").write_text('{title: "A"}\n---\nHello *world*.\n', encoding="utf-8")
    (directory / "b.md").write_text('{title: "B"}\n---\nSecond.\n', encoding="utf-8")
    return str(directory / "*.md")


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "build" in result.output
    assert "check" in result.output
    assert "doctor" in result.output


def test_default_builder_returns_plain_entry() -> None:
    """Build a JSON-ready dict from a rendered page."""
    assert cli_module.default_builder("a.md", {"t": 1}, "<p>x</p>") == {
        "path": "a.md",
        "attributes": {"t": 1},
        "body": "<p>x</p>",
    }


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("False", False), ("3", 3), ("2.5", 2.5), ("gfm", "gfm")],
)
def test_coerce_option_value(raw: str, expected: object) -> None:
    """Coerce booleans and numbers, keep everything else as text."""
    assert cli_module._coerce_option_value(raw) == expected


def test_parse_options_rejects_malformed_entries() -> None:
    """Require KEY=VALUE with a non-empty key."""
    assert cli_module._parse_options(["a=1", "b = x=y"]) == {"a": 1, "b": " x=y"}
    with pytest.raises(typer.BadParameter, match="KEY=VALUE"):
        cli_module._parse_options(["novalue"])
    with pytest.raises(typer.BadParameter, match="cannot be empty"):
        cli_module._parse_options(["=1"])


def test_load_object_validates_reference() -> None:
    """Resolve module:attr references and reject malformed ones."""
    assert cli_module._load_object("json:dumps") is json.dumps
    with pytest.raises(typer.BadParameter, match="Invalid reference"):
        cli_module._load_object("json")
    with pytest.raises(typer.BadParameter, match="has no attribute"):
        cli_module._load_object("json:missing_thing")


def test_build_writes_artifact(tmp_path: Path) -> None:
    """Compile sources into a JSON artifact with an embedded snapshot."""
    pattern = _write_sources(tmp_path)
    output = tmp_path / "out" / "posts.json"

    result = runner.invoke(cli_module.app, ["build", pattern, "--as", "posts", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert "Compiled 2 entries into 'posts'" in result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["name"] == "posts"
    assert payload["entries"][0] == {
        "path": str(tmp_path / "a.md"),
        "attributes": {"title": "A"},
        "body": "<p>Hello <em>world</em>.</p>",
    }
    assert payload["snapshot"]["patterns"] == [pattern]


def test_build_skips_fresh_artifact_unless_forced(tmp_path: Path) -> None:
    """Second build is a no-op until sources change or --force is given."""
    pattern = _write_sources(tmp_path)
    output = tmp_path / "posts.json"
    args = ["build", pattern, "--as", "posts", "-o", str(output)]

    assert runner.invoke(cli_module.app, args).exit_code == 0
    second = runner.invoke(cli_module.app, args)
    forced = runner.invoke(cli_module.app, [*args, "--force"])

    assert "Up to date" in second.output
    assert "Compiled 2 entries" in forced.output


def test_build_rebuilds_when_settings_change(tmp_path: Path) -> None:
    """A changed name, highlighter or option invalidates a fresh artifact."""
    pattern = _write_sources(tmp_path)
    output = tmp_path / "posts.json"
    base = ["build", pattern, "-o", str(output)]

    assert runner.invoke(cli_module.app, [*base, "--as", "posts"]).exit_code == 0
    renamed = runner.invoke(cli_module.app, [*base, "--as", "articles"])
    highlighted = runner.invoke(
        cli_module.app, [*base, "--as", "articles", "--highlighter", "pygments"]
    )
    optioned = runner.invoke(
        cli_module.app,
        [*base, "--as", "articles", "--highlighter", "pygments", "--option", "theme=dark"],
    )
    repeated = runner.invoke(
        cli_module.app,
        [*base, "--as", "articles", "--highlighter", "pygments", "--option", "theme=dark"],
    )

    assert "Compiled 2 entries into 'articles'" in renamed.output
    assert "Compiled 2 entries" in highlighted.output
    assert "Compiled 2 entries" in optioned.output
    assert "Up to date" in repeated.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["name"] == "articles"
    assert len(payload["fingerprint"]) == 64


def test_build_uses_custom_builder_and_options(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Forward --builder and --option values to the publish call."""
    pattern = _write_sources(tmp_path)
    builders = tmp_path / "builders.py"
    builders.write_text(
        "def title(path, attributes, body):\n    return attributes['title']\n",
        encoding="utf-8",
    )
    output = tmp_path / "titles.json"
    captured: dict[str, Any] = {}

    import content_publisher.api as api_module

    real_publish = api_module.publish

    def fake_publish(config: Any, **kwargs: Any) -> Any:
        captured["config"] = config
        captured["kwargs"] = kwargs
        return real_publish(config, **kwargs)

    monkeypatch.setattr(api_module, "publish", fake_publish)

    result = runner.invoke(
        cli_module.app,
        [
            "build",
            pattern,
            "--as",
            "titles",
            "-o",
            str(output),
            "--builder",
            f"{builders}:title",
            "--option",
            "flavor=gfm",
            "--highlighter",
            "pygments",
        ],
    )

    assert result.exit_code == 0, result.output
    assert captured["config"]["build"].__name__ == "title"
    assert captured["config"]["flavor"] == "gfm"
    assert captured["config"]["highlighters"] == ["pygments"]
    assert captured["kwargs"] == {"highlight_modules": None}
    assert json.loads(output.read_text(encoding="utf-8"))["entries"] == ["A", "B"]


def test_build_reports_parse_errors(tmp_path: Path) -> None:
    """Surface fatal parse errors as a user-facing message."""
    (tmp_path / "bad.md").write_text("no separator\n", encoding="utf-8")

    result = runner.invoke(
        cli_module.app,
        ["build", str(tmp_path / "*.md"), "--as", "x", "-o", str(tmp_path / "x.json")],
    )

    assert result.exit_code == 1
    assert "MissingSeparatorError" in result.output
    assert f'could not find separator --- in "{tmp_path / "bad.md"}"' in result.output
    assert not (tmp_path / "x.json").exists()


def test_build_rejects_unknown_highlighter(tmp_path: Path) -> None:
    """Exit with the plugin error code for unknown highlighters."""
    pattern = _write_sources(tmp_path)
    result = runner.invoke(
        cli_module.app,
        ["build", pattern, "--as", "x", "-o", str(tmp_path / "x.json"), "--highlighter", "nope"],
    )
    assert result.exit_code == 1
    assert "Unknown highlighter 'nope'" in result.output


def test_build_rejects_invalid_configuration(tmp_path: Path) -> None:
    """Configuration errors exit with code 2."""
    pattern = _write_sources(tmp_path)
    result = runner.invoke(
        cli_module.app,
        [
            "build",
            pattern,
            "--as",
            "x",
            "-o",
            str(tmp_path / "x.json"),
            "--highlight-pattern",
            "(one)",
        ],
    )
    assert result.exit_code == 2
    assert "ConfigurationError" in result.output


def test_check_reports_fresh_and_stale(tmp_path: Path) -> None:
    """Exit 0 while fresh and 1 once a source is modified."""
    pattern = _write_sources(tmp_path)
    output = tmp_path / "posts.json"
    runner.invoke(cli_module.app, ["build", pattern, "--as", "posts", "-o", str(output)])

    fresh = runner.invoke(cli_module.app, ["check", str(output)])
    source = tmp_path / "a.md"
    stat = source.stat()
    os.utime(source, (stat.st_atime, stat.st_mtime + 10))
    stale = runner.invoke(cli_module.app, ["check", str(output)])

    assert fresh.exit_code == 0
    assert "fresh" in fresh.output
    assert stale.exit_code == 1
    assert "stale" in stale.output


def test_check_with_other_patterns_is_stale(tmp_path: Path) -> None:
    """Overriding the recorded patterns invalidates the artifact."""
    pattern = _write_sources(tmp_path)
    output = tmp_path / "posts.json"
    runner.invoke(cli_module.app, ["build", pattern, "--as", "posts", "-o", str(output)])

    result = runner.invoke(cli_module.app, ["check", str(output), "--from", str(tmp_path / "*.txt")])

    assert result.exit_code == 1


def test_check_rejects_non_artifacts(tmp_path: Path) -> None:
    """Report files that are not compiled collections."""
    bogus = tmp_path / "bogus.json"
    bogus.write_text("[]", encoding="utf-8")

    result = runner.invoke(cli_module.app, ["check", str(bogus)])

    assert result.exit_code == 2
    assert "is not a compiled collection" in result.output


def test_doctor_lists_highlighters() -> None:
    """Print toolchain versions and the registered highlighters."""
    result = runner.invoke(cli_module.app, ["doctor"])
    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "highlighters: pygments" in result.output
