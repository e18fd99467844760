"""CLI parser and command behaviour tests."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from codeshift.cli import _build_parser, main

JSON_TEXT = '{"name": "John", "age": 30}'


@pytest.fixture
def stdin(monkeypatch: pytest.MonkeyPatch):
    def _feed(text: str) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return _feed


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "detect"])
    assert args.verbose is True
    assert args.command == "detect"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["detect", "--verbose"])
    assert args.verbose is True
    assert args.command == "detect"


def test_cli_convert_requires_target() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["convert", "input.json"])


def test_cli_convert_parses_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["convert", "in.py", "--to", "javascript", "--from", "python", "-o", "out.js"])
    assert args.path == "in.py"
    assert args.target == "javascript"
    assert args.source == "python"
    assert args.output == Path("out.js")


def test_detect_reads_stdin(tmp_path: Path, stdin, capsys: pytest.CaptureFixture[str]) -> None:
    stdin(JSON_TEXT)

    main(["--config", str(tmp_path), "detect", "--scores"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "json"
    assert any(line.startswith("  json: ") for line in lines[1:])


def test_detect_reports_undetectable_input(
    tmp_path: Path, stdin, capsys: pytest.CaptureFixture[str]
) -> None:
    stdin("hello world")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "detect"])

    assert excinfo.value.code == 1
    assert "Could not detect the input language" in capsys.readouterr().err


def test_suggest_lists_conversions_for_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "data.json"
    source.write_text(JSON_TEXT, encoding="utf-8")

    main(["--config", str(tmp_path), "suggest", str(source)])

    ids = [line.split()[0] for line in capsys.readouterr().out.splitlines()]
    assert ids == ["json-yaml", "json-xml"]


def test_convert_writes_result_to_stdout(
    tmp_path: Path, stdin, capsys: pytest.CaptureFixture[str]
) -> None:
    stdin(JSON_TEXT)

    main(["--config", str(tmp_path), "convert", "--to", "yaml"])

    assert capsys.readouterr().out == "name: John\nage: 30\n"


def test_convert_writes_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "data.json"
    source.write_text(JSON_TEXT, encoding="utf-8")
    target = tmp_path / "data.yaml"

    main(["--config", str(tmp_path), "convert", str(source), "--from", "json", "--to", "yaml", "-o", str(target)])

    assert target.read_text(encoding="utf-8") == "name: John\nage: 30"
    assert capsys.readouterr().out.startswith("Wrote Convert to YAML result to ")


def test_convert_failure_exits_with_message(
    tmp_path: Path, stdin, capsys: pytest.CaptureFixture[str]
) -> None:
    stdin('{"name": }')

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "convert", "--from", "json", "--to", "yaml"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "codeshift convert failed: Invalid JSON format" in err
    assert "--verbose" in err


def test_invalid_config_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".codeshift.yml").write_text("- not a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path), "languages"])

    assert excinfo.value.code == 1
    assert "must contain a mapping" in capsys.readouterr().err


def test_languages_lists_catalog(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--config", str(tmp_path), "languages"])

    out = capsys.readouterr().out
    assert out.splitlines()[0].split() == ["javascript", "JavaScript", "programming"]
    assert "dockerfile" in out
