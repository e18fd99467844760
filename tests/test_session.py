"""Tests for the host conversion session."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pytest

from codeshift.config import CodeshiftConfig
from codeshift.errors import FormatError, RateLimitExceeded, ValidationError
from codeshift.limits import RateLimiter
from codeshift.planning import build_suggestion
from codeshift.session import ConverterSession, LanguageInfo
from codeshift.telemetry import MemoryEventSink
from tests._fixtures.clock import FakeClock

SessionFactory = Callable[..., ConverterSession]

JSON_TEXT = '{"name": "John", "age": 30}'


@dataclass
class _Pair:
    source: str
    target: str


def test_analyze_detects_language_and_plans_suggestions(
    make_session: SessionFactory, events: MemoryEventSink
) -> None:
    session = make_session()

    analysis = session.analyze(JSON_TEXT)

    assert analysis.language == "json"
    assert [item.id for item in analysis.suggestions] == ["json-yaml", "json-xml"]
    assert analysis.scores["json"] >= 1
    assert events.events("language_detected")[0].properties["language"] == "json"


def test_analyze_empty_text(make_session: SessionFactory) -> None:
    analysis = make_session().analyze("   ")

    assert analysis.language is None
    assert analysis.suggestions == []
    assert analysis.scores == {}


def test_analyze_rejects_oversized_input(make_session: SessionFactory, tmp_path: Path) -> None:
    config = CodeshiftConfig(root=tmp_path)
    config.sanitizer.max_input_bytes = 8

    with pytest.raises(ValidationError):
        make_session(config=config).analyze("x" * 9)


def test_convert_records_history_and_events(
    make_session: SessionFactory, events: MemoryEventSink
) -> None:
    session = make_session()

    outcome = session.convert(f"  {JSON_TEXT}\r\n", build_suggestion("json", "yaml"))

    assert outcome.result == "name: John\nage: 30"
    assert outcome.entry.conversion_label == "Convert to YAML"
    assert outcome.entry.source_text == JSON_TEXT
    assert outcome.entry.result_text == outcome.result
    assert session.history.entries() == [outcome.entry]
    (completed,) = events.events("conversion_completed")
    assert completed.properties["source"] == "json"
    assert completed.properties["elapsed_ms"] >= 0


def test_convert_labels_plain_pairs_with_display_names(make_session: SessionFactory) -> None:
    outcome = make_session().convert(JSON_TEXT, _Pair("json", "xml"))

    assert outcome.entry.conversion_label == "JSON to XML"


def test_convert_failure_is_tracked_and_reraised(
    make_session: SessionFactory, events: MemoryEventSink
) -> None:
    session = make_session()

    with pytest.raises(FormatError):
        session.convert_pair('{"name": }', "json", "yaml")

    assert len(session.history) == 0
    (failed,) = events.events("conversion_failed")
    assert failed.properties["error"] == "FormatError"


def test_convert_blocks_dangerous_input(make_session: SessionFactory) -> None:
    with pytest.raises(ValidationError) as excinfo:
        make_session().convert_pair("eval(payload)", "javascript", "typescript")

    assert "potentially dangerous" in str(excinfo.value)


def test_convert_rejects_malformed_language_tags(make_session: SessionFactory) -> None:
    with pytest.raises(ValidationError):
        make_session().convert("x", _Pair("c++", "java"))


def test_convert_respects_rate_limit(make_session: SessionFactory, clock: FakeClock) -> None:
    limiter = RateLimiter(max_requests=1, window_seconds=10.0, clock=clock)
    session = make_session(limiter=limiter)

    session.convert_pair(JSON_TEXT, "json", "yaml")
    with pytest.raises(RateLimitExceeded) as excinfo:
        session.convert_pair(JSON_TEXT, "json", "yaml")

    assert excinfo.value.retry_after == pytest.approx(10.0)
    clock.advance(10.0)
    assert session.convert_pair(JSON_TEXT, "json", "yaml").result


def test_history_capacity_follows_config(make_session: SessionFactory, tmp_path: Path) -> None:
    config = CodeshiftConfig(root=tmp_path)
    config.history.capacity = 2
    session = make_session(config=config)

    for _ in range(3):
        session.convert_pair(JSON_TEXT, "json", "yaml")

    assert len(session.history) == 2


def test_restore_and_clear_history(make_session: SessionFactory, events: MemoryEventSink) -> None:
    session = make_session()
    outcome = session.convert_pair(JSON_TEXT, "JSON", "YAML")

    assert session.restore(outcome.entry.id) == outcome.entry
    assert session.restore("missing") is None
    assert session.clear_history() == 1
    assert events.events("history_cleared")[0].properties == {"removed": 1}


def test_languages_lists_catalog_metadata(make_session: SessionFactory) -> None:
    languages = make_session().languages()

    assert LanguageInfo(tag="python", name="Python", icon="🐍", family="programming") in languages
    assert languages[0].tag == "javascript"


def test_from_path_reads_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CODESHIFT_HISTORY_CAPACITY", raising=False)
    (tmp_path / ".codeshift.yml").write_text("history:\n  capacity: 4\n", encoding="utf-8")

    session = ConverterSession.from_path(tmp_path)

    assert session.history.capacity == 4
