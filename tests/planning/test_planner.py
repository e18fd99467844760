"""Tests for the suggestion planner."""

from __future__ import annotations

from codeshift.catalog import MAX_SUGGESTIONS
from codeshift.planning import SuggestionPlanner, build_suggestion, suggest


def _ids(tag: str | None, text: str = "x") -> list[str]:
    return [item.id for item in suggest(tag, text)]


def test_programming_languages_use_priority_targets() -> None:
    assert _ids("javascript") == [
        "javascript-typescript",
        "javascript-python",
        "javascript-java",
    ]
    assert _ids("java") == ["java-kotlin", "java-scala", "java-csharp"]


def test_programming_language_without_priority_uses_first_three_others() -> None:
    assert _ids("c") == ["c-javascript", "c-typescript", "c-python"]


def test_data_and_style_families_offer_their_siblings() -> None:
    assert _ids("json") == ["json-yaml", "json-xml"]
    assert _ids("scss") == ["scss-css"]


def test_one_off_conversions() -> None:
    sql = suggest("sql", "CREATE TABLE t (id INT);")
    assert [item.id for item in sql] == ["sql-json"]
    assert sql[0].name == "Convert to JSON Schema"
    assert _ids("html") == ["html-jsx"]
    assert _ids("jsx") == ["jsx-html"]
    assert _ids("dockerfile") == ["dockerfile-bash"]


def test_no_suggestions_for_missing_tag_or_text() -> None:
    assert suggest(None, "code") == []
    assert suggest("python", "   ") == []
    assert suggest("cobol", "code") == []


def test_suggestions_never_target_their_source_and_respect_limit() -> None:
    planner = SuggestionPlanner(
        priority_targets={"python": ("python", "go", "rust", "java")},
        limit=2,
    )

    ids = [item.id for item in planner.suggest("python", "print(1)")]

    assert ids == ["python-go", "python-rust"]
    assert len(suggest("javascript", "x")) <= MAX_SUGGESTIONS


def test_build_suggestion_fills_display_metadata() -> None:
    suggestion = build_suggestion("javascript", "typescript")

    assert suggestion.id == "javascript-typescript"
    assert suggestion.name == "Convert to TypeScript"
    assert suggestion.description == "Transform JavaScript code to TypeScript"
    assert suggestion.icon == "🔷"


def test_data_format_descriptions_mention_format() -> None:
    (first, _) = suggest("json", "{}")

    assert first.description == "Transform JSON to YAML format"
    assert first.source == "json"
    assert first.target == "yaml"
