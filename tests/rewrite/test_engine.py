"""Tests for conversion dispatch."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from codeshift import convert
from codeshift.errors import ConversionError, FormatError, ValidationError
from codeshift.planning import build_suggestion
from codeshift.rewrite import Rule, RuleRegistry


@dataclass
class _Pair:
    source: str
    target: str


class _BrokenRule(Rule):
    source = "alpha"
    target = "beta"

    def apply(self, text: str) -> str:
        raise KeyError("boom")


class _WrongTypeRule(Rule):
    source = "alpha"
    target = "gamma"

    def apply(self, text: str) -> str:
        return 42  # type: ignore[return-value]


def test_convert_uses_registered_rule() -> None:
    suggestion = build_suggestion("javascript", "typescript")

    assert convert("function add(a, b) { return a + b; }", suggestion) == (
        "function add(a: any, b: any): any { return a + b; }"
    )


def test_convert_transcodes_between_data_formats() -> None:
    assert convert('{"name": "John", "age": 30}', _Pair("json", "yaml")) == "name: John\nage: 30"
    assert convert("name: John\nage: 30\n", _Pair("yaml", "json")) == (
        '{\n  "name": "John",\n  "age": 30\n}'
    )
    assert "<name>John</name>" in convert('{"name": "John"}', _Pair("json", "xml"))


def test_malformed_json_raises_format_error_with_pair() -> None:
    with pytest.raises(FormatError) as excinfo:
        convert('{"name": }', _Pair("json", "yaml"))

    error = excinfo.value
    assert str(error).startswith("Invalid JSON format:")
    assert (error.source, error.target, error.stage) == ("json", "yaml", "decode")


def test_unsupported_pair_uses_fallback() -> None:
    text = "main = putStrLn \"hi\""

    result = convert(text, _Pair("haskell", "cobol"))

    assert result.startswith("// Converted from Haskell (haskell) to COBOL (cobol)\n")
    assert text in result


def test_rule_failures_are_wrapped() -> None:
    registry = RuleRegistry([_BrokenRule(), _WrongTypeRule()])

    with pytest.raises(ConversionError) as excinfo:
        convert("x", _Pair("alpha", "beta"), registry=registry)
    assert excinfo.value.stage == "rule"
    assert isinstance(excinfo.value.__cause__, KeyError)

    with pytest.raises(ConversionError) as excinfo:
        convert("x", _Pair("alpha", "gamma"), registry=registry)
    assert "returned int" in str(excinfo.value)


@pytest.mark.parametrize(
    "text, pair, field",
    [
        (None, _Pair("json", "yaml"), "text"),
        ("x", _Pair("", "yaml"), "source"),
        ("x", _Pair("json", " "), "target"),
    ],
)
def test_invalid_requests_raise_validation_error(text: object, pair: _Pair, field: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        convert(text, pair)  # type: ignore[arg-type]

    assert excinfo.value.field == field


def test_xml_root_tag_survives_conversion_to_json() -> None:
    assert convert("<person><name>John</name></person>", _Pair("xml", "json")) == (
        '{\n  "person": {\n    "name": "John"\n  }\n}'
    )
