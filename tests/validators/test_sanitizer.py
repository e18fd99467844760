"""Tests for the host input sanitizer."""

from __future__ import annotations

import pytest

from codeshift.errors import ValidationError
from codeshift.validators import (
    sanitize_html,
    validate_conversion_params,
    validate_input,
    validate_regex_pattern,
)


def test_validate_input_normalises_line_endings_and_trims() -> None:
    result = validate_input("  a\r\nb\rc  \n")

    assert result.is_valid
    assert result.sanitized == "a\nb\nc"
    assert result.raise_for_error() == "a\nb\nc"


def test_validate_input_rejects_oversized_text() -> None:
    result = validate_input("x" * 2049, max_bytes=2048)

    assert not result.is_valid
    assert result.error == "Input too large. Maximum size is 2KB"


@pytest.mark.parametrize(
    "text",
    [
        "<script>alert(1)</script>",
        "eval(payload)",
        "new Function('return 1')",
        "const fs = require('fs')",
        "import fs from 'fs'",
        "fetch('/api')",
        "new XMLHttpRequest()",
        "child.exec('ls')",
        "spawn('sh')",
    ],
)
def test_validate_input_rejects_dangerous_markers(text: str) -> None:
    result = validate_input(text)

    assert not result.is_valid
    assert "potentially dangerous" in (result.error or "")
    with pytest.raises(ValidationError):
        result.raise_for_error("text")


def test_dangerous_markers_can_be_allowed() -> None:
    assert validate_input("eval(x)", block_dangerous=False).is_valid


def test_python_function_keyword_is_not_flagged() -> None:
    assert validate_input("def function(x):\n    return x").is_valid


def test_validate_conversion_params_checks_language_tags() -> None:
    missing = validate_conversion_params("x", "json", None)
    invalid = validate_conversion_params("x", "c++", "java")
    valid = validate_conversion_params(" x ", "json", "yaml")

    assert missing.error == "Source and target languages must be specified"
    assert invalid.error == "Invalid language identifier format"
    assert valid.is_valid and valid.sanitized == "x"


def test_sanitize_html_escapes_special_characters() -> None:
    assert sanitize_html("<a href='/x'>\"&\"</a>") == (
        "&lt;a href=&#x27;&#x2F;x&#x27;&gt;&quot;&amp;&quot;&lt;&#x2F;a&gt;"
    )


@pytest.mark.parametrize("pattern", [r"(?=x)", r"(?<!y)z", r"a*+", r"a{2,}", r"("])
def test_validate_regex_pattern_rejects_unsafe_patterns(pattern: str) -> None:
    assert not validate_regex_pattern(pattern).is_valid


def test_validate_regex_pattern_accepts_simple_patterns() -> None:
    result = validate_regex_pattern(r"^\s*defmodule\s+\w+")

    assert result.is_valid
    assert result.sanitized == r"^\s*defmodule\s+\w+"
