"""Tests for the restricted YAML codec."""

from __future__ import annotations

import pytest

from codeshift.errors import FormatError
from codeshift.formats import yaml_codec


def test_decode_mappings_sequences_and_scalars() -> None:
    text = (
        "---\n"
        "# service settings\n"
        "name: John\n"
        "age: 30\n"
        "ratio: 0.5\n"
        "active: true\n"
        "owner: ~\n"
        "quoted: \"a: b\"\n"
        "tags:\n"
        "  - dev\n"
        "  - ops\n"
        "nested:\n"
        "  inner: value # trailing comment\n"
    )

    assert yaml_codec.decode(text) == {
        "name": "John",
        "age": 30,
        "ratio": 0.5,
        "active": True,
        "owner": None,
        "quoted": "a: b",
        "tags": ["dev", "ops"],
        "nested": {"inner": "value"},
    }


def test_decode_sequence_of_mappings() -> None:
    text = "- name: a\n  size: 1\n- name: b\n"

    assert yaml_codec.decode(text) == [{"name": "a", "size": 1}, {"name": "b"}]


def test_decode_block_scalars() -> None:
    text = "script: |\n  echo one\n  echo two\nsummary: >-\n  folded\n  text\n"

    assert yaml_codec.decode(text) == {
        "script": "echo one\necho two\n",
        "summary": "folded text",
    }


def test_decode_empty_document_is_none() -> None:
    assert yaml_codec.decode("") is None
    assert yaml_codec.decode("# only a comment\n") is None


@pytest.mark.parametrize(
    "text",
    [
        "items: [1, 2]\n",
        "base: &anchor value\n",
        "a: 1\n---\nb: 2\n",
        "a:\n\tb: 1\n",
        "a: 1\n   b: 2\n",
    ],
)
def test_decode_rejects_unsupported_constructs(text: str) -> None:
    with pytest.raises(FormatError) as excinfo:
        yaml_codec.decode(text)

    assert str(excinfo.value).startswith("Invalid YAML format:")


def test_encode_nested_structures() -> None:
    value = {"a": {"b": 1}, "l": [1, {"x": 2, "y": 3}], "empty": [], "none": None}

    assert yaml_codec.encode(value) == (
        "a:\n"
        "  b: 1\n"
        "l:\n"
        "  - 1\n"
        "  - x: 2\n"
        "    y: 3\n"
        "empty: []\n"
        "none: null"
    )


def test_encode_quotes_ambiguous_strings() -> None:
    encoded = yaml_codec.encode({"version": "1.0", "flag": "true", "note": "a: b", "plain": "hi"})

    assert encoded == 'version: "1.0"\nflag: "true"\nnote: "a: b"\nplain: hi'
    assert yaml_codec.decode(encoded) == {"version": "1.0", "flag": "true", "note": "a: b", "plain": "hi"}


def test_decode_keeps_capitalised_keywords_as_strings() -> None:
    assert yaml_codec.decode("k: True\nn: NULL\nf: False\nz: null\n") == {
        "k": "True",
        "n": "NULL",
        "f": "False",
        "z": None,
    }


@pytest.mark.parametrize("key", ["a\nb", "tab\there", "cr\rkey", "a: b", "#hash"])
def test_encode_quotes_keys_the_decoder_would_misread(key: str) -> None:
    encoded = yaml_codec.encode({key: 1})

    assert "\n" not in encoded
    assert yaml_codec.decode(encoded) == {key: 1}


def test_encode_quotes_values_with_control_characters() -> None:
    value = {"text": "line\rbreak", "tabbed": "a\tb"}

    assert yaml_codec.decode(yaml_codec.encode(value)) == value
