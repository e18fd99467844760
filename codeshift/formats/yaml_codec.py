"""Restricted YAML codec.

Supported subset, and nothing more:

* one ``key: value`` pair per line;
* block sequences introduced by ``- `` (including ``- key: value`` items);
* nesting inferred purely from indentation width (spaces only);
* ``#`` comment lines and a single leading ``---`` marker;
* scalar coercion: ``true``/``false`` to bool, ``null``/``~`` to None,
  numeric-looking tokens to int/float, quoted text to str, anything else str;
* ``[]``/``{}`` as empty collections and simple ``|``/``>`` block scalars.

Flow collections, anchors, aliases, tags and multi-document streams raise
``FormatError``.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, List, Sequence, Tuple

from ..errors import FormatError
from ..models import IntermediateValue

FORMAT = "yaml"

_INT_RE = re.compile(r"^[-+]?\d+$")
_FLOAT_RE = re.compile(r"^[-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?$")
_ENTRY_RE = re.compile(
    r"""^(?P<key>"(?:[^"\\]|\\.)*"|'(?:[^']|'')*'|[^\s:"'#\-][^:]*?|-[^\s:][^:]*?)\s*:(?:[ \t]+(?P<value>.*))?$"""
)
_BLOCK_SCALAR_RE = re.compile(r"^[|>][-+]?$")
_RESERVED_PLAIN = re.compile(r"^[\-?:,\[\]{}#&*!|>'\"%@`]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode(text: str) -> IntermediateValue:
    """Parse ``text`` in the supported YAML subset."""
    lines = _prepare_lines(text)
    start = _next_content(lines, 0)
    if start >= len(lines):
        return None

    first = lines[start]
    indent = _indent_of(first)
    stripped = first.strip()
    if _is_sequence_item(stripped):
        value, index = _parse_sequence(lines, start, indent)
    elif _ENTRY_RE.match(stripped):
        value, index = _parse_mapping(lines, start, indent)
    else:
        value, index = _parse_value(stripped, lines, start + 1, indent, start)

    remainder = _next_content(lines, index)
    if remainder < len(lines):
        raise FormatError("unexpected content after document", format=FORMAT, line=remainder + 1)
    return value


def _prepare_lines(text: str) -> List[str]:
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    seen_content = False
    prepared: List[str] = []
    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip()
        stripped = line.strip()
        if stripped in {"---", "..."} and not line.startswith(" "):
            if stripped == "---" and seen_content:
                raise FormatError("multi-document streams are not supported", format=FORMAT, line=number)
            prepared.append("")
            continue
        if stripped and not stripped.startswith("#"):
            seen_content = True
            leading = line[: len(line) - len(line.lstrip())]
            if "\t" in leading:
                raise FormatError("tabs are not allowed in indentation", format=FORMAT, line=number)
        prepared.append(line)
    return prepared


def _is_blank(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def _next_content(lines: Sequence[str], index: int) -> int:
    while index < len(lines) and _is_blank(lines[index]):
        index += 1
    return index


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _is_sequence_item(stripped: str) -> bool:
    return stripped == "-" or stripped.startswith("- ")


def _parse_mapping(lines: List[str], start: int, indent: int) -> Tuple[Dict[str, Any], int]:
    result: Dict[str, Any] = {}
    index = start
    while index < len(lines):
        raw = lines[index]
        if _is_blank(raw):
            index += 1
            continue
        current_indent = _indent_of(raw)
        if current_indent < indent:
            break
        if current_indent > indent:
            raise FormatError("invalid indentation in mapping", format=FORMAT, line=index + 1)
        stripped = raw.strip()
        if _is_sequence_item(stripped):
            raise FormatError("unexpected sequence item inside mapping", format=FORMAT, line=index + 1)
        match = _ENTRY_RE.match(stripped)
        if match is None:
            raise FormatError("expected 'key: value' pair", format=FORMAT, line=index + 1)
        key = _parse_key(match.group("key"), index)
        value_part = (match.group("value") or "").strip()
        index += 1
        if value_part:
            result[key], index = _parse_value(value_part, lines, index, current_indent, index - 1)
            continue

        following = _next_content(lines, index)
        if following >= len(lines):
            result[key] = None
            index = following
            continue
        next_line = lines[following]
        next_indent = _indent_of(next_line)
        if _is_sequence_item(next_line.strip()) and next_indent >= current_indent:
            result[key], index = _parse_sequence(lines, following, next_indent)
        elif next_indent > current_indent:
            result[key], index = _parse_mapping(lines, following, next_indent)
        else:
            result[key] = None
    return result, index


def _parse_sequence(lines: List[str], start: int, indent: int) -> Tuple[List[Any], int]:
    items: List[Any] = []
    index = start
    while index < len(lines):
        raw = lines[index]
        if _is_blank(raw):
            index += 1
            continue
        current_indent = _indent_of(raw)
        if current_indent < indent:
            break
        if current_indent > indent:
            raise FormatError("invalid indentation in sequence", format=FORMAT, line=index + 1)
        stripped = raw.strip()
        if not _is_sequence_item(stripped):
            break
        value_part = stripped[1:].strip()
        if not value_part:
            index += 1
            following = _next_content(lines, index)
            if following >= len(lines) or _indent_of(lines[following]) <= current_indent:
                items.append(None)
                index = following
                continue
            nested_indent = _indent_of(lines[following])
            if _is_sequence_item(lines[following].strip()):
                nested, index = _parse_sequence(lines, following, nested_indent)
            else:
                nested, index = _parse_mapping(lines, following, nested_indent)
            items.append(nested)
            continue

        # "- key: value" and "- - item" open a block whose column is the item text.
        item_indent = current_indent + (len(stripped) - len(stripped[1:].lstrip()))
        if _is_sequence_item(value_part) or _ENTRY_RE.match(value_part):
            lines[index] = " " * item_indent + value_part
            if _is_sequence_item(value_part):
                nested, index = _parse_sequence(lines, index, item_indent)
            else:
                nested, index = _parse_mapping(lines, index, item_indent)
            items.append(nested)
            continue

        index += 1
        value, index = _parse_value(value_part, lines, index, current_indent, index - 1)
        items.append(value)
    return items, index


def _parse_value(
    value: str, lines: List[str], index: int, parent_indent: int, line_index: int
) -> Tuple[Any, int]:
    if _BLOCK_SCALAR_RE.match(value):
        return _parse_block_scalar(value, lines, index, parent_indent)
    return _parse_scalar(value, line_index), index


def _parse_block_scalar(
    header: str, lines: List[str], index: int, parent_indent: int
) -> Tuple[str, int]:
    collected: List[str] = []
    while index < len(lines):
        raw = lines[index]
        if raw.strip() and _indent_of(raw) <= parent_indent:
            break
        collected.append(raw)
        index += 1
    while collected and not collected[-1].strip():
        collected.pop()
    if collected:
        common = min(_indent_of(line) for line in collected if line.strip())
        collected = [line[common:] for line in collected]
    joiner = "\n" if header.startswith("|") else " "
    body = joiner.join(collected)
    if not header.endswith("-") and body:
        body += "\n"
    return body, index


def _parse_key(raw: str, index: int) -> str:
    key = raw.strip()
    if key.startswith('"'):
        return str(_parse_double_quoted(key, index))
    if key.startswith("'"):
        return key[1:-1].replace("''", "'")
    return key


def _parse_double_quoted(value: str, index: int) -> str:
    try:
        parsed = json.loads(value)
    except ValueError as exc:
        raise FormatError(f"bad double-quoted string {value!r}", format=FORMAT, line=index + 1) from exc
    return str(parsed)


def _parse_scalar(value: str, index: int) -> Any:
    if value.startswith('"'):
        if len(value) < 2 or not value.endswith('"'):
            raise FormatError("unterminated double-quoted string", format=FORMAT, line=index + 1)
        return _parse_double_quoted(value, index)
    if value.startswith("'"):
        if len(value) < 2 or not value.endswith("'"):
            raise FormatError("unterminated single-quoted string", format=FORMAT, line=index + 1)
        return value[1:-1].replace("''", "'")
    if value == "[]":
        return []
    if value == "{}":
        return {}
    if value[0] in "[{":
        raise FormatError("flow collections are not supported", format=FORMAT, line=index + 1)
    if value[0] in "&*!":
        raise FormatError("anchors, aliases and tags are not supported", format=FORMAT, line=index + 1)

    comment = value.find(" #")
    if comment != -1:
        value = value[:comment].rstrip()
    return _coerce_plain(value)


def _coerce_plain(value: str) -> Any:
    # Case-sensitive: "True" and "NULL" stay strings.
    if value in {"null", "~"}:
        return None
    if value == "true":
        return True
    if value == "false":
        return False
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode(value: IntermediateValue) -> str:
    """Render ``value`` using only the constructs :func:`decode` accepts."""
    return "\n".join(_encode_block(value, 0))


def _encode_block(value: Any, indent: int) -> List[str]:
    pad = " " * indent
    if isinstance(value, dict):
        if not value:
            return [pad + "{}"]
        lines: List[str] = []
        for key, item in value.items():
            label = f"{pad}{_encode_key(key)}:"
            if _is_nested(item):
                lines.append(label)
                lines.extend(_encode_block(item, indent + 2))
            else:
                lines.append(f"{label} {_encode_scalar(item)}")
        return lines
    if isinstance(value, list):
        if not value:
            return [pad + "[]"]
        lines = []
        for item in value:
            if _is_nested(item):
                nested = _encode_block(item, indent + 2)
                lines.append(f"{pad}- {nested[0][indent + 2:]}")
                lines.extend(nested[1:])
            else:
                lines.append(f"{pad}- {_encode_scalar(item)}")
        return lines
    return [pad + _encode_scalar(value)]


def _is_nested(value: Any) -> bool:
    return isinstance(value, (dict, list)) and bool(value)


def _encode_key(key: Any) -> str:
    text = str(key)
    if (
        not text
        or text != text.strip()
        or ":" in text
        or "#" in text
        or _RESERVED_PLAIN.match(text)
        or _CONTROL_CHARS.search(text)
    ):
        return _quote(text)
    return text


def _encode_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise FormatError("cannot represent non-finite numbers", format=FORMAT, stage="encode")
        return repr(value)
    if isinstance(value, dict):
        return "{}"
    if isinstance(value, list):
        return "[]"
    if not isinstance(value, str):
        raise FormatError(f"unsupported value type {type(value).__name__}", format=FORMAT, stage="encode")
    if _needs_quotes(value):
        return _quote(value)
    return value


def _needs_quotes(text: str) -> bool:
    if not text or text != text.strip() or text.startswith("..."):
        return True
    if _CONTROL_CHARS.search(text) or ": " in text or " #" in text or text.endswith(":"):
        return True
    if _RESERVED_PLAIN.match(text) or _BLOCK_SCALAR_RE.match(text):
        return True
    return _coerce_plain(text) != text or not isinstance(_coerce_plain(text), str)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


__all__ = ["FORMAT", "decode", "encode"]
