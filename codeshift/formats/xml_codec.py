"""Simplified XML codec.

Decoding is a single pass over a token stream with a stack of open elements.
Declarations, comments, doctypes and processing instructions are skipped;
CDATA sections are kept as text. The decoded value is a one-key mapping from
the document root element's tag to its content:

* an element with only text becomes a string (``None`` when empty);
* an element with children becomes a mapping, repeated sibling tags collapse
  into a list;
* attributes become sibling keys, text next to attributes or children is
  stored under ``_text``.

Encoding wraps the value in ``<root>`` below an XML declaration.
"""

from __future__ import annotations

import html
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from ..errors import FormatError
from ..models import IntermediateValue

FORMAT = "xml"
TEXT_KEY = "_text"
ROOT_TAG = "root"
ITEM_TAG = "item"
DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_NAME = r"[A-Za-z_:][\w:.\-]*"
_TOKEN_RE = re.compile(
    r"(?P<comment><!--.*?-->)"
    r"|(?P<cdata><!\[CDATA\[(?P<cdata_body>.*?)\]\]>)"
    r"|(?P<pi><\?.*?\?>)"
    r"|(?P<doctype><!DOCTYPE(?:[^>\[]|\[[^\]]*\])*>)"
    rf"|(?P<close></(?P<close_name>{_NAME})\s*>)"
    rf"|(?P<open><(?P<open_name>{_NAME})(?P<attrs>(?:\s+[^\s=/>]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)\s*(?P<self>/)?>)"
    r"|(?P<text>[^<]+)",
    re.DOTALL | re.IGNORECASE,
)
_ATTR_RE = re.compile(r"""([^\s=/>]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_INVALID_NAME_CHARS = re.compile(r"[^\w.\-]")


@dataclass
class _Element:
    name: str
    line: int
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[Tuple[str, Any]] = field(default_factory=list)
    text: List[str] = field(default_factory=list)

    def value(self) -> Any:
        text = "".join(self.text).strip() or None
        if not self.children and not self.attributes:
            return text

        result: Dict[str, Any] = {}
        if text is not None:
            result[TEXT_KEY] = text
        result.update(self.attributes)
        collapsed: set = set()
        for name, child in self.children:
            if name in collapsed:
                result[name].append(child)
            elif name in result:
                result[name] = [result[name], child]
                collapsed.add(name)
            else:
                result[name] = child
        return result


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode(text: str) -> IntermediateValue:
    """Parse ``text`` into ``{root_tag: content}``."""
    stack: List[_Element] = []
    root_value: Any = None
    root_seen = False

    for kind, match, line in _tokens(text):
        if kind in {"comment", "pi", "doctype"}:
            continue
        if kind in {"text", "cdata"}:
            chunk = match.group("cdata_body") if kind == "cdata" else html.unescape(match.group())
            if stack:
                stack[-1].text.append(chunk)
            elif chunk.strip():
                raise FormatError("text outside of the root element", format=FORMAT, line=line)
            continue
        if kind == "open":
            if not stack and root_seen:
                raise FormatError("multiple root elements", format=FORMAT, line=line)
            element = _Element(
                name=match.group("open_name"),
                line=line,
                attributes=_parse_attributes(match.group("attrs") or "", line),
            )
            if match.group("self"):
                root_value, root_seen = _close(stack, element, root_value, root_seen)
            else:
                stack.append(element)
            continue

        name = match.group("close_name")
        if not stack:
            raise FormatError(f"unexpected closing tag </{name}>", format=FORMAT, line=line)
        element = stack.pop()
        if element.name != name:
            raise FormatError(
                f"mismatched closing tag </{name}>, expected </{element.name}>",
                format=FORMAT,
                line=line,
            )
        root_value, root_seen = _close(stack, element, root_value, root_seen)

    if stack:
        raise FormatError(f"unclosed tag <{stack[-1].name}>", format=FORMAT, line=stack[-1].line)
    if not root_seen:
        raise FormatError("document has no root element", format=FORMAT)
    return root_value


def _tokens(text: str) -> Iterator[Tuple[str, re.Match, int]]:
    position = 0
    line = 1
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise FormatError("unexpected '<'", format=FORMAT, line=line)
        kind = _outer_group(match)
        yield kind, match, line
        line += match.group().count("\n")
        position = match.end()


def _outer_group(match: re.Match) -> str:
    for kind in ("comment", "cdata", "pi", "doctype", "close", "open", "text"):
        if match.group(kind) is not None:
            return kind
    raise FormatError("unrecognised token", format=FORMAT)


def _parse_attributes(raw: str, line: int) -> Dict[str, str]:
    attributes: Dict[str, str] = {}
    for match in _ATTR_RE.finditer(raw):
        name = match.group(1)
        if name in attributes:
            raise FormatError(f"duplicate attribute {name!r}", format=FORMAT, line=line)
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attributes[name] = html.unescape(value)
    return attributes


def _close(
    stack: List[_Element], element: _Element, root_value: Any, root_seen: bool
) -> Tuple[Any, bool]:
    if stack:
        stack[-1].children.append((element.name, element.value()))
        return root_value, root_seen
    return {element.name: element.value()}, True


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode(value: IntermediateValue) -> str:
    """Render ``value`` as an XML document rooted at ``<root>``."""
    lines = [DECLARATION]
    lines.extend(_encode_element(ROOT_TAG, value, 0))
    return "\n".join(lines)


def element_name(key: Any) -> str:
    """Coerce an arbitrary mapping key into a valid element name."""
    name = _INVALID_NAME_CHARS.sub("_", str(key))
    if not name or not re.match(r"[A-Za-z_]", name):
        name = f"_{name}"
    return name


def _encode_element(name: str, value: Any, indent: int) -> List[str]:
    pad = "  " * indent
    if isinstance(value, dict):
        if _has_attribute_shape(value):
            attributes = "".join(
                f' {element_name(key)}="{_escape(_scalar_text(item))}"'
                for key, item in value.items()
                if key != TEXT_KEY
            )
            text = value.get(TEXT_KEY)
            if text is None:
                return [f"{pad}<{name}{attributes}/>"]
            return [f"{pad}<{name}{attributes}>{_escape(_scalar_text(text))}</{name}>"]
        if not value:
            return [f"{pad}<{name}/>"]
        lines = [f"{pad}<{name}>"]
        for key, item in value.items():
            child = element_name(key)
            if isinstance(item, list):
                for entry in item:
                    lines.extend(_encode_element(child, entry, indent + 1))
            else:
                lines.extend(_encode_element(child, item, indent + 1))
        lines.append(f"{pad}</{name}>")
        return lines
    if isinstance(value, list):
        if not value:
            return [f"{pad}<{name}/>"]
        lines = [f"{pad}<{name}>"]
        for entry in value:
            lines.extend(_encode_element(ITEM_TAG, entry, indent + 1))
        lines.append(f"{pad}</{name}>")
        return lines
    if value is None:
        return [f"{pad}<{name}/>"]
    return [f"{pad}<{name}>{_escape(_scalar_text(value))}</{name}>"]


def _has_attribute_shape(value: Dict[str, Any]) -> bool:
    if TEXT_KEY not in value:
        return False
    return all(not isinstance(item, (dict, list)) for item in value.values())


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise FormatError("cannot represent non-finite numbers", format=FORMAT, stage="encode")
        return repr(value)
    if isinstance(value, (int, str)):
        return str(value)
    raise FormatError(f"unsupported value type {type(value).__name__}", format=FORMAT, stage="encode")


def _escape(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


__all__ = ["DECLARATION", "FORMAT", "ROOT_TAG", "TEXT_KEY", "decode", "element_name", "encode"]
