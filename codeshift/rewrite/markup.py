"""Markup rewrites between HTML and JSX."""

from __future__ import annotations

import re
from typing import Dict

from .base import Substitution, SubstitutionRule, sub

VOID_ELEMENTS = (
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
)

BOOLEAN_ATTRIBUTES = (
    "checked",
    "disabled",
    "hidden",
    "readonly",
    "required",
    "selected",
    "multiple",
    "autofocus",
)

# HTML attribute -> JSX prop, applied after ``class``/``for``.
ATTRIBUTE_RENAMES: Dict[str, str] = {
    "tabindex": "tabIndex",
    "readonly": "readOnly",
    "autofocus": "autoFocus",
    "maxlength": "maxLength",
    "colspan": "colSpan",
    "rowspan": "rowSpan",
    "onclick": "onClick",
    "onchange": "onChange",
    "onsubmit": "onSubmit",
    "oninput": "onInput",
    "onkeydown": "onKeyDown",
    "onkeyup": "onKeyUp",
    "onfocus": "onFocus",
    "onblur": "onBlur",
    "onmouseover": "onMouseOver",
    "onmouseout": "onMouseOut",
}

_VOID = "|".join(VOID_ELEMENTS)
_TAG = re.compile(r"<([a-zA-Z][\w-]*)(\s[^<>]*?)?(\s*/)?>")
_BARE_BOOLEAN = re.compile(rf"(?<=\s)({'|'.join(BOOLEAN_ATTRIBUTES)})(?=\s|$)(?!\s*=)", re.IGNORECASE)
_ATTRIBUTE_RENAME = re.compile(rf"(?<=\s)({'|'.join(ATTRIBUTE_RENAMES)})(?==)", re.IGNORECASE)
_REVERSE_RENAMES = {prop: attribute for attribute, prop in ATTRIBUTE_RENAMES.items()}
_PROP_RENAME = re.compile(rf"(?<=\s)({'|'.join(_REVERSE_RENAMES)})(?==)")


def _camel_case(name: str) -> str:
    return re.sub(r"-([a-z])", lambda match: match.group(1).upper(), name.strip())


def _kebab_case(name: str) -> str:
    return re.sub(r"([A-Z])", lambda match: f"-{match.group(1).lower()}", name.strip())


def _style_object(match: re.Match) -> str:
    pairs = []
    for declaration in match.group(1).split(";"):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        pairs.append(f"{_camel_case(prop)}: '{value.strip()}'")
    return "style={{" + ", ".join(pairs) + "}}"


def _style_string(match: re.Match) -> str:
    declarations = []
    for pair in re.split(r",\s*(?=[\w$]+\s*:)", match.group(1)):
        if ":" not in pair:
            continue
        prop, value = pair.split(":", 1)
        value = value.strip().strip("'\"")
        declarations.append(f"{_kebab_case(prop)}: {value}")
    return 'style="' + "; ".join(declarations) + '"'


def _jsx_attributes(match: re.Match) -> str:
    name, attributes, closing = match.group(1), match.group(2) or "", match.group(3) or ""
    attributes = _BARE_BOOLEAN.sub(lambda found: f"{found.group(1).lower()}={{true}}", attributes)
    attributes = _ATTRIBUTE_RENAME.sub(lambda found: ATTRIBUTE_RENAMES[found.group(1).lower()], attributes)
    return f"<{name}{attributes}{closing}>"


def html_to_jsx() -> SubstitutionRule:
    return SubstitutionRule(
        "html",
        "jsx",
        [
            sub(r"<!--(.*?)-->", r"{/*\1*/}", re.DOTALL),
            sub(r"\bclass=", "className="),
            sub(r"\bfor=", "htmlFor="),
            sub(r'\bstyle="([^"]*)"', _style_object),
            Substitution(_TAG, _jsx_attributes),
            sub(rf"<({_VOID})\b([^<>]*?)\s*/?>", r"<\1\2 />", re.IGNORECASE),
        ],
    )


def jsx_to_html() -> SubstitutionRule:
    return SubstitutionRule(
        "jsx",
        "html",
        [
            sub(r"\{/\*(.*?)\*/\}", r"<!--\1-->", re.DOTALL),
            sub(r"\bclassName=", "class="),
            sub(r"\bhtmlFor=", "for="),
            sub(r"\bstyle=\{\{([^{}]*)\}\}", _style_string),
            sub(r"\s([\w-]+)=\{true\}", r" \1"),
            sub(r"\s[\w-]+=\{false\}", ""),
            Substitution(_PROP_RENAME, lambda found: _REVERSE_RENAMES[found.group(1)]),
            sub(r"\s[\w-]+=\{[^{}]*\}", ""),
            sub(r"\{[^{}]*\}", ""),
            sub(rf"<({_VOID})\b([^<>]*?)\s*/>", r"<\1\2>", re.IGNORECASE),
            sub(r"<([a-z][\w-]*)([^<>]*?)\s*/>", r"<\1\2></\1>"),
            sub(r"</?>", ""),
        ],
    )


__all__ = ["ATTRIBUTE_RENAMES", "BOOLEAN_ATTRIBUTES", "VOID_ELEMENTS", "html_to_jsx", "jsx_to_html"]
