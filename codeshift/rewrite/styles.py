"""Stylesheet rewrites between CSS and SCSS."""

from __future__ import annotations

import re
from typing import Dict, List

from .base import Rule, SubstitutionRule, sub

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3,4})\b")
_DECLARATION = re.compile(r"([\w-]+\s*:\s*)([^;{}]+)(?=;|\})")
_SCSS_VARIABLE = re.compile(r"^[ \t]*\$([\w-]+)\s*:\s*([^;]+);[ \t]*\n?", re.MULTILINE)


def _reindent_block(match: re.Match) -> str:
    leading, selector, body = match.group(1, 2, 3)
    declarations = [item.strip() for item in body.split(";") if item.strip()]
    if match.start() > 0 and "\n" not in leading:
        leading = "\n\n"
    lines = [f"{selector.strip()} {{"]
    lines.extend(f"  {declaration};" for declaration in declarations)
    lines.append("}")
    return leading + "\n".join(lines)


class CssToScssRule(Rule):
    """Hoists hex colours into ``$color-*`` variables and re-indents rules."""

    source = "css"
    target = "scss"

    def __init__(self) -> None:
        self._layout = SubstitutionRule(
            self.source,
            self.target,
            [sub(r"(\s*)([^{}]+?)\s*\{([^{}]*)\}", _reindent_block)],
        )

    def apply(self, text: str) -> str:
        colors: Dict[str, str] = {}

        def _hoist(color: re.Match) -> str:
            value = color.group(0)
            name = f"$color-{value[1:].lower()}"
            colors.setdefault(name, value)
            return name

        def _declaration(match: re.Match) -> str:
            return match.group(1) + _HEX_COLOR.sub(_hoist, match.group(2))

        converted = _DECLARATION.sub(_declaration, text)
        converted = self._layout.apply(converted)
        if not colors:
            return converted
        header = "\n".join(f"{name}: {value};" for name, value in colors.items())
        return f"{header}\n\n{converted.lstrip()}"


class ScssToCssRule(Rule):
    """Inlines variables and drops mixins, includes and extends."""

    source = "scss"
    target = "css"

    def __init__(self) -> None:
        self._cleanup = SubstitutionRule(
            self.source,
            self.target,
            [
                sub(r"^[ \t]*@mixin\s+[\w-]+[^{]*\{[^}]*\}[ \t]*\n?", ""),
                sub(r"^[ \t]*@include\s+[^;]+;[ \t]*\n?", ""),
                sub(r"^[ \t]*@extend\s+[^;]+;[ \t]*\n?", ""),
                sub(r"&(?=:)", ""),
                sub(r"^([ \t]*)//[ \t]?(.*?)[ \t]*$", r"\1/* \2 */"),
                sub(r"\n{3,}", "\n\n"),
            ],
        )

    def apply(self, text: str) -> str:
        variables: Dict[str, str] = {}

        def _collect(match: re.Match) -> str:
            variables[match.group(1)] = _inline(match.group(2).strip(), variables)
            return ""

        converted = _SCSS_VARIABLE.sub(_collect, text)
        converted = _inline(converted, variables)
        return self._cleanup.apply(converted).strip()


def _inline(text: str, variables: Dict[str, str]) -> str:
    names: List[str] = sorted(variables, key=len, reverse=True)
    for name in names:
        text = re.sub(rf"\${re.escape(name)}(?![\w-])", lambda _: variables[name], text)
    return text


__all__ = ["CssToScssRule", "ScssToCssRule"]
