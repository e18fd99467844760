"""Line-by-line passes between indentation blocks and brace blocks.

Both passes are heuristics over raw lines, not a whitespace grammar. They
misfire on tab/space mixtures and on indentation that is not a multiple of
the configured unit.
"""

from __future__ import annotations

from typing import List

DEFAULT_INDENT_UNIT = 4

_COMMENT_PREFIXES = ("#", "//")


def _leading_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def indent_to_braces(
    text: str,
    *,
    unit: int = DEFAULT_INDENT_UNIT,
    header_suffix: str = ":",
) -> str:
    """Insert braces around indentation-delimited blocks.

    A line ending in ``{`` opens a block; a line ending in ``header_suffix``
    has the suffix replaced by `` {``. Whenever the indentation drops, one
    ``}`` is emitted per ``unit`` of decrease (at most one per open block).
    Blocks still open at the end are closed in order.
    """
    if unit <= 0:
        raise ValueError("indent unit must be positive")

    output: List[str] = []
    open_headers: List[int] = []
    # Blank lines are held back so closing braces hug the block they end.
    blanks: List[str] = []
    depth = 0
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            blanks.append(line)
            continue

        indent = _leading_width(line)
        if indent < depth and open_headers:
            closing = min((depth - indent) // unit, len(open_headers))
            if stripped.startswith("}"):
                closing -= 1
            for _ in range(max(closing, 0)):
                output.append(" " * open_headers.pop() + "}")
        depth = indent
        output.extend(blanks)
        blanks = []

        if header_suffix and stripped.endswith(header_suffix) and not stripped.startswith(_COMMENT_PREFIXES):
            line = line.rstrip()[: -len(header_suffix)].rstrip() + " {"
            stripped = line.strip()
        if stripped.startswith("}") and open_headers:
            open_headers.pop()
        output.append(line)
        if stripped.endswith("{"):
            open_headers.append(indent)

    while open_headers:
        output.append(" " * open_headers.pop() + "}")
    output.extend(blanks)
    return "\n".join(output)


def braces_to_indent(text: str, *, unit: int = DEFAULT_INDENT_UNIT) -> str:
    """Drop brace lines and re-indent by block depth.

    A line starting with ``}`` closes a level (the rest of the line is kept),
    a line ending in ``:`` or ``{`` opens one. Blank lines are preserved.
    """
    if unit <= 0:
        raise ValueError("indent unit must be positive")

    output: List[str] = []
    level = 0
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            output.append("")
            continue
        if stripped.startswith("}"):
            level = max(0, level - 1)
            stripped = stripped[1:].strip()
            if not stripped:
                continue
        output.append(" " * (unit * level) + stripped)
        if stripped.endswith((":", "{")) and not stripped.startswith(_COMMENT_PREFIXES):
            level += 1
    return "\n".join(output)


__all__ = ["DEFAULT_INDENT_UNIT", "braces_to_indent", "indent_to_braces"]
