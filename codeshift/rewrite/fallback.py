"""Generic fallback: wraps untouched text in a comment banner."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Tuple

from jinja2 import Environment, FileSystemLoader

from ..catalog import display_name
from ..catalog.constants import COMMENT_STYLES, DEFAULT_COMMENT_STYLE
from .base import Rule

TEMPLATES_DIR = Path(__file__).with_name("templates")
FALLBACK_TEMPLATE = "fallback.j2"

CHECKLIST: Tuple[str, ...] = (
    "Check syntax compatibility",
    "Update language-specific constructs",
    "Verify functionality",
)


@lru_cache(maxsize=1)
def _environment() -> Environment:
    loader = FileSystemLoader(str(TEMPLATES_DIR))
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def comment_style(tag: str) -> Tuple[str, str]:
    """Return the ``(prefix, suffix)`` line-comment markers for ``tag``."""
    return COMMENT_STYLES.get(tag, DEFAULT_COMMENT_STYLE)


def render_fallback(text: str, source: str, target: str) -> str:
    """Keep ``text`` verbatim inside a banner naming the requested pair."""
    prefix, suffix = comment_style(target)
    template = _environment().get_template(FALLBACK_TEMPLATE)
    rendered = template.render(
        prefix=prefix,
        suffix=suffix,
        source=source,
        target=target,
        source_name=display_name(source),
        target_name=display_name(target),
        text=text,
        checklist=CHECKLIST,
    )
    return rendered.rstrip("\n") + "\n"


class FallbackRule(Rule):
    """Catch-all rule for pairs without a dedicated rewrite."""

    def __init__(self, source: str, target: str) -> None:
        self.source = source
        self.target = target

    def apply(self, text: str) -> str:
        return render_fallback(text, self.source, self.target)


__all__ = ["CHECKLIST", "FallbackRule", "comment_style", "render_fallback"]
