"""Compiled pattern catalog consumed by the classifier and planner."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

from .constants import (
    DEFAULT_ICON,
    DEFAULT_PATTERNS,
    DISPLAY_NAMES,
    FAMILIES,
    ICONS,
    RawPattern,
)

_FLAG_LETTERS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


class PatternCatalog:
    """Ordered mapping of language tag to compiled signature patterns."""

    def __init__(self, patterns: Mapping[str, Sequence[re.Pattern[str]]]) -> None:
        compiled: Dict[str, Tuple[re.Pattern[str], ...]] = {}
        for tag, items in patterns.items():
            key = tag.strip().lower()
            if not key:
                raise ValueError("Catalog language tags must be non-empty")
            values = tuple(items)
            if not values:
                raise ValueError(f"Catalog entry '{key}' must define at least one pattern")
            compiled[key] = compiled.get(key, ()) + values
        self._patterns = compiled

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[RawPattern]]) -> "PatternCatalog":
        """Compile raw pattern strings (or ``(pattern, flags)`` pairs) into a catalog."""
        return cls({tag: [compile_pattern(raw) for raw in raws] for tag, raws in mapping.items()})

    def extend(self, mapping: Mapping[str, Sequence[RawPattern]]) -> "PatternCatalog":
        """Return a new catalog with extra patterns appended.

        Known tags keep their position; new tags are registered after the
        existing ones, so they lose ties against built-in languages.
        """
        merged: Dict[str, List[re.Pattern[str]]] = {
            tag: list(patterns) for tag, patterns in self._patterns.items()
        }
        for tag, raws in mapping.items():
            key = tag.strip().lower()
            merged.setdefault(key, []).extend(compile_pattern(raw) for raw in raws)
        return PatternCatalog(merged)

    def patterns_for(self, tag: str) -> Tuple[re.Pattern[str], ...]:
        return self._patterns.get((tag or "").lower(), ())

    def tags(self) -> Tuple[str, ...]:
        return tuple(self._patterns)

    def items(self) -> Iterator[Tuple[str, Tuple[re.Pattern[str], ...]]]:
        return iter(self._patterns.items())

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.lower() in self._patterns

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)


def compile_pattern(raw: RawPattern) -> re.Pattern[str]:
    """Compile a raw catalog entry; every pattern is multi-line."""
    if isinstance(raw, re.Pattern):
        return raw
    flags = re.MULTILINE
    if isinstance(raw, str):
        source = raw
    else:
        source, extra = raw
        if isinstance(extra, int):
            flags |= extra
        else:
            for letter in str(extra).lower():
                if letter not in _FLAG_LETTERS:
                    raise ValueError(f"Unknown regex flag '{letter}' for pattern {source!r}")
                flags |= _FLAG_LETTERS[letter]
    return re.compile(source, flags)


@lru_cache(maxsize=1)
def default_catalog() -> PatternCatalog:
    """Return the built-in catalog (compiled once per process)."""
    return PatternCatalog.from_mapping(DEFAULT_PATTERNS)


def display_name(tag: str) -> str:
    return DISPLAY_NAMES.get(tag, tag.upper())


def icon(tag: str) -> str:
    return ICONS.get(tag, DEFAULT_ICON)


def family_of(tag: str) -> str | None:
    """Return the family name ("programming", "data", ...) for a tag."""
    for name, members in FAMILIES.items():
        if tag in members:
            return name
    return None


__all__ = [
    "PatternCatalog",
    "compile_pattern",
    "default_catalog",
    "display_name",
    "family_of",
    "icon",
]
