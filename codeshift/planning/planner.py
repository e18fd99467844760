"""Suggestion planner: proposes target languages for a detected source."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..catalog import (
    DATA_FORMATS,
    MAX_SUGGESTIONS,
    PRIORITY_TARGETS,
    PROGRAMMING_LANGUAGES,
    STYLE_LANGUAGES,
    display_name,
    icon,
)
from ..models import ConversionSuggestion

# Tag-specific one-off conversions: source -> ((target, name, description), ...)
ONE_OFF_TARGETS: Dict[str, Tuple[Tuple[str, str, str], ...]] = {
    "html": (("jsx", "Convert to JSX", "Transform HTML to React JSX"),),
    "jsx": (("html", "Convert to HTML", "Transform JSX to standard HTML"),),
    "sql": (
        (
            "json",
            "Convert to JSON Schema",
            "Transform SQL CREATE statements to a JSON schema",
        ),
    ),
    "dockerfile": (
        ("bash", "Convert to Bash Script", "Transform Dockerfile commands to a bash script"),
    ),
}


def build_suggestion(
    source: str,
    target: str,
    *,
    name: str | None = None,
    description: str | None = None,
) -> ConversionSuggestion:
    """Create the suggestion value object for a ``source -> target`` pair."""
    source_name = display_name(source)
    target_name = display_name(target)
    return ConversionSuggestion(
        id=f"{source}-{target}",
        name=name or f"Convert to {target_name}",
        description=description or f"Transform {source_name} code to {target_name}",
        icon=icon(target),
        source=source,
        target=target,
    )


class SuggestionPlanner:
    """Applies the programming, family and one-off rules in a fixed order."""

    def __init__(
        self,
        priority_targets: Mapping[str, Sequence[str]] | None = None,
        programming_languages: Sequence[str] = PROGRAMMING_LANGUAGES,
        data_formats: Sequence[str] = DATA_FORMATS,
        style_languages: Sequence[str] = STYLE_LANGUAGES,
        one_offs: Mapping[str, Sequence[Tuple[str, str, str]]] | None = None,
        limit: int = MAX_SUGGESTIONS,
    ) -> None:
        self.priority_targets = dict(priority_targets if priority_targets is not None else PRIORITY_TARGETS)
        self.programming_languages = tuple(programming_languages)
        self.data_formats = tuple(data_formats)
        self.style_languages = tuple(style_languages)
        self.one_offs = dict(one_offs if one_offs is not None else ONE_OFF_TARGETS)
        self.limit = limit
        self._rules: List[Callable[[str], Iterable[ConversionSuggestion]]] = [
            self._programming,
            self._data_formats,
            self._styles,
            self._one_offs,
        ]

    def suggest(self, tag: Optional[str], text: str) -> List[ConversionSuggestion]:
        """Return at most ``limit`` suggestions; empty for missing tag or text."""
        if not tag or not isinstance(text, str) or not text.strip():
            return []
        source = tag.lower()
        suggestions: List[ConversionSuggestion] = []
        seen: set[str] = set()
        for rule in self._rules:
            for suggestion in rule(source):
                if suggestion.source == suggestion.target or suggestion.id in seen:
                    continue
                seen.add(suggestion.id)
                suggestions.append(suggestion)
        return suggestions[: self.limit]

    def _programming(self, source: str) -> Iterable[ConversionSuggestion]:
        if source not in self.programming_languages:
            return []
        targets = self.priority_targets.get(source)
        if targets is None:
            targets = [lang for lang in self.programming_languages if lang != source][:3]
        return [build_suggestion(source, target) for target in list(targets)[:3]]

    def _data_formats(self, source: str) -> Iterable[ConversionSuggestion]:
        if source not in self.data_formats:
            return []
        return [
            build_suggestion(
                source,
                target,
                description=f"Transform {display_name(source)} to {display_name(target)} format",
            )
            for target in self.data_formats
            if target != source
        ]

    def _styles(self, source: str) -> Iterable[ConversionSuggestion]:
        if source not in self.style_languages:
            return []
        return [
            build_suggestion(
                source,
                target,
                description=f"Transform {display_name(source)} to {display_name(target)}",
            )
            for target in self.style_languages
            if target != source
        ]

    def _one_offs(self, source: str) -> Iterable[ConversionSuggestion]:
        return [
            build_suggestion(source, target, name=name, description=description)
            for target, name, description in self.one_offs.get(source, ())
        ]


_DEFAULT_PLANNER = SuggestionPlanner()


def suggest(tag: Optional[str], text: str) -> List[ConversionSuggestion]:
    """Propose conversions for ``tag`` using the built-in planner."""
    return _DEFAULT_PLANNER.suggest(tag, text)


__all__ = ["ONE_OFF_TARGETS", "SuggestionPlanner", "build_suggestion", "suggest"]
