"""Rule registry keyed by ``(source, target)`` and plugin discovery."""

from __future__ import annotations

from functools import lru_cache, partial
from importlib import metadata
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .base import Rule
from .indentation import DEFAULT_INDENT_UNIT
from .infra import DockerfileToBashRule, SqlToJsonSchemaRule
from .markup import html_to_jsx, jsx_to_html
from .programming import (
    java_to_csharp,
    java_to_kotlin,
    javascript_to_python,
    javascript_to_typescript,
    python_to_javascript,
    typescript_to_javascript,
)
from .styles import CssToScssRule, ScssToCssRule

_ENTRY_POINT_GROUP = "codeshift.rules"

RuleKey = Tuple[str, str]


def _builtin_factories(indent_unit: int) -> Dict[str, Callable[[], Rule]]:
    return {
        "javascript-typescript": javascript_to_typescript,
        "typescript-javascript": typescript_to_javascript,
        "python-javascript": partial(python_to_javascript, indent_unit),
        "javascript-python": partial(javascript_to_python, indent_unit),
        "java-kotlin": java_to_kotlin,
        "java-csharp": java_to_csharp,
        "css-scss": CssToScssRule,
        "scss-css": ScssToCssRule,
        "html-jsx": html_to_jsx,
        "jsx-html": jsx_to_html,
        "sql-json": SqlToJsonSchemaRule,
        "dockerfile-bash": DockerfileToBashRule,
    }


class RuleRegistry:
    """Exact-match lookup table from a language pair to its rule."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: Dict[RuleKey, Rule] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: Rule, *, replace: bool = False) -> None:
        if not isinstance(rule, Rule):
            raise TypeError(f"Expected a Rule instance, got {type(rule).__name__}")
        key = (rule.source.lower(), rule.target.lower())
        if key in self._rules and not replace:
            raise ValueError(f"A rule for {key[0]} -> {key[1]} is already registered")
        self._rules[key] = rule

    def get(self, source: str, target: str) -> Optional[Rule]:
        return self._rules.get(((source or "").lower(), (target or "").lower()))

    def pairs(self) -> Tuple[RuleKey, ...]:
        return tuple(self._rules)

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


def discover_rules(
    enabled: Sequence[str] | None = None,
    *,
    indent_unit: int = DEFAULT_INDENT_UNIT,
) -> List[Rule]:
    """Return built-in and plugin rules, honoring optional enabled pair ids.

    Pair ids look like ``"javascript-typescript"``. A plugin rule for a pair
    that is already covered is skipped.
    """

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    rules: List[Rule] = []
    seen: Set[RuleKey] = set()

    def _add(name: str, factory: Callable[[], Rule]) -> None:
        if enabled_set is not None and name.lower() not in enabled_set:
            return
        instance = factory()
        if not isinstance(instance, Rule):
            raise TypeError(f"Rule factory for '{name}' did not return a Rule instance")
        if instance.key in seen:
            return
        rules.append(instance)
        seen.add(instance.key)
        if enabled_set is not None:
            enabled_set.discard(name.lower())

    for name, factory in _builtin_factories(indent_unit).items():
        _add(name, factory)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - depends on installed plugins
            raise RuntimeError(f"Failed to load rule entry point '{entry.name}': {exc}") from exc
        _add(entry.name, partial(_coerce_rule, loaded))

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown rules requested: {missing}")

    return rules


def _coerce_rule(obj: object) -> Rule:
    if isinstance(obj, Rule):
        return obj
    if isinstance(obj, type) and issubclass(obj, Rule):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, Rule):
            return instance
    raise TypeError("Rule entry point must be a Rule subclass, instance or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


@lru_cache(maxsize=None)
def default_registry(indent_unit: int = DEFAULT_INDENT_UNIT) -> RuleRegistry:
    """Registry of every discoverable rule, built once per indent unit."""
    return RuleRegistry(discover_rules(indent_unit=indent_unit))


__all__ = ["RuleKey", "RuleRegistry", "default_registry", "discover_rules"]
