"""Tests for rule registration and plugin discovery."""

from __future__ import annotations

from typing import Any, List

import pytest

from codeshift.rewrite import Rule, RuleRegistry, default_registry, discover_rules
from codeshift.rewrite import registry as registry_module


class _UpperRule(Rule):
    source = "text"
    target = "shout"

    def apply(self, text: str) -> str:
        return text.upper()


class _FakeEntryPoint:
    def __init__(self, name: str, target: Any) -> None:
        self.name = name
        self._target = target

    def load(self) -> Any:
        return self._target


def test_default_registry_covers_builtin_pairs() -> None:
    registry = default_registry()

    assert len(registry) == 12
    assert ("javascript", "typescript") in registry
    assert ("dockerfile", "bash") in registry
    assert registry.get("JavaScript", "TypeScript") is not None
    assert registry.get("json", "yaml") is None


def test_register_rejects_duplicates_unless_replacing() -> None:
    registry = RuleRegistry([_UpperRule()])
    replacement = _UpperRule()

    with pytest.raises(ValueError):
        registry.register(_UpperRule())
    registry.register(replacement, replace=True)

    assert registry.get("text", "shout") is replacement
    assert registry.pairs() == (("text", "shout"),)


def test_register_rejects_non_rules() -> None:
    with pytest.raises(TypeError):
        RuleRegistry().register(object())  # type: ignore[arg-type]


def test_discover_rules_honours_enabled_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(registry_module, "_iter_entry_points", lambda: [])

    rules = discover_rules(["css-scss", "SQL-JSON"])

    assert [rule.key for rule in rules] == [("css", "scss"), ("sql", "json")]
    with pytest.raises(ValueError):
        discover_rules(["css-less"])


def test_discover_rules_loads_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    entries: List[_FakeEntryPoint] = [
        _FakeEntryPoint("text-shout", _UpperRule),
        _FakeEntryPoint("css-scss-override", lambda: _OverrideRule()),
    ]
    monkeypatch.setattr(registry_module, "_iter_entry_points", lambda: entries)

    rules = discover_rules()
    registry = RuleRegistry(rules)

    assert registry.get("text", "shout").apply("hi") == "HI"  # type: ignore[union-attr]
    # The built-in css -> scss rule wins over the plugin registered later.
    assert not isinstance(registry.get("css", "scss"), _OverrideRule)


def test_discover_rules_rejects_invalid_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        registry_module, "_iter_entry_points", lambda: [_FakeEntryPoint("bad", 42)]
    )

    with pytest.raises(TypeError):
        discover_rules()


class _OverrideRule(Rule):
    source = "css"
    target = "scss"

    def apply(self, text: str) -> str:
        return text
