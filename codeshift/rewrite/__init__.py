"""Rule-based rewrite engine."""

from .base import Rule, Substitution, SubstitutionRule
from .engine import convert
from .fallback import FallbackRule, render_fallback
from .indentation import braces_to_indent, indent_to_braces
from .registry import RuleRegistry, default_registry, discover_rules

__all__ = [
    "FallbackRule",
    "Rule",
    "RuleRegistry",
    "Substitution",
    "SubstitutionRule",
    "braces_to_indent",
    "convert",
    "default_registry",
    "discover_rules",
    "indent_to_braces",
    "render_fallback",
]
