"""Base classes for rewrite rules."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, Union

Replacement = Union[str, Callable[[re.Match], str]]
TextPass = Callable[[str], str]


class Rule(ABC):
    """Contract for a rewrite between one ordered pair of language tags."""

    source: str
    target: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)

    @abstractmethod
    def apply(self, text: str) -> str:
        """Return the rewritten text; raise on internal failure."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source!r} -> {self.target!r})"


@dataclass(frozen=True)
class Substitution:
    """One regex replacement step of a substitution pipeline."""

    pattern: re.Pattern
    replacement: Replacement

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def sub(pattern: str, replacement: Replacement, flags: int = 0) -> Substitution:
    """Shorthand for building a :class:`Substitution`; patterns are multi-line."""
    return Substitution(re.compile(pattern, flags | re.MULTILINE), replacement)


class SubstitutionRule(Rule):
    """Rule made of ordered substitutions followed by optional text passes.

    Each step only sees the text left behind by the previous one.
    """

    def __init__(
        self,
        source: str,
        target: str,
        steps: Sequence[Substitution],
        *,
        postprocess: Sequence[TextPass] = (),
    ) -> None:
        self.source = source
        self.target = target
        self.steps: Tuple[Substitution, ...] = tuple(steps)
        self.postprocess: Tuple[TextPass, ...] = tuple(postprocess)

    def apply(self, text: str) -> str:
        for step in self.steps:
            text = step.apply(text)
        for text_pass in self.postprocess:
            text = text_pass(text)
        return text


__all__ = ["Replacement", "Rule", "Substitution", "SubstitutionRule", "TextPass", "sub"]
