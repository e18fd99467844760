"""Core data models shared across codeshift components."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Union

LanguageTag = str

IntermediateValue = Union[
    str,
    int,
    float,
    bool,
    None,
    List["IntermediateValue"],
    Dict[str, "IntermediateValue"],
]


@dataclass(frozen=True)
class ConversionSuggestion:
    """One offered conversion between two language tags."""

    id: str
    name: str
    description: str
    icon: str
    source: LanguageTag
    target: LanguageTag


@dataclass(frozen=True)
class ConversionHistoryEntry:
    """A successful conversion recorded in the session history."""

    id: str
    conversion_label: str
    source_text: str
    result_text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = [
    "ConversionHistoryEntry",
    "ConversionSuggestion",
    "IntermediateValue",
    "LanguageTag",
]
