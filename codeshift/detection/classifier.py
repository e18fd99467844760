"""Heuristic language classifier driven by the pattern catalog.

Scoring counts every non-overlapping match of every signature pattern, so a
language hit by several distinct fragments outranks one hit once. When two
languages score equally the one registered first in the catalog wins. That
tie-break is an artifact of registration order, not a ranking policy, and
callers should not rely on it.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..catalog import PatternCatalog, default_catalog
from ..logging import get_logger

_LOGGER = get_logger("detection")


def score(text: str, catalog: PatternCatalog | None = None) -> Dict[str, int]:
    """Return match counts per language, omitting languages with no hits."""
    if not text or not text.strip():
        return {}
    if catalog is None:
        catalog = default_catalog()
    scores: Dict[str, int] = {}
    for tag, patterns in catalog.items():
        total = 0
        for pattern in patterns:
            total += sum(1 for _ in pattern.finditer(text))
        if total > 0:
            scores[tag] = total
    return scores


def rank(text: str, catalog: PatternCatalog | None = None) -> List[Tuple[str, int]]:
    """Return ``(tag, score)`` pairs, best first; ties keep catalog order."""
    scores = score(text, catalog)
    # sorted() is stable and dict order follows catalog registration order.
    return sorted(scores.items(), key=lambda item: item[1], reverse=True)


def detect(text: str, catalog: PatternCatalog | None = None) -> Optional[str]:
    """Return the best-scoring language tag for ``text`` or None."""
    if not isinstance(text, str) or not text.strip():
        return None
    ranked = rank(text, catalog)
    if not ranked:
        _LOGGER.debug("No catalog pattern matched %d characters of input", len(text))
        return None
    winner, best = ranked[0]
    _LOGGER.debug("Detected %s (score %d) from %s", winner, best, ranked[:3])
    return winner


__all__ = ["detect", "rank", "score"]
