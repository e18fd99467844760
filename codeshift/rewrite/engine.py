"""Dispatches a conversion to a rule, a codec pair or the fallback."""

from __future__ import annotations

from typing import Any, Callable, Protocol

from .. import formats
from ..catalog import DATA_FORMATS
from ..errors import CodeshiftError, ConversionError, FormatError, ValidationError
from ..logging import get_logger
from .base import Rule
from .fallback import FallbackRule
from .registry import RuleRegistry, default_registry

logger = get_logger("rewrite")


class ConversionRequest(Protocol):
    source: str
    target: str


def convert(
    text: str,
    suggestion: ConversionRequest,
    *,
    registry: RuleRegistry | None = None,
) -> str:
    """Rewrite ``text`` for ``suggestion.source -> suggestion.target``.

    Returns the complete output or raises; never a partial result.
    """
    if not isinstance(text, str):
        raise ValidationError("Input text must be a string", field="text")
    source = (getattr(suggestion, "source", "") or "").strip().lower()
    target = (getattr(suggestion, "target", "") or "").strip().lower()
    if not source:
        raise ValidationError("Source language must be specified", field="source")
    if not target:
        raise ValidationError("Target language must be specified", field="target")

    if registry is None:
        registry = default_registry()

    rule = registry.get(source, target)
    if rule is not None:
        logger.debug("Converting %s -> %s with %r", source, target, rule)
        return _apply_rule(rule, text)
    if source in DATA_FORMATS and target in DATA_FORMATS:
        logger.debug("Converting %s -> %s through the format codecs", source, target)
        return _transcode(text, source, target)
    logger.debug("No rule for %s -> %s; using the generic fallback", source, target)
    return FallbackRule(source, target).apply(text)


def _apply_rule(rule: Rule, text: str) -> str:
    try:
        result = rule.apply(text)
    except FormatError as exc:
        exc.source, exc.target = rule.source, rule.target
        raise
    except CodeshiftError:
        raise
    except Exception as exc:
        raise ConversionError(
            f"Conversion failed at rule stage ({rule.source} -> {rule.target}): {exc}",
            stage="rule",
            source=rule.source,
            target=rule.target,
        ) from exc
    if not isinstance(result, str):
        raise ConversionError(
            f"Conversion failed at rule stage ({rule.source} -> {rule.target}): "
            f"rule returned {type(result).__name__}",
            stage="rule",
            source=rule.source,
            target=rule.target,
        )
    return result


def _transcode(text: str, source: str, target: str) -> str:
    value = _run_stage("decode", lambda: formats.decode(text, source), source, target)
    return _run_stage("encode", lambda: formats.encode(value, target), source, target)


def _run_stage(stage: str, call: Callable[[], Any], source: str, target: str) -> Any:
    try:
        return call()
    except FormatError as exc:
        exc.source, exc.target = source, target
        raise
    except CodeshiftError:
        raise
    except Exception as exc:
        raise ConversionError(
            f"Conversion failed at {stage} stage ({source} -> {target}): {exc}",
            stage=stage,
            source=source,
            target=target,
        ) from exc


__all__ = ["ConversionRequest", "convert"]
