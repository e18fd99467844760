"""Strict JSON codec built on the standard library parser."""

from __future__ import annotations

import json
import math

from ..errors import FormatError
from ..models import IntermediateValue

FORMAT = "json"


def _reject_constant(name: str) -> IntermediateValue:
    raise ValueError(f"non-standard constant {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"number out of range: {literal}")
    return value


def decode(text: str) -> IntermediateValue:
    """Parse JSON text; NaN/Infinity literals and overflowing numbers are rejected."""
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as exc:
        raise FormatError(exc.msg, format=FORMAT, line=exc.lineno) from exc
    except (ValueError, RecursionError) as exc:
        raise FormatError(str(exc), format=FORMAT) from exc


def encode(value: IntermediateValue) -> str:
    """Serialise with two-space indentation, preserving key order."""
    try:
        return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise FormatError(str(exc), format=FORMAT, stage="encode") from exc


__all__ = ["FORMAT", "decode", "encode"]
