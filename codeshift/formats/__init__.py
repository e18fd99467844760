"""Structured-format codecs pivoting through a shared intermediate value."""

from __future__ import annotations

from types import ModuleType
from typing import Dict, Tuple

from ..errors import ValidationError
from ..models import IntermediateValue
from . import json_codec, xml_codec, yaml_codec

CODECS: Dict[str, ModuleType] = {
    json_codec.FORMAT: json_codec,
    yaml_codec.FORMAT: yaml_codec,
    xml_codec.FORMAT: xml_codec,
}


def supported_formats() -> Tuple[str, ...]:
    return tuple(CODECS)


def _codec_for(fmt: str) -> ModuleType:
    codec = CODECS.get((fmt or "").lower())
    if codec is None:
        raise ValidationError(f"Unsupported structured format: {fmt!r}", field="format")
    return codec


def decode(text: str, fmt: str) -> IntermediateValue:
    """Parse ``text`` written in ``fmt`` into an intermediate value."""
    if not isinstance(text, str):
        raise ValidationError("Input must be a string", field="text")
    return _codec_for(fmt).decode(text)


def encode(value: IntermediateValue, fmt: str) -> str:
    """Render an intermediate value as ``fmt`` text."""
    return _codec_for(fmt).encode(value)


__all__ = ["CODECS", "decode", "encode", "supported_formats"]
