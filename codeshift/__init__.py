"""codeshift: heuristic language detection and rule-based code conversion."""

from .detection import detect
from .errors import (
    CodeshiftError,
    ConversionError,
    FormatError,
    RateLimitExceeded,
    ValidationError,
)
from .formats import decode, encode
from .models import ConversionHistoryEntry, ConversionSuggestion
from .planning import suggest
from .rewrite import convert

__version__ = "0.1.0"

__all__ = [
    "CodeshiftError",
    "ConversionError",
    "ConversionHistoryEntry",
    "ConversionSuggestion",
    "FormatError",
    "RateLimitExceeded",
    "ValidationError",
    "convert",
    "decode",
    "detect",
    "encode",
    "suggest",
]
