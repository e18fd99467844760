"""Host-side input sanitizer run before detection and conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import ValidationError

MAX_INPUT_BYTES = 1024 * 1024

DANGEROUS_PATTERNS: Sequence[re.Pattern[str]] = (
    re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE),
    re.compile(r"\beval\s*\(", re.IGNORECASE),
    re.compile(r"\bFunction\s*\("),
    re.compile(r"require\s*\(\s*['\"]fs['\"]\s*\)", re.IGNORECASE),
    re.compile(r"import\s+.*\bfs\b", re.IGNORECASE),
    re.compile(r"fetch\s*\(", re.IGNORECASE),
    re.compile(r"XMLHttpRequest", re.IGNORECASE),
    re.compile(r"exec\s*\(", re.IGNORECASE),
    re.compile(r"spawn\s*\(", re.IGNORECASE),
)

# Regex constructs rejected in user-supplied catalog patterns.
_UNSAFE_REGEX_CONSTRUCTS: Sequence[re.Pattern[str]] = (
    re.compile(r"\(\?!"),
    re.compile(r"\(\?="),
    re.compile(r"\(\?<!"),
    re.compile(r"\(\?<="),
    re.compile(r"\*\+"),
    re.compile(r"\+\*"),
    re.compile(r"\{\d+,\}"),
)

_LANGUAGE_IDENTIFIER = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a sanitizer check; ``sanitized`` is set only when valid."""

    is_valid: bool
    error: Optional[str] = None
    sanitized: Optional[str] = None

    def raise_for_error(self, field: str | None = None) -> str:
        """Return the sanitized text or raise :class:`ValidationError`."""
        if not self.is_valid:
            raise ValidationError(self.error or "Invalid input", field=field)
        return self.sanitized or ""


def validate_input(
    text: str,
    *,
    max_bytes: int = MAX_INPUT_BYTES,
    block_dangerous: bool = True,
) -> ValidationResult:
    """Check size and dangerous markers, then normalise line endings and trim."""
    if not isinstance(text, str):
        return ValidationResult(False, "Input must be a string")
    if len(text.encode("utf-8")) > max_bytes:
        return ValidationResult(False, f"Input too large. Maximum size is {max_bytes // 1024}KB")
    if block_dangerous and any(pattern.search(text) for pattern in DANGEROUS_PATTERNS):
        return ValidationResult(False, "Input contains potentially dangerous code patterns")
    sanitized = text.replace("\r\n", "\n").replace("\r", "\n").strip()
    return ValidationResult(True, sanitized=sanitized)


def validate_conversion_params(
    text: str,
    source: str | None,
    target: str | None,
    *,
    max_bytes: int = MAX_INPUT_BYTES,
    block_dangerous: bool = True,
) -> ValidationResult:
    """Validate the input text plus the source and target language tags."""
    result = validate_input(text, max_bytes=max_bytes, block_dangerous=block_dangerous)
    if not result.is_valid:
        return result
    if not source or not target:
        return ValidationResult(False, "Source and target languages must be specified")
    if not _LANGUAGE_IDENTIFIER.match(source) or not _LANGUAGE_IDENTIFIER.match(target):
        return ValidationResult(False, "Invalid language identifier format")
    return ValidationResult(True, sanitized=result.sanitized)


def sanitize_html(text: str) -> str:
    """Escape text for embedding in HTML."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
        .replace("/", "&#x2F;")
    )


def validate_regex_pattern(pattern: str) -> ValidationResult:
    """Reject lookarounds, nested quantifiers and unbounded repeats."""
    if any(construct.search(pattern) for construct in _UNSAFE_REGEX_CONSTRUCTS):
        return ValidationResult(False, "Regex pattern contains potentially dangerous constructs")
    try:
        re.compile(pattern)
    except re.error as exc:
        return ValidationResult(False, f"Invalid regex pattern: {exc}")
    return ValidationResult(True, sanitized=pattern)


__all__ = [
    "DANGEROUS_PATTERNS",
    "MAX_INPUT_BYTES",
    "ValidationResult",
    "sanitize_html",
    "validate_conversion_params",
    "validate_input",
    "validate_regex_pattern",
]
