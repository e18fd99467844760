"""Exception hierarchy raised by codeshift components."""

from __future__ import annotations

from typing import Optional


class CodeshiftError(RuntimeError):
    """Base class for all codeshift failures."""


class ConversionError(CodeshiftError):
    """Raised when a rewrite could not produce a complete output text."""

    def __init__(
        self,
        message: str,
        *,
        stage: str = "rule",
        source: Optional[str] = None,
        target: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.source = source
        self.target = target


class FormatError(ConversionError):
    """Raised when structured input (JSON/YAML/XML) is malformed."""

    def __init__(
        self,
        message: str,
        *,
        format: str,
        line: Optional[int] = None,
        stage: str = "decode",
    ) -> None:
        location = f" (line {line})" if line is not None else ""
        if stage == "encode":
            text = f"Cannot encode {format.upper()}: {message}"
        else:
            text = f"Invalid {format.upper()} format: {message}{location}"
        super().__init__(text, stage=stage)
        self.format = format
        self.line = line


class ValidationError(CodeshiftError):
    """Raised when caller-supplied input violates a precondition."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class RateLimitExceeded(CodeshiftError):
    """Raised by the host session when the conversion rate limit is hit."""

    def __init__(self, message: str, *, retry_after: float = 0.0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


__all__ = [
    "CodeshiftError",
    "ConversionError",
    "FormatError",
    "RateLimitExceeded",
    "ValidationError",
]
