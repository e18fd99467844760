"""Host-side validation of user input."""

from .sanitizer import (
    MAX_INPUT_BYTES,
    ValidationResult,
    sanitize_html,
    validate_conversion_params,
    validate_input,
    validate_regex_pattern,
)

__all__ = [
    "MAX_INPUT_BYTES",
    "ValidationResult",
    "sanitize_html",
    "validate_conversion_params",
    "validate_input",
    "validate_regex_pattern",
]
