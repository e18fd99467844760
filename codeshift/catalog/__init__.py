"""Language catalog: signature patterns and per-language metadata."""

from .catalog import (
    PatternCatalog,
    compile_pattern,
    default_catalog,
    display_name,
    family_of,
    icon,
)
from .constants import (
    DATA_FORMATS,
    DEFAULT_PATTERNS,
    FAMILIES,
    INFRA_LANGUAGES,
    MARKUP_LANGUAGES,
    MAX_SUGGESTIONS,
    PRIORITY_TARGETS,
    PROGRAMMING_LANGUAGES,
    STYLE_LANGUAGES,
)

__all__ = [
    "DATA_FORMATS",
    "DEFAULT_PATTERNS",
    "FAMILIES",
    "INFRA_LANGUAGES",
    "MARKUP_LANGUAGES",
    "MAX_SUGGESTIONS",
    "PRIORITY_TARGETS",
    "PROGRAMMING_LANGUAGES",
    "PatternCatalog",
    "STYLE_LANGUAGES",
    "compile_pattern",
    "default_catalog",
    "display_name",
    "family_of",
    "icon",
]
