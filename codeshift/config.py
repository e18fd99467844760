"""Configuration loading for codeshift (.codeshift.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .catalog import PatternCatalog, default_catalog
from .errors import CodeshiftError
from .rewrite.indentation import DEFAULT_INDENT_UNIT
from .rewrite.registry import RuleRegistry, default_registry
from .validators.sanitizer import MAX_INPUT_BYTES, validate_regex_pattern

CONFIG_FILENAME = ".codeshift.yml"

ENV_MAX_INPUT_BYTES = "CODESHIFT_MAX_INPUT_BYTES"
ENV_RATE_LIMIT = "CODESHIFT_RATE_LIMIT"
ENV_HISTORY_CAPACITY = "CODESHIFT_HISTORY_CAPACITY"


class ConfigError(CodeshiftError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SanitizerConfig:
    """Input limits applied before detection and conversion."""

    max_input_bytes: int = MAX_INPUT_BYTES
    block_dangerous: bool = True


@dataclass
class RateLimitConfig:
    """Sliding-window limit on conversions."""

    max_requests: int = 100
    window_seconds: float = 60.0


@dataclass
class HistoryConfig:
    capacity: int = 10


@dataclass
class RewriteConfig:
    indent_unit: int = DEFAULT_INDENT_UNIT


@dataclass
class CatalogConfig:
    """Extra signature patterns merged into the built-in catalog."""

    extra_patterns: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class CodeshiftConfig:
    """Represents the settings defined in .codeshift.yml."""

    root: Path
    sanitizer: SanitizerConfig = field(default_factory=SanitizerConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    rewrite: RewriteConfig = field(default_factory=RewriteConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    def build_catalog(self) -> PatternCatalog:
        """Return the default catalog extended with configured patterns."""
        base = default_catalog()
        if not self.catalog.extra_patterns:
            return base
        return base.extend(self.catalog.extra_patterns)

    def build_registry(self) -> RuleRegistry:
        return default_registry(self.rewrite.indent_unit)


def load_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> CodeshiftConfig:
    """Load configuration from disk and apply environment overrides."""
    config_file = _resolve_config_path(config_path or Path.cwd())
    root = config_file.parent.resolve()
    config = CodeshiftConfig(root=root)

    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
        _apply_file_settings(config, data)

    _apply_env_overrides(config, os.environ if environ is None else environ)
    return config


def _apply_file_settings(config: CodeshiftConfig, data: Dict[str, Any]) -> None:
    sanitizer_data = _as_dict(data.get("sanitizer"))
    if sanitizer_data:
        max_bytes = _as_int(sanitizer_data.get("max_input_bytes"))
        if max_bytes is not None:
            config.sanitizer.max_input_bytes = _positive(max_bytes, "sanitizer.max_input_bytes")
        block = _as_bool(sanitizer_data.get("block_dangerous"))
        if block is not None:
            config.sanitizer.block_dangerous = block

    rate_data = _as_dict(data.get("rate_limit"))
    if rate_data:
        max_requests = _as_int(rate_data.get("max_requests"))
        if max_requests is not None:
            config.rate_limit.max_requests = _positive(max_requests, "rate_limit.max_requests")
        window = _as_float(rate_data.get("window_seconds"))
        if window is not None:
            config.rate_limit.window_seconds = _positive(window, "rate_limit.window_seconds")

    history_data = _as_dict(data.get("history"))
    capacity = _as_int(history_data.get("capacity")) if history_data else None
    if capacity is not None:
        config.history.capacity = _positive(capacity, "history.capacity")

    rewrite_data = _as_dict(data.get("rewrite"))
    indent_unit = _as_int(rewrite_data.get("indent_unit")) if rewrite_data else None
    if indent_unit is not None:
        config.rewrite.indent_unit = _positive(indent_unit, "rewrite.indent_unit")

    catalog_data = _as_dict(data.get("catalog"))
    extra = _as_dict(catalog_data.get("extra_patterns")) if catalog_data else {}
    patterns: Dict[str, List[str]] = {}
    for tag, raw_patterns in extra.items():
        key = str(tag).strip().lower()
        values = _as_str_list(raw_patterns)
        if not key or not values:
            raise ConfigError(f"catalog.extra_patterns.{tag} must list at least one pattern")
        for pattern in values:
            result = validate_regex_pattern(pattern)
            if not result.is_valid:
                raise ConfigError(f"catalog.extra_patterns.{key}: {result.error}")
        patterns[key] = values
    config.catalog.extra_patterns = patterns


def _apply_env_overrides(config: CodeshiftConfig, environ: Mapping[str, str]) -> None:
    max_bytes = _env_int(environ, ENV_MAX_INPUT_BYTES)
    if max_bytes is not None:
        config.sanitizer.max_input_bytes = max_bytes
    rate_limit = _env_int(environ, ENV_RATE_LIMIT)
    if rate_limit is not None:
        config.rate_limit.max_requests = rate_limit
    capacity = _env_int(environ, ENV_HISTORY_CAPACITY)
    if capacity is not None:
        config.history.capacity = capacity


def _env_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    value = _as_int(raw.strip())
    if value is None:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    return _positive(value, name)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _positive(value: Any, name: str) -> Any:
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CatalogConfig",
    "CodeshiftConfig",
    "ConfigError",
    "HistoryConfig",
    "RateLimitConfig",
    "RewriteConfig",
    "SanitizerConfig",
    "load_config",
]
