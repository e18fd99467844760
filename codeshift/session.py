"""Host orchestration around the stateless core."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .catalog import PatternCatalog, display_name, family_of, icon
from .config import CodeshiftConfig, load_config
from .detection import rank
from .errors import CodeshiftError, RateLimitExceeded
from .limits import RateLimiter
from .logging import get_logger
from .models import ConversionHistoryEntry, ConversionSuggestion
from .planning import SuggestionPlanner, build_suggestion
from .rewrite import RuleRegistry, convert
from .rewrite.engine import ConversionRequest
from .stores import HistoryLog
from .telemetry import (
    EventSink,
    LoggingEventSink,
    track_conversion_completed,
    track_conversion_failed,
    track_history_cleared,
    track_language_detected,
)
from .validators import validate_conversion_params, validate_input


@dataclass(frozen=True)
class Analysis:
    """Detected language plus the conversions offered for it."""

    language: Optional[str]
    suggestions: List[ConversionSuggestion] = field(default_factory=list)
    scores: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ConversionOutcome:
    result: str
    entry: ConversionHistoryEntry


@dataclass(frozen=True)
class LanguageInfo:
    tag: str
    name: str
    icon: str
    family: Optional[str]


class ConverterSession:
    """Runs limiter, sanitizer, core conversion, history and telemetry in order."""

    def __init__(
        self,
        config: CodeshiftConfig | None = None,
        *,
        catalog: PatternCatalog | None = None,
        planner: SuggestionPlanner | None = None,
        registry: RuleRegistry | None = None,
        history: HistoryLog | None = None,
        limiter: RateLimiter | None = None,
        events: EventSink | None = None,
    ) -> None:
        self.config = config or CodeshiftConfig(root=Path.cwd())
        self.catalog = catalog if catalog is not None else self.config.build_catalog()
        self.planner = planner if planner is not None else SuggestionPlanner()
        self.registry = registry if registry is not None else self.config.build_registry()
        self.history = (
            history if history is not None else HistoryLog(self.config.history.capacity)
        )
        self.limiter = limiter if limiter is not None else RateLimiter(
            self.config.rate_limit.max_requests,
            self.config.rate_limit.window_seconds,
        )
        self.events: EventSink = events if events is not None else LoggingEventSink()
        self.logger = get_logger("session")

    @classmethod
    def from_path(cls, config_path: Path | None = None) -> "ConverterSession":
        """Build a session from ``.codeshift.yml`` (and environment overrides)."""
        return cls(load_config(config_path))

    def analyze(self, text: str) -> Analysis:
        """Detect the language of ``text`` and plan suggestions for it."""
        # Detection only reads the text, so dangerous markers are not rejected here.
        sanitized = validate_input(
            text,
            max_bytes=self.config.sanitizer.max_input_bytes,
            block_dangerous=False,
        ).raise_for_error("text")
        ranked = rank(sanitized, self.catalog)
        language = ranked[0][0] if ranked else None
        scores = dict(ranked)
        track_language_detected(self.events, language, len(sanitized))
        self.logger.debug("Analysis picked %s from %s", language, scores)
        return Analysis(
            language=language,
            suggestions=self.planner.suggest(language, sanitized),
            scores=scores,
        )

    def suggest(self, language: Optional[str], text: str) -> List[ConversionSuggestion]:
        return self.planner.suggest(language, text)

    def convert(self, text: str, suggestion: ConversionRequest) -> ConversionOutcome:
        """Convert ``text`` and record the result; errors propagate unchanged."""
        source = (getattr(suggestion, "source", "") or "").lower()
        target = (getattr(suggestion, "target", "") or "").lower()
        started = time.perf_counter()
        try:
            if not self.limiter.is_allowed():
                retry_after = self.limiter.retry_after()
                raise RateLimitExceeded(
                    f"Rate limit exceeded. Try again in {retry_after:.0f}s",
                    retry_after=retry_after,
                )
            sanitized = validate_conversion_params(
                text,
                source,
                target,
                max_bytes=self.config.sanitizer.max_input_bytes,
                block_dangerous=self.config.sanitizer.block_dangerous,
            ).raise_for_error("text")
            result = convert(sanitized, suggestion, registry=self.registry)
        except CodeshiftError as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            track_conversion_failed(
                self.events, source, target, error=exc, elapsed_ms=elapsed_ms
            )
            self.logger.warning("Conversion %s -> %s failed: %s", source, target, exc)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        label = getattr(suggestion, "name", None) or (
            f"{display_name(source)} to {display_name(target)}"
        )
        entry = self.history.record(label, sanitized, result)
        track_conversion_completed(
            self.events,
            source,
            target,
            input_length=len(sanitized),
            output_length=len(result),
            elapsed_ms=elapsed_ms,
        )
        self.logger.info("Converted %s -> %s in %.1f ms", source, target, elapsed_ms)
        return ConversionOutcome(result=result, entry=entry)

    def convert_pair(self, text: str, source: str, target: str) -> ConversionOutcome:
        return self.convert(text, build_suggestion(source.lower(), target.lower()))

    def restore(self, entry_id: str) -> Optional[ConversionHistoryEntry]:
        """Return a recorded conversion so a caller can reload its texts."""
        return self.history.get(entry_id)

    def clear_history(self) -> int:
        removed = self.history.clear()
        track_history_cleared(self.events, removed)
        return removed

    def languages(self) -> List[LanguageInfo]:
        return [
            LanguageInfo(tag=tag, name=display_name(tag), icon=icon(tag), family=family_of(tag))
            for tag in self.catalog.tags()
        ]


__all__ = [
    "Analysis",
    "ConversionOutcome",
    "ConverterSession",
    "LanguageInfo",
]
