from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

import pytest

from codeshift.config import CodeshiftConfig
from codeshift.limits import RateLimiter
from codeshift.session import ConverterSession
from codeshift.telemetry import MemoryEventSink
from tests._fixtures.clock import FakeClock


@pytest.fixture(autouse=True)
def _restore_codeshift_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps seeing codeshift records."""
    logger = logging.getLogger("codeshift")
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def events() -> MemoryEventSink:
    return MemoryEventSink()


@pytest.fixture
def make_session(tmp_path: Path, events: MemoryEventSink) -> Callable[..., ConverterSession]:
    """Build sessions rooted at tmp_path that record events in memory."""

    def _factory(**overrides: object) -> ConverterSession:
        config = overrides.pop("config", None) or CodeshiftConfig(root=tmp_path)
        overrides.setdefault("events", events)
        return ConverterSession(config, **overrides)  # type: ignore[arg-type]

    return _factory


@pytest.fixture
def strict_limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(max_requests=2, window_seconds=10.0, clock=clock)
