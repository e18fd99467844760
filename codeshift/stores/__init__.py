"""Host-side stores."""

from .history import DEFAULT_CAPACITY, HistoryLog

__all__ = ["DEFAULT_CAPACITY", "HistoryLog"]
