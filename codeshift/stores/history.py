"""In-memory conversion history, newest entry first."""

from __future__ import annotations

import threading
import uuid
from collections import deque
from typing import Deque, List, Optional

from ..models import ConversionHistoryEntry

DEFAULT_CAPACITY = 10


class HistoryLog:
    """Fixed-capacity log of successful conversions.

    Recording past capacity silently drops the oldest entry.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("History capacity must be positive")
        self.capacity = capacity
        self._entries: Deque[ConversionHistoryEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def record(
        self, conversion_label: str, source_text: str, result_text: str
    ) -> ConversionHistoryEntry:
        entry = ConversionHistoryEntry(
            id=uuid.uuid4().hex,
            conversion_label=conversion_label,
            source_text=source_text,
            result_text=result_text,
        )
        with self._lock:
            # deque(maxlen) drops from the opposite end of appendleft.
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[ConversionHistoryEntry]:
        with self._lock:
            return list(self._entries)

    def latest(self) -> Optional[ConversionHistoryEntry]:
        with self._lock:
            return self._entries[0] if self._entries else None

    def get(self, entry_id: str) -> Optional[ConversionHistoryEntry]:
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["DEFAULT_CAPACITY", "HistoryLog"]
