"""
PhraseHistory: spoken sentences for the current session, newest first.

Nothing is written to disk; the history lives as long as its session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, List, Optional

DEFAULT_HISTORY_LIMIT = 20


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: datetime
    text: str

    def render(self) -> str:
        return f"{self.timestamp.strftime('%H:%M:%S')} - {self.text}"


class PhraseHistory:
    """Bounded, most-recent-first list of spoken sentences."""

    def __init__(
        self,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Args:
            limit: Maximum number of entries kept (must be positive).
            clock: Returns the current local time; injectable for tests.

        Raises:
            ValueError: If *limit* is not positive.
        """
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self._clock = clock or datetime.now
        self._entries: List[HistoryEntry] = []

    def record(self, text: str) -> HistoryEntry:
        """Add *text* as the newest entry, dropping the oldest past the limit."""
        entry = HistoryEntry(timestamp=self._clock(), text=text)
        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        return entry

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def lines(self) -> List[str]:
        """Rendered entries, newest first."""
        return [e.render() for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
