"""
ActivityCatalog: static lookup from a topic key to candidate activities.

Keys are lowercase and trimmed.  Candidate order is the priority order in
which suggestions are offered.  The table is built once at import time and
exposed read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple


# Topic key -> activities, in presentation order.
_ACTIVITIES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "sleep": (
        "go to sleep",
        "take a nap",
        "set a sleep timer",
        "talk about sleep schedule",
    ),
    "sleeping": (
        "go to sleep",
        "nap for 30 minutes",
        "adjust sleeping schedule",
        "sleep well wishes",
    ),
    "watch tv": (
        "watch TV",
        "change channel",
        "start streaming",
        "recommend a show",
    ),
    "watch": (
        "watch TV",
        "watch a movie",
        "turn on the show",
        "choose what to watch",
    ),
    "eat": (
        "have dinner",
        "order food",
        "prepare a snack",
        "set mealtime reminder",
    ),
    "hungry": (
        "grab something to eat",
        "order food",
        "prepare a snack",
        "drink water",
    ),
    "help": (
        "call for help",
        "need assistance",
        "send emergency alert",
    ),
})

# Base phrases offered to the user before any free-form input.
BASE_PHRASES: Tuple[str, ...] = ("sleeping", "watch tv", "hungry", "help", "eat")


def normalize_key(text: str) -> str:
    """Trim and lowercase *text* the same way catalog keys are stored."""
    return text.strip().lower()


class ActivityCatalog:
    """Read-only view over the topic -> activities table."""

    def __init__(self, entries: Optional[Mapping[str, Tuple[str, ...]]] = None) -> None:
        """
        Args:
            entries: Alternate table, mainly for tests.  Keys are normalized
                     on the way in.  Defaults to the built-in catalog.
        """
        if entries is None:
            self._entries = _ACTIVITIES
        else:
            self._entries = MappingProxyType(
                {normalize_key(k): tuple(v) for k, v in entries.items()}
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def lookup(self, key: str) -> Optional[Tuple[str, ...]]:
        """
        Return the candidate activities for *key*, or None if there is no
        entry.  The key is normalized before the lookup.
        """
        return self._entries.get(normalize_key(key))

    def keys(self) -> List[str]:
        """Catalog keys in declaration order."""
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_key(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_CATALOG = ActivityCatalog()
