"""
Pronoun: the grammatical perspective a spoken sentence is built from.

The set is closed: first-person singular, first-person plural and possessive.
Presentation order (I, We, My) is the declaration order.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Union


class Pronoun(str, Enum):
    """Closed set of sentence perspectives."""

    I = "I"
    WE = "We"
    MY = "My"

    @classmethod
    def parse(cls, value: Union["Pronoun", str]) -> "Pronoun":
        """
        Return the Pronoun whose label is *value*.

        Args:
            value: A Pronoun member or one of the labels ``"I"``, ``"We"``,
                   ``"My"``.  Surrounding whitespace is ignored.

        Raises:
            ValueError: If *value* is not a known label.
        """
        if isinstance(value, cls):
            return value
        label = str(value).strip()
        for member in cls:
            if member.value == label:
                return member
        raise ValueError(
            f"Unknown pronoun '{value}'. Valid pronouns: {labels()}"
        )


def labels() -> List[str]:
    """Pronoun labels in presentation order."""
    return [p.value for p in Pronoun]
