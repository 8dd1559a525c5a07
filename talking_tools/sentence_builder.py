"""
SentenceBuilder: combine a pronoun and an activity into a spoken sentence.

Each pronoun has its own rule set.  Rules only ever prepend words; the
activity text itself is passed through after trimming.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Tuple, Union

from .pronouns import Pronoun

# Possessive: "my" as a whole word at the start.
_POSSESSIVE_RE = re.compile(r"^my\b", re.IGNORECASE | re.ASCII)

# "I" phrases that already read as a verb phrase.  Matched as whole
# leading words, hence the trailing space.
_SINGULAR_DIRECT: Tuple[str, ...] = (
    "go to ", "take ", "set ", "watch ", "order ",
    "prepare ", "call ", "need ", "send ",
)

# "We" phrases that become suggestions ("Let's ...").  Matched as word
# prefixes: "watcher" counts as "watch".
_PLURAL_SUGGEST: Tuple[str, ...] = (
    "watch", "prepare", "order", "start", "choose", "set",
)


def _possessive(activity: str) -> str:
    if _POSSESSIVE_RE.match(activity):
        return activity
    return f"My {activity}"


def _singular(activity: str) -> str:
    if activity.lower().startswith(_SINGULAR_DIRECT):
        return f"I {activity}"
    return f"I want to {activity}"


def _plural(activity: str) -> str:
    if activity.lower().startswith(_PLURAL_SUGGEST):
        return f"Let's {activity}"
    return f"We will {activity}"


_RULES: Dict[Pronoun, Callable[[str], str]] = {
    Pronoun.MY: _possessive,
    Pronoun.I: _singular,
    Pronoun.WE: _plural,
}


class SentenceBuilder:
    """Build sentences from a pronoun and a chosen activity."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, pronoun: Union[Pronoun, str], activity: str) -> str:
        """
        Return the sentence for *activity* spoken from *pronoun*'s
        perspective.

        Args:
            pronoun: A Pronoun or its label.
            activity: Activity phrase; surrounding whitespace is dropped.

        Returns:
            A non-empty sentence.
        """
        return _RULES[Pronoun.parse(pronoun)](activity.strip())


_DEFAULT_BUILDER = SentenceBuilder()


def build_prompt(pronoun: Union[Pronoun, str], base_phrase: str, activity: str) -> str:
    """
    Sentence for *activity* from *pronoun*'s perspective.

    *base_phrase* is accepted for interface compatibility with callers that
    track the selected topic; it does not influence the result.
    """
    return _DEFAULT_BUILDER.build(pronoun, activity)
