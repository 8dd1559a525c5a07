"""
TalkingSession: selection state and the speak flow for one user.

Holds the current pronoun, the current base phrase and its suggestions, and
the session history.  Activating a suggestion builds the sentence with the
current pronoun, hands it to the speech output and, once spoken, records it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Union

from .config import TalkingConfig
from .phrase_history import PhraseHistory
from .pronouns import Pronoun
from .sentence_builder import SentenceBuilder
from .speech_output import SpeechOutput
from .suggestion_generator import SuggestionGenerator

logger = logging.getLogger(__name__)


class TalkingSession:
    """Caller-side state around the suggestion generator and sentence builder."""

    def __init__(
        self,
        config: TalkingConfig,
        speech: Optional[SpeechOutput] = None,
        generator: Optional[SuggestionGenerator] = None,
        builder: Optional[SentenceBuilder] = None,
    ) -> None:
        self.config = config
        self.speech = speech if speech is not None else SpeechOutput(config.speech)
        self.generator = generator or SuggestionGenerator()
        self.builder = builder or SentenceBuilder()
        self.history = PhraseHistory(limit=config.history_limit)

        self.pronoun: Pronoun = config.default_pronoun
        self.base_phrase: str = ""
        self.suggestions: List[str] = []

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_pronoun(self, pronoun: Union[Pronoun, str]) -> Pronoun:
        """
        Make *pronoun* the current perspective.

        Raises:
            ValueError: If the pronoun is unknown or disabled in config.
        """
        selected = Pronoun.parse(pronoun)
        if selected not in self.config.pronouns:
            raise ValueError(f"Pronoun '{selected.value}' is not enabled")
        self.pronoun = selected
        return selected

    def select_base(self, base: str) -> List[str]:
        """Make *base* the current topic and replace the suggestion list."""
        self.base_phrase = base
        self.suggestions = self.generator.generate(base)
        logger.debug(
            "suggestions generated",
            extra={"base": base, "count": len(self.suggestions)},
        )
        return list(self.suggestions)

    def prompts(self) -> List[Tuple[str, str]]:
        """Current suggestions paired with their sentence for the current pronoun."""
        return [(s, self.sentence_for(s)) for s in self.suggestions]

    def sentence_for(self, activity: str) -> str:
        return self.builder.build(self.pronoun, activity)

    # ------------------------------------------------------------------
    # Speaking
    # ------------------------------------------------------------------

    def activate(self, choice: Union[int, str]) -> Dict[str, str]:
        """
        Speak the suggestion picked by *choice*.

        Args:
            choice: Index into the current suggestions, or the activity text
                    of one of them.

        Returns:
            A dict with ``status`` (``"ok"`` or ``"error"``), ``sentence``
            and ``message``.  The sentence is only added to history when it
            was spoken, or when speech is disabled in config.

        Raises:
            ValueError: No base phrase selected yet, or *choice* is not one
                        of the current suggestions.
            IndexError: *choice* is an index outside the suggestion list.
        """
        if not self.suggestions:
            raise ValueError("Select a base phrase before choosing a suggestion")

        activity = self._resolve(choice)
        sentence = self.sentence_for(activity)

        if not self.config.speech.enabled:
            self.history.record(sentence)
            return {"status": "ok", "sentence": sentence, "message": "speech disabled"}

        result = self.speech.speak(sentence)
        if result["status"] != "ok":
            return {"status": "error", "sentence": sentence, "message": result["message"]}

        self.history.record(sentence)
        return {"status": "ok", "sentence": sentence, "message": result["message"]}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _resolve(self, choice: Union[int, str]) -> str:
        if isinstance(choice, int):
            if not 0 <= choice < len(self.suggestions):
                raise IndexError(
                    f"Suggestion {choice} out of range (0-{len(self.suggestions) - 1})"
                )
            return self.suggestions[choice]
        if choice not in self.suggestions:
            raise ValueError(f"'{choice}' is not one of the current suggestions")
        return choice
