"""
SpeechOutput: speak finished sentences through the local TTS engine.

Wraps pyttsx3.  The engine is created on first use; only one utterance is
active at a time, and a new one stops whatever is still playing.  A platform
without a working speech driver is reported as an error status, never as an
exception.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Optional

import pyttsx3

from .config import SpeechSettings

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Speech synthesis not supported on this platform."

# Errors pyttsx3 drivers raise when no backend is usable.
_DRIVER_ERRORS = (RuntimeError, OSError, ImportError)


def _voice_language(voice: Any) -> str:
    """Flatten a pyttsx3 voice's language tags (str or bytes) into one string."""
    parts = []
    for lang in getattr(voice, "languages", None) or []:
        if isinstance(lang, bytes):
            lang = lang.decode("utf-8", errors="ignore")
        parts.append(str(lang))
    parts.append(str(getattr(voice, "id", "")))
    return " ".join(parts)


class SpeechOutput:
    """Vocalize sentences, one at a time."""

    def __init__(
        self,
        settings: Optional[SpeechSettings] = None,
        engine_factory: Callable[[], Any] = pyttsx3.init,
    ) -> None:
        """
        Args:
            settings: Voice language, rate and volume multipliers.
            engine_factory: Creates the TTS engine.  Replaced in tests.
        """
        self.settings = settings or SpeechSettings()
        self._engine_factory = engine_factory
        self._engine: Any = None
        self._unsupported = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def speak(self, text: str) -> Dict[str, str]:
        """
        Speak *text*, interrupting any utterance still in progress.

        Returns:
            ``{"status": "ok", ...}`` once the utterance has been played, or
            ``{"status": "error", "message": ...}`` if speech is unavailable.
        """
        engine = self._get_engine()
        if engine is None:
            return {"status": "error", "message": UNSUPPORTED_MESSAGE}

        try:
            engine.stop()
            engine.say(text)
            engine.runAndWait()
        except _DRIVER_ERRORS as exc:
            logger.warning("speech playback failed", extra={"error": str(exc)})
            return {"status": "error", "message": f"Speech playback failed: {exc}"}

        logger.info("spoke sentence", extra={"text": text})
        return {"status": "ok", "message": "spoken"}

    @property
    def available(self) -> bool:
        return self._get_engine() is not None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get_engine(self) -> Any:
        if self._engine is not None or self._unsupported:
            return self._engine
        try:
            engine = self._engine_factory()
            self._configure(engine)
        except _DRIVER_ERRORS as exc:
            # Stays unsupported for the life of this object.
            self._unsupported = True
            logger.warning(UNSUPPORTED_MESSAGE, extra={"error": str(exc)})
            return None
        self._engine = engine
        return engine

    def _configure(self, engine: Any) -> None:
        """Pick a voice in the configured language and scale rate/volume."""
        pattern = re.compile(re.escape(self.settings.voice_language), re.IGNORECASE)
        for voice in engine.getProperty("voices") or []:
            if pattern.search(_voice_language(voice)):
                engine.setProperty("voice", voice.id)
                logger.debug("selected voice", extra={"voice": voice.id})
                break

        rate = engine.getProperty("rate")
        if rate:
            engine.setProperty("rate", int(rate * self.settings.rate))
        volume = min(max(self.settings.volume, 0.0), 1.0)
        engine.setProperty("volume", volume)
