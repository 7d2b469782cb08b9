"""Text-to-speech playback of drilled words and example sentences."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QLocale, QObject
from PySide6.QtTextToSpeech import QTextToSpeech

from drillwort.core.grammar import speech_locale

logger = logging.getLogger(__name__)

# Slightly slower than normal for learners.
SPEECH_RATE = -0.1


class Speaker(QObject):
    """Speaks text in the voice of the drilled language when audio is enabled."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._engine: Optional[QTextToSpeech] = None
        self._enabled = True
        if not QTextToSpeech.availableEngines():
            logger.warning("No text-to-speech engine available; audio disabled")
            return
        self._engine = QTextToSpeech(self)
        self._engine.setRate(SPEECH_RATE)

    @property
    def available(self) -> bool:
        return self._engine is not None

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.stop()

    def speak(self, text: str, language: str) -> None:
        if not text or not self._enabled or self._engine is None:
            return
        self._engine.stop()
        locale = QLocale(speech_locale(language))
        self._engine.setLocale(locale)
        voices = self._engine.availableVoices()
        match = next((v for v in voices if v.locale().language() == locale.language()), None)
        if match is not None:
            self._engine.setVoice(match)
        else:
            logger.info("No %s voice installed; using the default voice", language)
        self._engine.say(text)

    def stop(self) -> None:
        if self._engine is not None:
            self._engine.stop()
