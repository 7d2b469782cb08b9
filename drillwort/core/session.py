from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, List, Optional

from drillwort.core.drill_engine import DrillEngine, PhaseSequencer, WordSource


@dataclass
class WordResult:
    """Outcome of drilling a single word."""

    word_id: str
    correct: bool
    errors: int
    skipped: bool = False


class DrillSession:
    """Drills a queue of words, one live DrillEngine at a time.

    A word counts as correct when it reached the ``complete`` phase without a
    single mismatched input.  Skipped words count as incorrect.
    """

    def __init__(
        self,
        words: List[Any],
        language: str,
        word_source: WordSource,
        sequencer: PhaseSequencer,
        start_index: int = 0,
    ) -> None:
        self._words = list(words)
        self._language = language
        self._word_source = word_source
        self._sequencer = sequencer
        self._index = start_index
        self._start_time = time.time()
        self._engine: Optional[DrillEngine] = None
        self._correct = 0
        self._incorrect = 0

    @property
    def index(self) -> int:
        """Index of the current word (0-based)."""
        return self._index

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def total_words(self) -> int:
        return len(self._words)

    @property
    def language(self) -> str:
        return self._language

    @property
    def correct_count(self) -> int:
        return self._correct

    @property
    def incorrect_count(self) -> int:
        return self._incorrect

    @property
    def engine(self) -> Optional[DrillEngine]:
        """Engine of the word being drilled, if one was started."""
        return self._engine

    def current_word(self) -> Any:
        return self._words[self._index]

    def is_complete(self) -> bool:
        """Return True if every word has been submitted or skipped."""
        return self._index >= len(self._words)

    def start_word(self) -> DrillEngine:
        """Create a fresh engine for the current word, discarding any previous one."""
        word = self.current_word()
        self._engine = DrillEngine(word, self._language, self._word_source, self._sequencer)
        return self._engine

    def submit(self) -> WordResult:
        """Score the finished word and move on to the next one."""
        engine = self._engine
        if engine is None or not engine.is_complete:
            raise RuntimeError("The current word has not reached the complete phase")
        correct = engine.error_count == 0
        return self._finish(WordResult(word_id=engine.word.word_id, correct=correct, errors=engine.error_count))

    def skip(self) -> WordResult:
        """Abandon the current word; it is scored as incorrect."""
        word = self.current_word()
        errors = self._engine.error_count if self._engine is not None else 0
        return self._finish(WordResult(word_id=word.word_id, correct=False, errors=errors, skipped=True))

    def accuracy(self) -> float:
        """Share of correctly drilled words as a percentage."""
        total = self._correct + self._incorrect
        return (self._correct / total) * 100.0 if total else 0.0

    def _finish(self, result: WordResult) -> WordResult:
        if result.correct:
            self._correct += 1
        else:
            self._incorrect += 1
        self._engine = None
        self._index += 1
        return result
