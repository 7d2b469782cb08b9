from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
# Interval (days) from which a word counts as mastered.
MASTERED_INTERVAL = 21

W = TypeVar("W")


@dataclass
class WordProgress:
    correct_count: int = 0
    incorrect_count: int = 0
    last_reviewed: str = ""
    next_review: str = ""
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0


@dataclass(frozen=True)
class ProgressStats:
    total: int
    learned: int
    mastered: int
    total_correct: int
    total_incorrect: int
    accuracy: int
    due_for_review: int


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def calculate_next_review(
    correct: bool,
    ease_factor: float,
    interval: int,
    now: Optional[datetime] = None,
) -> Tuple[float, int, datetime]:
    """SM-2 style scheduling. Returns (ease_factor, interval_days, next_review)."""
    now = now or _now()
    if correct:
        if interval == 0:
            interval = 1
        elif interval == 1:
            interval = 6
        else:
            interval = round(interval * ease_factor)
        ease_factor = min(DEFAULT_EASE_FACTOR, ease_factor + 0.1)
    else:
        interval = 0
        ease_factor = max(MIN_EASE_FACTOR, ease_factor - 0.2)
    return ease_factor, interval, now + timedelta(days=interval)


class ProgressStore:
    """Stores per-word review progress. Persists to disk across app restarts.
    File: ~/.drillwort/progress.json unless another path is given."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or Path.home() / ".drillwort" / "progress.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._progress = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get(self, word_id: str) -> Optional[WordProgress]:
        return self._progress.get(word_id)

    def record_attempt(self, word_id: str, correct: bool, now: Optional[datetime] = None) -> WordProgress:
        now = now or _now()
        current = self._progress.get(word_id) or WordProgress()
        ease_factor, interval, next_review = calculate_next_review(
            correct, current.ease_factor, current.interval, now
        )
        updated = WordProgress(
            correct_count=current.correct_count + (1 if correct else 0),
            incorrect_count=current.incorrect_count + (0 if correct else 1),
            last_reviewed=now.isoformat(),
            next_review=next_review.isoformat(),
            ease_factor=ease_factor,
            interval=interval,
        )
        self._progress[word_id] = updated
        self._save()
        return updated

    def is_due(self, word_id: str, now: Optional[datetime] = None) -> bool:
        progress = self._progress.get(word_id)
        if progress is None:
            return True
        next_review = _parse_time(progress.next_review)
        return next_review is None or next_review <= (now or _now())

    def words_due(self, words: Iterable[W], now: Optional[datetime] = None) -> List[W]:
        """Words whose review date has passed, earliest first; new words last."""
        now = now or _now()
        due = [w for w in words if self.is_due(w.word_id, now)]

        def _sort_key(word: W) -> Tuple[int, datetime]:
            progress = self._progress.get(word.word_id)
            next_review = _parse_time(progress.next_review) if progress else None
            if next_review is None:
                return (1, now)
            return (0, next_review)

        return sorted(due, key=_sort_key)

    def stats(self, words: Iterable[W], now: Optional[datetime] = None) -> ProgressStats:
        words = list(words)
        # Only the given vocabulary counts; the store also holds other languages.
        records = [self._progress[w.word_id] for w in words if w.word_id in self._progress]
        total_correct = sum(p.correct_count for p in records)
        total_incorrect = sum(p.incorrect_count for p in records)
        attempts = total_correct + total_incorrect
        return ProgressStats(
            total=len(words),
            learned=sum(1 for p in records if p.correct_count > 0),
            mastered=sum(1 for p in records if p.interval >= MASTERED_INTERVAL),
            total_correct=total_correct,
            total_incorrect=total_incorrect,
            accuracy=round(total_correct / attempts * 100) if attempts else 0,
            due_for_review=len(self.words_due(words, now)),
        )

    def reset(self) -> None:
        """Clear all progress."""
        self._progress = {}
        self._save()

    def save(self) -> None:
        """Persist current state to disk (e.g. on app exit)."""
        self._save()

    def _load(self) -> Dict[str, WordProgress]:
        progress: Dict[str, WordProgress] = {}
        if not self._file_path.exists():
            return progress
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return progress

        words = payload.get("words", {}) if isinstance(payload, dict) else {}
        for word_id, value in words.items():
            if not isinstance(value, dict):
                continue
            progress[word_id] = WordProgress(
                correct_count=int(value.get("correct_count", 0)),
                incorrect_count=int(value.get("incorrect_count", 0)),
                last_reviewed=str(value.get("last_reviewed", "")),
                next_review=str(value.get("next_review", "")),
                ease_factor=float(value.get("ease_factor", DEFAULT_EASE_FACTOR)),
                interval=int(value.get("interval", 0)),
            )
        return progress

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"words": {key: asdict(value) for key, value in self._progress.items()}}
        try:
            self._file_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
