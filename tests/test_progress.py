"""Tests for drillwort.core.progress – spaced repetition scheduling and persistence."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from drillwort.core.progress import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    ProgressStats,
    ProgressStore,
    WordProgress,
    calculate_next_review,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@dataclass(frozen=True)
class FakeWord:
    word_id: str


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def store(tmp_path: Path) -> ProgressStore:
    """ProgressStore backed by a temp file so tests don't touch ~/.drillwort."""
    return ProgressStore(tmp_path / "progress.json")


# ---------------------------------------------------------------------------
# WordProgress dataclass
# ---------------------------------------------------------------------------

class TestWordProgress:
    def test_defaults(self):
        wp = WordProgress()
        assert wp.correct_count == 0
        assert wp.incorrect_count == 0
        assert wp.ease_factor == DEFAULT_EASE_FACTOR
        assert wp.interval == 0
        assert wp.next_review == ""


# ---------------------------------------------------------------------------
# calculate_next_review
# ---------------------------------------------------------------------------

class TestCalculateNextReview:
    def test_first_correct_answer(self):
        ease, interval, next_review = calculate_next_review(True, 2.5, 0, NOW)
        assert interval == 1
        assert ease == 2.5  # capped
        assert next_review == NOW + timedelta(days=1)

    def test_second_correct_answer(self):
        _, interval, _ = calculate_next_review(True, 2.5, 1, NOW)
        assert interval == 6

    def test_later_intervals_scale_with_ease(self):
        ease, interval, _ = calculate_next_review(True, 2.0, 6, NOW)
        assert interval == 12
        assert ease == pytest.approx(2.1)

    def test_incorrect_resets_interval(self):
        ease, interval, next_review = calculate_next_review(False, 2.5, 15, NOW)
        assert interval == 0
        assert ease == pytest.approx(2.3)
        assert next_review == NOW

    def test_ease_never_below_minimum(self):
        ease, _, _ = calculate_next_review(False, 1.4, 0, NOW)
        assert ease == MIN_EASE_FACTOR


# ---------------------------------------------------------------------------
# ProgressStore – fresh state
# ---------------------------------------------------------------------------

class TestProgressStoreFresh:
    def test_no_file_returns_none(self, store: ProgressStore):
        assert store.get("de:noun:Haus") is None

    def test_unknown_word_is_due(self, store: ProgressStore):
        assert store.is_due("de:noun:Haus", NOW) is True


# ---------------------------------------------------------------------------
# ProgressStore – record_attempt
# ---------------------------------------------------------------------------

class TestRecordAttempt:
    def test_creates_new_entry(self, store: ProgressStore):
        wp = store.record_attempt("de:noun:Haus", True, NOW)
        assert wp.correct_count == 1
        assert wp.incorrect_count == 0
        assert wp.interval == 1
        assert store.get("de:noun:Haus") == wp

    def test_incorrect_attempt(self, store: ProgressStore):
        store.record_attempt("de:noun:Haus", True, NOW)
        wp = store.record_attempt("de:noun:Haus", False, NOW)
        assert wp.correct_count == 1
        assert wp.incorrect_count == 1
        assert wp.interval == 0

    def test_not_due_until_next_review(self, store: ProgressStore):
        store.record_attempt("de:noun:Haus", True, NOW)
        assert store.is_due("de:noun:Haus", NOW) is False
        assert store.is_due("de:noun:Haus", NOW + timedelta(days=1)) is True

    def test_persists_to_disk(self, store: ProgressStore):
        store.record_attempt("de:noun:Haus", True, NOW)
        data = json.loads(store.file_path.read_text(encoding="utf-8"))
        assert data["words"]["de:noun:Haus"]["correct_count"] == 1
        assert data["words"]["de:noun:Haus"]["last_reviewed"] == NOW.isoformat()

    def test_reloads_from_disk(self, store: ProgressStore):
        store.record_attempt("de:verb:hören", True, NOW)
        again = ProgressStore(store.file_path)
        assert again.get("de:verb:hören") == store.get("de:verb:hören")


# ---------------------------------------------------------------------------
# ProgressStore – words_due and stats
# ---------------------------------------------------------------------------

class TestWordsDue:
    def test_new_words_come_last(self, store: ProgressStore):
        old = FakeWord("de:noun:Haus")
        new = FakeWord("de:noun:Buch")
        store.record_attempt(old.word_id, False, NOW - timedelta(days=2))
        assert store.words_due([new, old], NOW) == [old, new]

    def test_excludes_scheduled_words(self, store: ProgressStore):
        learned = FakeWord("de:noun:Haus")
        store.record_attempt(learned.word_id, True, NOW)
        assert store.words_due([learned], NOW) == []

    def test_earliest_review_first(self, store: ProgressStore):
        a = FakeWord("a")
        b = FakeWord("b")
        store.record_attempt(a.word_id, False, NOW - timedelta(hours=1))
        store.record_attempt(b.word_id, False, NOW - timedelta(hours=5))
        assert store.words_due([a, b], NOW) == [b, a]


class TestStats:
    def test_empty(self, store: ProgressStore):
        stats = store.stats([FakeWord("a")], NOW)
        assert stats == ProgressStats(
            total=1, learned=0, mastered=0, total_correct=0, total_incorrect=0, accuracy=0, due_for_review=1
        )

    def test_counts(self, store: ProgressStore):
        words = [FakeWord("a"), FakeWord("b")]
        store.record_attempt("a", True, NOW)
        store.record_attempt("b", False, NOW)
        store.record_attempt("b", True, NOW)
        stats = store.stats(words, NOW)
        assert stats.learned == 2
        assert stats.total_correct == 2
        assert stats.total_incorrect == 1
        assert stats.accuracy == 67
        assert stats.due_for_review == 0

    def test_other_languages_are_not_counted(self, store: ProgressStore):
        for word_id in ("fr:noun:livre", "fr:noun:maison", "fr:verb:parler"):
            store.record_attempt(word_id, True, NOW)
        store.record_attempt("de:noun:Mutter", False, NOW)
        stats = store.stats([FakeWord("de:noun:Mutter")], NOW)
        assert stats.total == 1
        assert stats.learned == 0
        assert stats.total_correct == 0
        assert stats.total_incorrect == 1
        assert stats.accuracy == 0
        assert stats.learned <= stats.total

    def test_mastered(self, store: ProgressStore, tmp_path: Path):
        f = tmp_path / "mastered.json"
        f.write_text(json.dumps({"words": {"a": {"correct_count": 5, "interval": 30}}}), encoding="utf-8")
        s = ProgressStore(f)
        assert s.stats([FakeWord("a")], NOW).mastered == 1


# ---------------------------------------------------------------------------
# ProgressStore – reset
# ---------------------------------------------------------------------------

class TestReset:
    def test_reset_all(self, store: ProgressStore):
        store.record_attempt("a", True, NOW)
        store.reset()
        assert store.get("a") is None
        data = json.loads(store.file_path.read_text(encoding="utf-8"))
        assert data == {"words": {}}


# ---------------------------------------------------------------------------
# ProgressStore – loading edge cases
# ---------------------------------------------------------------------------

class TestLoadEdgeCases:
    def test_corrupt_json(self, tmp_path: Path):
        f = tmp_path / "progress.json"
        f.write_text("NOT VALID JSON", encoding="utf-8")
        s = ProgressStore(f)
        assert s.get("a") is None

    def test_missing_words_key(self, tmp_path: Path):
        f = tmp_path / "progress.json"
        f.write_text(json.dumps({"other": 1}), encoding="utf-8")
        assert ProgressStore(f).get("a") is None

    def test_entry_not_dict(self, tmp_path: Path):
        f = tmp_path / "progress.json"
        f.write_text(json.dumps({"words": {"a": "bad", "b": {"correct_count": 2}}}), encoding="utf-8")
        s = ProgressStore(f)
        assert s.get("a") is None
        assert s.get("b").correct_count == 2

    def test_entry_missing_fields(self, tmp_path: Path):
        f = tmp_path / "progress.json"
        f.write_text(json.dumps({"words": {"a": {}}}), encoding="utf-8")
        wp = ProgressStore(f).get("a")
        assert wp == WordProgress()

    def test_bad_review_date_is_due(self, tmp_path: Path):
        f = tmp_path / "progress.json"
        f.write_text(json.dumps({"words": {"a": {"next_review": "soon"}}}), encoding="utf-8")
        assert ProgressStore(f).is_due("a", NOW) is True
