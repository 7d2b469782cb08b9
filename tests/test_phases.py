"""Tests for drillwort.core.phases – phase kinds and per-language sequencing."""

from __future__ import annotations

import pytest

from drillwort.core.phases import DrillPhase, LanguagePhaseSequencer, WordType

REVEAL = [DrillPhase.TRANSLATION, DrillPhase.EXAMPLE_TARGET, DrillPhase.EXAMPLE_BASE, DrillPhase.COMPLETE]


class TestDrillPhase:
    def test_values(self):
        assert DrillPhase("example-target") is DrillPhase.EXAMPLE_TARGET
        assert DrillPhase.CONJUGATION2.value == "conjugation2"

    def test_kinds(self):
        assert DrillPhase.ARTICLE.is_entry
        assert DrillPhase.TRANSLATION.is_reveal
        assert not DrillPhase.TRANSLATION.is_entry
        assert DrillPhase.COMPLETE.is_terminal
        assert not DrillPhase.COMPLETE.is_reveal
        assert not DrillPhase.COMPLETE.is_entry


class TestPhaseOrder:
    @pytest.fixture()
    def sequencer(self) -> LanguagePhaseSequencer:
        return LanguagePhaseSequencer()

    def test_german_noun(self, sequencer):
        assert sequencer.phase_order(WordType.NOUN, "de") == [
            DrillPhase.ARTICLE, DrillPhase.SINGULAR, DrillPhase.PLURAL,
        ] + REVEAL

    def test_norwegian_noun_has_definite(self, sequencer):
        order = sequencer.phase_order(WordType.NOUN, "no")
        assert order[:4] == [DrillPhase.ARTICLE, DrillPhase.SINGULAR, DrillPhase.PLURAL, DrillPhase.DEFINITE]

    def test_english_noun_has_no_article(self, sequencer):
        assert sequencer.phase_order(WordType.NOUN, "en")[0] is DrillPhase.SINGULAR

    def test_verb(self, sequencer):
        assert sequencer.phase_order(WordType.VERB, "fr") == [DrillPhase.INFINITIVE, DrillPhase.CONJUGATION] + REVEAL

    def test_full_conjugation(self):
        order = LanguagePhaseSequencer(full_conjugation=True).phase_order(WordType.VERB, "de")
        assert order[:4] == [
            DrillPhase.INFINITIVE, DrillPhase.CONJUGATION, DrillPhase.CONJUGATION2, DrillPhase.CONJUGATION3,
        ]

    def test_accepts_string_word_type(self, sequencer):
        assert sequencer.phase_order("verb", "de")[0] is DrillPhase.INFINITIVE

    def test_always_ends_with_complete(self, sequencer):
        for lang in ("de", "fr", "es", "no", "en"):
            for word_type in WordType:
                assert sequencer.phase_order(word_type, lang)[-1] is DrillPhase.COMPLETE


class TestTransitionGlue:
    @pytest.fixture()
    def sequencer(self) -> LanguagePhaseSequencer:
        return LanguagePhaseSequencer()

    def test_after_article(self, sequencer):
        assert sequencer.transition_glue(DrillPhase.ARTICLE, DrillPhase.SINGULAR, "de") == " "

    def test_before_plural(self, sequencer):
        assert sequencer.transition_glue(DrillPhase.SINGULAR, DrillPhase.PLURAL, "de") == ", "

    def test_before_definite(self, sequencer):
        assert sequencer.transition_glue(DrillPhase.PLURAL, DrillPhase.DEFINITE, "no") == ", "

    @pytest.mark.parametrize("language, glue", [("de", ", du "), ("fr", ", tu "), ("es", ", tú "), ("no", ", ")])
    def test_before_conjugation(self, sequencer, language, glue):
        assert sequencer.transition_glue(DrillPhase.INFINITIVE, DrillPhase.CONJUGATION, language) == glue

    def test_between_conjugations(self, sequencer):
        assert sequencer.transition_glue(DrillPhase.CONJUGATION, DrillPhase.CONJUGATION2, "de") == ", du "

    def test_none_into_reveal(self, sequencer):
        assert sequencer.transition_glue(DrillPhase.PLURAL, DrillPhase.TRANSLATION, "de") == ""
