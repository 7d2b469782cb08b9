"""Drill phases and the per-language phase sequencer."""

from __future__ import annotations

from enum import Enum
from typing import List

from drillwort.core.grammar import has_gender, verb_pronoun


class WordType(str, Enum):
    NOUN = "noun"
    VERB = "verb"


class DrillPhase(str, Enum):
    """One sub-step of drilling a single word."""

    ARTICLE = "article"
    SINGULAR = "singular"
    PLURAL = "plural"
    DEFINITE = "definite"
    INFINITIVE = "infinitive"
    CONJUGATION = "conjugation"
    CONJUGATION2 = "conjugation2"
    CONJUGATION3 = "conjugation3"
    TRANSLATION = "translation"
    EXAMPLE_TARGET = "example-target"
    EXAMPLE_BASE = "example-base"
    COMPLETE = "complete"

    @property
    def is_reveal(self) -> bool:
        return self in REVEAL_PHASES

    @property
    def is_terminal(self) -> bool:
        return self is DrillPhase.COMPLETE

    @property
    def is_entry(self) -> bool:
        """True for phases the user types an expected string into."""
        return not (self.is_reveal or self.is_terminal)


REVEAL_PHASES = (
    DrillPhase.TRANSLATION,
    DrillPhase.EXAMPLE_TARGET,
    DrillPhase.EXAMPLE_BASE,
)

CONJUGATION_PHASES = (
    DrillPhase.CONJUGATION,
    DrillPhase.CONJUGATION2,
    DrillPhase.CONJUGATION3,
)

# Languages that drill the definite singular form after the plural.
_DEFINITE_FORM_LANGUAGES = ("no",)


class LanguagePhaseSequencer:
    """Phase order and display glue for nouns and verbs in each language.

    In full conjugation mode verbs drill all three conjugated forms; otherwise
    only the first one.
    """

    def __init__(self, full_conjugation: bool = False) -> None:
        self._full_conjugation = full_conjugation

    @property
    def full_conjugation(self) -> bool:
        return self._full_conjugation

    def phase_order(self, word_type: WordType, language: str) -> List[DrillPhase]:
        word_type = WordType(word_type)
        phases: List[DrillPhase] = []
        if word_type is WordType.NOUN:
            if has_gender(language):
                phases.append(DrillPhase.ARTICLE)
            phases.extend([DrillPhase.SINGULAR, DrillPhase.PLURAL])
            if language in _DEFINITE_FORM_LANGUAGES:
                phases.append(DrillPhase.DEFINITE)
        else:
            phases.extend([DrillPhase.INFINITIVE, DrillPhase.CONJUGATION])
            if self._full_conjugation:
                phases.extend([DrillPhase.CONJUGATION2, DrillPhase.CONJUGATION3])
        phases.extend(REVEAL_PHASES)
        phases.append(DrillPhase.COMPLETE)
        return phases

    def transition_glue(self, from_phase: DrillPhase, to_phase: DrillPhase, language: str) -> str:
        """Fixed text inserted as its own segment when entering *to_phase*."""
        if not to_phase.is_entry:
            return ""
        if from_phase is DrillPhase.ARTICLE:
            return " "
        if to_phase in CONJUGATION_PHASES:
            pronoun = verb_pronoun(language)
            return f", {pronoun} " if pronoun else ", "
        if to_phase in (DrillPhase.PLURAL, DrillPhase.DEFINITE):
            return ", "
        return ""
