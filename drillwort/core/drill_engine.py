"""Keystroke validation state machine for drilling a single word.

The engine receives the full value of the input box after every edit (not
single characters) and keeps ``user_input`` equal to the longest correct prefix
of the current phase's expected string.  A wrong character is reported through
``has_error`` / ``error_char`` and never removes characters that were already
correct.

Dead-key composition is handled through an explicit two-call protocol:
``on_composition_start`` snapshots the validated prefix, ``on_composition_end``
validates the composed value and restores the prefix when the platform reports
only the composed character.

All comparisons happen on NFC-normalized text.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Protocol, Tuple

from drillwort.core.phases import DrillPhase, WordType

logger = logging.getLogger(__name__)

NORMALIZATION_FORM = "NFC"

# Typed after a complete article to lock it in.
ARTICLE_SEPARATOR = " "


def normalize_text(text: str) -> str:
    return unicodedata.normalize(NORMALIZATION_FORM, text or "")


def first_mismatch(value: str, expected: str) -> int:
    """Index of the first character of *value* that disagrees with *expected*.

    Positions past the end of *expected* always disagree.  Returns
    ``len(value)`` when *value* is a prefix of *expected*.
    """
    for index, char in enumerate(value):
        if index >= len(expected) or char != expected[index]:
            return index
    return len(value)


@dataclass(frozen=True)
class Segment:
    """A locked-in piece of display text for the current word."""

    text: str
    color_class: Optional[str] = None


@dataclass(frozen=True)
class DisplayMetadata:
    color_class: Optional[str] = None


class WordSource(Protocol):
    def expected_input(self, word: Any, phase: DrillPhase, language: str) -> str:
        ...

    def display_metadata(self, word: Any, phase: DrillPhase) -> DisplayMetadata:
        ...


class PhaseSequencer(Protocol):
    def phase_order(self, word_type: WordType, language: str) -> List[DrillPhase]:
        ...

    def transition_glue(self, from_phase: DrillPhase, to_phase: DrillPhase, language: str) -> str:
        ...


@dataclass
class DrillState:
    phase: DrillPhase
    user_input: str = ""
    expected_input: str = ""
    has_error: bool = False
    error_char: str = ""
    completed_segments: List[Segment] = field(default_factory=list)
    prefix_before_composition: str = ""
    # Value the visible input box should hold.
    input_value: str = ""
    is_composing: bool = False
    error_count: int = 0


Listener = Callable[["DrillEngine"], None]


class DrillEngine:
    """Drives one word through its phases, validating every keystroke.

    The caller forwards input box events (``on_input``, ``on_backspace_key``,
    the composition pair) and the reveal key (``on_reveal``), then reads the
    state back through the properties or ``snapshot()``.  Listeners registered
    with ``subscribe`` are called after every state change.  The word is done
    when ``phase`` is ``DrillPhase.COMPLETE``.
    """

    def __init__(
        self,
        word: Any,
        language: str,
        word_source: WordSource,
        sequencer: PhaseSequencer,
        word_type: Optional[WordType] = None,
    ) -> None:
        self._word = word
        self._language = language
        self._word_source = word_source
        self._sequencer = sequencer
        if word_type is None:
            word_type = word.word_type
        self._phases: Tuple[DrillPhase, ...] = tuple(sequencer.phase_order(word_type, language))
        if not self._phases or self._phases[-1] is not DrillPhase.COMPLETE:
            raise ValueError(f"Phase order must end with 'complete': {[p.value for p in self._phases]}")
        self._phase_index = 0
        self._listeners: List[Listener] = []
        self._state = DrillState(phase=self._phases[0])
        self._enter_phase(0, previous=None)

    # ------------------------------------------------------------------
    # Snapshot accessors
    # ------------------------------------------------------------------

    @property
    def word(self) -> Any:
        return self._word

    @property
    def language(self) -> str:
        return self._language

    @property
    def phases(self) -> Tuple[DrillPhase, ...]:
        return self._phases

    @property
    def phase(self) -> DrillPhase:
        return self._state.phase

    @property
    def user_input(self) -> str:
        return self._state.user_input

    @property
    def expected_input(self) -> str:
        return self._state.expected_input

    @property
    def has_error(self) -> bool:
        return self._state.has_error

    @property
    def error_char(self) -> str:
        return self._state.error_char

    @property
    def completed_segments(self) -> Tuple[Segment, ...]:
        return tuple(self._state.completed_segments)

    @property
    def input_value(self) -> str:
        return self._state.input_value

    @property
    def is_composing(self) -> bool:
        return self._state.is_composing

    @property
    def prefix_before_composition(self) -> str:
        return self._state.prefix_before_composition

    @property
    def error_count(self) -> int:
        """Number of mismatched inputs since the word was presented."""
        return self._state.error_count

    @property
    def is_complete(self) -> bool:
        return self._state.phase.is_terminal

    @property
    def is_editable(self) -> bool:
        return self._state.phase.is_entry

    @property
    def remaining_text(self) -> str:
        """Part of the expected string the user has not typed yet."""
        return self._state.expected_input[len(self._state.user_input):]

    def display_text(self) -> str:
        return "".join(segment.text for segment in self._state.completed_segments)

    def snapshot(self) -> DrillState:
        return replace(self._state, completed_segments=list(self._state.completed_segments))

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def on_input(self, raw_value: str) -> None:
        """Handle the input box's full value after an edit."""
        if not self.is_editable:
            return
        raw_value = normalize_text(raw_value)
        if self._state.is_composing:
            # Provisional glyphs (a bare accent) are not judged until composition ends.
            self._state.input_value = raw_value
            self._notify()
            return
        self._accept(raw_value)
        self._notify()

    def validate(self, raw_value: str) -> None:
        """Validate *raw_value* against the expected string of the current phase."""
        if not self.is_editable:
            return
        self._accept(normalize_text(raw_value))
        self._notify()

    def on_backspace_key(self) -> bool:
        """Handle Backspace before the input box applies it.

        Returns True when the key only acknowledged an error and the native
        deletion must be suppressed.
        """
        if self._state.is_composing or not self.is_editable:
            return False
        if not self._state.has_error:
            return False
        self._clear_error()
        self._notify()
        return True

    def on_composition_start(self) -> None:
        if not self.is_editable:
            return
        self._state.is_composing = True
        self._state.prefix_before_composition = self._state.user_input
        self._notify()

    def on_composition_end(self, composition_data: str, input_value: str) -> None:
        """Validate the result of a composition sequence.

        Some platforms report only the composed character as the box value,
        dropping everything typed before the composition started.  In that
        case the value is rebuilt from the snapshot and *composition_data*.
        """
        if not self.is_editable:
            return
        composition_data = normalize_text(composition_data)
        input_value = normalize_text(input_value)
        prefix = self._state.prefix_before_composition if self._state.is_composing else ""
        self._state.is_composing = False
        self._state.prefix_before_composition = ""

        value = input_value
        if not input_value.startswith(prefix):
            value = prefix + composition_data
            logger.debug("Composition dropped prefix %r (box held %r); restored %r", prefix, input_value, value)
        self._state.input_value = value
        self._accept(value)
        self._notify()

    def on_reveal(self) -> bool:
        """Advance through one reveal phase (translation, examples).

        Returns False when the current phase is not a reveal phase.
        """
        phase = self._state.phase
        if not phase.is_reveal:
            return False
        self._enter_phase(self._phase_index + 1, previous=phase)
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accept(self, value: str) -> None:
        state = self._state
        # The separator counts only once the whole article has been accepted.
        if (
            state.phase is DrillPhase.ARTICLE
            and state.expected_input
            and state.user_input == state.expected_input
            and value == state.user_input + ARTICLE_SEPARATOR
        ):
            state.user_input = state.expected_input
            self._clear_error()
            self._complete_phase()
            return
        self._validate(value)

    def _validate(self, value: str) -> None:
        state = self._state
        expected = state.expected_input
        if value == expected[: len(value)]:
            self._clear_error()
            state.user_input = value
            state.input_value = value
            # A complete article waits for the separator.
            if value == expected and state.phase is not DrillPhase.ARTICLE:
                self._complete_phase()
            return

        index = first_mismatch(value, expected)
        state.has_error = True
        state.error_char = value[index]
        state.user_input = expected[:index]
        state.input_value = state.user_input
        state.error_count += 1
        logger.debug("Mismatch in %s at %d: %r", state.phase.value, index, state.error_char)

    def _clear_error(self) -> None:
        self._state.has_error = False
        self._state.error_char = ""

    def _complete_phase(self) -> None:
        state = self._state
        phase = state.phase
        metadata = self._word_source.display_metadata(self._word, phase)
        state.completed_segments.append(Segment(state.user_input, metadata.color_class))
        logger.debug("Completed %s with %r", phase.value, state.user_input)
        self._enter_phase(self._phase_index + 1, previous=phase)

    def _enter_phase(self, index: int, previous: Optional[DrillPhase]) -> None:
        phase = self._phases[index]
        expected = self._expected_for(phase)
        # An entry phase with nothing to type is a trivial match.
        while phase.is_entry and not expected:
            logger.debug("Skipping %s: no expected input", phase.value)
            index += 1
            phase = self._phases[index]
            expected = self._expected_for(phase)

        state = self._state
        if previous is not None:
            glue = self._sequencer.transition_glue(previous, phase, self._language)
            if glue:
                state.completed_segments.append(Segment(glue))
        self._phase_index = index
        state.phase = phase
        state.expected_input = expected
        state.user_input = ""
        state.input_value = ""
        self._clear_error()
        if phase.is_terminal:
            logger.debug("Word complete: %s", self.display_text())

    def _expected_for(self, phase: DrillPhase) -> str:
        if not phase.is_entry:
            return ""
        return normalize_text(self._word_source.expected_input(self._word, phase, self._language))

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


def preview_segments(
    word: Any,
    language: str,
    word_source: WordSource,
    sequencer: PhaseSequencer,
    word_type: Optional[WordType] = None,
) -> List[Segment]:
    """Segments the drill of *word* produces once every entry phase is typed."""
    if word_type is None:
        word_type = word.word_type
    segments: List[Segment] = []
    previous: Optional[DrillPhase] = None
    for phase in sequencer.phase_order(word_type, language):
        if not phase.is_entry:
            continue
        expected = normalize_text(word_source.expected_input(word, phase, language))
        if not expected:
            continue
        if previous is not None:
            glue = sequencer.transition_glue(previous, phase, language)
            if glue:
                segments.append(Segment(glue))
        segments.append(Segment(expected, word_source.display_metadata(word, phase).color_class))
        previous = phase
    return segments
