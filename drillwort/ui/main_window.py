from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QEvent, Qt, QTimer
from PySide6.QtGui import QCloseEvent, QInputMethodEvent, QKeyEvent
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from drillwort.core.drill_engine import DrillEngine
from drillwort.core.grammar import LANGUAGES, language_label, verb_form_label
from drillwort.core.phases import DrillPhase, LanguagePhaseSequencer
from drillwort.core.progress import ProgressStore
from drillwort.core.session import DrillSession
from drillwort.core.settings import SettingsStore
from drillwort.core.vocabulary import Noun, VocabularyRepository, VocabularyWordSource
from drillwort.ui.colors import DrillColors
from drillwort.ui.speech import Speaker
from drillwort.ui.typing_widgets import PromptLabel, RevealCard, SegmentDisplay

logger = logging.getLogger(__name__)

_NOUN_PHASE_LABELS = {
    DrillPhase.ARTICLE: "Article",
    DrillPhase.SINGULAR: "Singular",
    DrillPhase.PLURAL: "Plural",
    DrillPhase.DEFINITE: "Definite form",
}


class MainWindow(QMainWindow):
    """Drill window: one word at a time, typed into a hidden input box.

    Key presses and input-method events of the hidden ``QLineEdit`` are
    forwarded to the current ``DrillEngine``; the engine decides what the box
    may contain and the window renders the engine state.
    """

    def __init__(
        self,
        vocabulary: VocabularyRepository,
        progress_store: ProgressStore,
        settings_store: SettingsStore,
    ) -> None:
        super().__init__()
        self._vocabulary = vocabulary
        self._progress_store = progress_store
        self._settings_store = settings_store
        self._word_source = VocabularyWordSource()
        self._sequencer = LanguagePhaseSequencer()
        self._session: Optional[DrillSession] = None
        self._engine: Optional[DrillEngine] = None
        self._last_phase: Optional[DrillPhase] = None
        self._syncing_input = False

        self._speaker = Speaker(self)
        self._speaker.set_enabled(self._settings_store.value.audio_enabled)

        self._build_ui()
        self._start_session()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setWindowTitle("Drillwort")
        self.setMinimumSize(900, 600)
        self.setStyleSheet(f"QMainWindow {{ background: {DrillColors.BG_MAIN}; }}")

        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 16, 24, 24)
        layout.setSpacing(16)
        self.setCentralWidget(root)

        settings = self._settings_store.value
        header = QHBoxLayout()
        title = QLabel("Drillwort")
        title.setStyleSheet(f"QLabel {{ font-size: 24px; font-weight: 800; color: {DrillColors.PRIMARY}; }}")
        header.addWidget(title)
        header.addStretch(1)

        self._target_combo = self._language_combo(settings.target_language)
        self._base_combo = self._language_combo(settings.base_language)
        header.addWidget(QLabel("Learn"))
        header.addWidget(self._target_combo)
        header.addWidget(QLabel("from"))
        header.addWidget(self._base_combo)

        self._full_conjugation_check = QCheckBox("All verb forms")
        self._full_conjugation_check.setChecked(settings.full_conjugation_mode)
        self._audio_check = QCheckBox("Audio")
        self._audio_check.setChecked(settings.audio_enabled)
        self._audio_check.setEnabled(self._speaker.available)
        header.addWidget(self._full_conjugation_check)
        header.addWidget(self._audio_check)
        layout.addLayout(header)

        self._stats_label = QLabel()
        self._stats_label.setStyleSheet(f"QLabel {{ color: {DrillColors.TEXT_SECONDARY}; font-size: 14px; }}")
        layout.addWidget(self._stats_label)

        self._drill_card = QFrame()
        self._drill_card.setObjectName("drillCard")
        card_layout = QVBoxLayout(self._drill_card)
        card_layout.setContentsMargins(32, 28, 32, 28)
        card_layout.setSpacing(14)

        self._phase_label = QLabel()
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._phase_label.setStyleSheet(f"QLabel {{ color: {DrillColors.TEXT_SECONDARY}; font-size: 15px; }}")
        self._prompt_label = PromptLabel()
        self._segment_display = SegmentDisplay()

        self.input_box = QLineEdit(self._drill_card)
        self.input_box.setFixedSize(1, 1)
        self.input_box.setStyleSheet("QLineEdit { border: none; background: transparent; color: transparent; }")
        self.input_box.setAttribute(Qt.WidgetAttribute.WA_InputMethodEnabled, True)
        self.input_box.installEventFilter(self)
        self.input_box.textEdited.connect(self._on_text_edited)

        self._reveal_card = RevealCard()
        self._hint_label = QLabel()
        self._hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._hint_label.setStyleSheet(f"QLabel {{ color: {DrillColors.TEXT_MUTED}; font-size: 13px; }}")

        card_layout.addWidget(self._phase_label)
        card_layout.addWidget(self._prompt_label)
        card_layout.addWidget(self._segment_display)
        card_layout.addWidget(self.input_box, 0, Qt.AlignmentFlag.AlignHCenter)
        card_layout.addWidget(self._reveal_card)
        card_layout.addWidget(self._hint_label)
        layout.addWidget(self._drill_card, 1)
        self._set_card_error(False)

        footer = QHBoxLayout()
        footer.addStretch(1)
        self._skip_button = QPushButton("Skip word")
        self._skip_button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self._skip_button.clicked.connect(self._skip_word)
        footer.addWidget(self._skip_button)
        layout.addLayout(footer)

        self._target_combo.currentIndexChanged.connect(self._on_target_language_changed)
        self._base_combo.currentIndexChanged.connect(self._on_base_language_changed)
        self._full_conjugation_check.toggled.connect(self._on_full_conjugation_toggled)
        self._audio_check.toggled.connect(self._on_audio_toggled)

    def _language_combo(self, selected: str) -> QComboBox:
        combo = QComboBox()
        combo.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        for code in LANGUAGES:
            combo.addItem(language_label(code), code)
        combo.setCurrentIndex(LANGUAGES.index(selected))
        return combo

    def _set_card_error(self, is_error: bool) -> None:
        border = DrillColors.ERROR if is_error else DrillColors.CARD_BORDER
        self._drill_card.setStyleSheet(
            f"""
            QFrame#drillCard {{
                background: {DrillColors.CARD_BG};
                border: 2px solid {border};
                border-radius: 20px;
            }}
            """
        )

    # ------------------------------------------------------------------
    # Session flow
    # ------------------------------------------------------------------

    def _start_session(self) -> None:
        settings = self._settings_store.value
        language = settings.target_language
        self._sequencer = LanguagePhaseSequencer(full_conjugation=settings.full_conjugation_mode)
        words = self._progress_store.words_due(self._vocabulary.words(language))
        logger.info("Starting %s session with %d due words", language, len(words))
        self._session = DrillSession(words, language, self._word_source, self._sequencer)
        self._load_current_word()

    def _load_current_word(self) -> None:
        if self._engine is not None:
            self._engine.unsubscribe(self._on_engine_changed)
            self._engine = None
        self._update_stats()
        if self._session is None or self._session.is_complete():
            self._show_session_finished()
            return

        engine = self._session.start_word()
        engine.subscribe(self._on_engine_changed)
        self._engine = engine
        self._last_phase = engine.phase

        word = engine.word
        base = self._settings_store.value.base_language
        self._prompt_label.show_word(engine, self._word_source, self._sequencer)
        self._reveal_card.set_content(word.translation(base), word.example("target"), word.example(base))
        self._skip_button.setEnabled(True)
        self._set_input_text("")
        self._render()
        self.input_box.setFocus()

    def _show_session_finished(self) -> None:
        self._prompt_label.setText("")
        self._segment_display.setText("All words reviewed. Come back later!")
        self._phase_label.setText("")
        self._hint_label.setText("")
        self._reveal_card.reveal(False, False, False)
        self._skip_button.setEnabled(False)

    def _next_word(self) -> None:
        self._speaker.stop()
        self._load_current_word()

    def _skip_word(self) -> None:
        if self._session is None or self._session.is_complete() or self._engine is None:
            return
        if not self._engine.is_editable:
            # Already typed; walking the reveal phases scores the word.
            while self._engine.on_reveal():
                pass
            self._next_word()
            return
        result = self._session.skip()
        self._progress_store.record_attempt(result.word_id, correct=False)
        self._next_word()

    def _score_word(self) -> None:
        if self._session is None:
            return
        result = self._session.submit()
        self._progress_store.record_attempt(result.word_id, result.correct)
        logger.info("Scored %s: correct=%s errors=%d", result.word_id, result.correct, result.errors)
        self._update_stats()

    def _update_stats(self) -> None:
        language = self._settings_store.value.target_language
        stats = self._progress_store.stats(self._vocabulary.words(language))
        session = self._session
        session_text = ""
        if session is not None:
            session_text = (
                f"   ·   Session: {session.correct_count} correct, "
                f"{session.incorrect_count} missed of {session.total_words}"
            )
        self._stats_label.setText(
            f"Due: {stats.due_for_review}   ·   Learned: {stats.learned}/{stats.total}   ·   "
            f"Mastered: {stats.mastered}   ·   Accuracy: {stats.accuracy}%{session_text}"
        )

    # ------------------------------------------------------------------
    # Engine events
    # ------------------------------------------------------------------

    def _on_engine_changed(self, engine: DrillEngine) -> None:
        if engine is not self._engine:
            return
        if not engine.is_composing and self.input_box.text() != engine.input_value:
            self._set_input_text(engine.input_value)

        phase = engine.phase
        if phase is not self._last_phase:
            self._on_phase_entered(engine, phase)
            self._last_phase = phase
        self._render()

    def _on_phase_entered(self, engine: DrillEngine, phase: DrillPhase) -> None:
        if phase is DrillPhase.TRANSLATION:
            self._speaker.speak(engine.display_text(), engine.language)
        elif phase is DrillPhase.EXAMPLE_TARGET:
            self._speaker.speak(engine.word.example("target"), engine.language)
        elif phase is DrillPhase.COMPLETE:
            self._score_word()

    def _render(self) -> None:
        engine = self._engine
        if engine is None:
            return
        self._segment_display.show_engine(engine)
        self._set_card_error(engine.has_error)
        phase = engine.phase
        self._reveal_card.reveal(
            translation=phase.is_reveal or phase.is_terminal,
            example_target=phase in (DrillPhase.EXAMPLE_TARGET, DrillPhase.EXAMPLE_BASE, DrillPhase.COMPLETE),
            example_base=phase in (DrillPhase.EXAMPLE_BASE, DrillPhase.COMPLETE),
        )
        self._phase_label.setText(self._phase_caption(engine))
        if engine.is_editable:
            self._hint_label.setText("Backspace clears a mistake")
        elif phase.is_reveal:
            self._hint_label.setText("Tab: reveal next")
        else:
            self._hint_label.setText("Enter or Space: next word")

    def _phase_caption(self, engine: DrillEngine) -> str:
        phase = engine.phase
        if not engine.is_editable:
            return ""
        if isinstance(engine.word, Noun):
            return _NOUN_PHASE_LABELS.get(phase, phase.value)
        return verb_form_label(engine.language, phase.value)

    # ------------------------------------------------------------------
    # Input box events
    # ------------------------------------------------------------------

    def _set_input_text(self, text: str) -> None:
        """Set the hidden input box text without feeding it back to the engine."""
        self._syncing_input = True
        self.input_box.setText(text)
        self.input_box.setCursorPosition(len(text))
        self._syncing_input = False

    def _on_text_edited(self, text: str) -> None:
        if self._syncing_input or self._engine is None:
            return
        self._engine.on_input(text)

    def eventFilter(self, obj, event) -> bool:
        """Route key presses and input-method events of the hidden input box."""
        if obj is self.input_box:
            if event.type() == QEvent.Type.KeyPress:
                return self._on_key_press(event)
            if event.type() == QEvent.Type.InputMethod:
                self._on_input_method(event)
        return super().eventFilter(obj, event)

    def _on_key_press(self, event: QKeyEvent) -> bool:
        engine = self._engine
        if engine is None:
            return True
        key = event.key()

        if key == Qt.Key.Key_Backspace:
            return engine.on_backspace_key()
        if key == Qt.Key.Key_Tab:
            engine.on_reveal()
            return True
        if engine.is_complete:
            if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space):
                self._next_word()
            return True
        # Nothing to type while translations and examples are revealed.
        return not engine.is_editable

    def _on_input_method(self, event: QInputMethodEvent) -> None:
        engine = self._engine
        if engine is None:
            return
        preedit = event.preeditString()
        if preedit and not engine.is_composing:
            engine.on_composition_start()
        elif engine.is_composing and not preedit:
            commit = event.commitString()
            # The line edit applies the commit after this filter returns.
            QTimer.singleShot(0, lambda: self._finish_composition(engine, commit))

    def _finish_composition(self, engine: DrillEngine, commit: str) -> None:
        if engine is not self._engine:
            return
        engine.on_composition_end(commit, self.input_box.text())

    def mousePressEvent(self, event) -> None:
        self.input_box.setFocus()
        super().mousePressEvent(event)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _on_target_language_changed(self, index: int) -> None:
        self._settings_store.set_target_language(self._target_combo.itemData(index))
        self._start_session()

    def _on_base_language_changed(self, index: int) -> None:
        self._settings_store.set_base_language(self._base_combo.itemData(index))
        self._load_current_word_content()

    def _load_current_word_content(self) -> None:
        engine = self._engine
        if engine is None:
            return
        base = self._settings_store.value.base_language
        word = engine.word
        self._reveal_card.set_content(word.translation(base), word.example("target"), word.example(base))
        self.input_box.setFocus()

    def _on_full_conjugation_toggled(self, checked: bool) -> None:
        if checked != self._settings_store.value.full_conjugation_mode:
            self._settings_store.toggle_full_conjugation_mode()
        self._start_session()

    def _on_audio_toggled(self, checked: bool) -> None:
        if checked != self._settings_store.value.audio_enabled:
            self._settings_store.toggle_audio()
        self._speaker.set_enabled(checked)
        self.input_box.setFocus()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Persist progress before the window closes."""
        self._progress_store.save()
        super().closeEvent(event)
