"""Drill UI: segment display and reveal card."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget

from drillwort.core.drill_engine import DrillEngine, preview_segments
from drillwort.ui.colors import DrillColors
from drillwort.ui.rendering import render_preview_html, render_segments_html


class SegmentDisplay(QLabel):
    """Shows the completed segments, the live input and the error character."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setWordWrap(True)
        self.setStyleSheet(f"QLabel {{ font-size: 34px; color: {DrillColors.TEXT_PRIMARY}; }}")

    def show_engine(self, engine: DrillEngine, show_hint: bool = False) -> None:
        """Render the current state of *engine*."""
        editable = engine.is_editable
        self.setText(
            render_segments_html(
                engine.completed_segments,
                user_input=engine.user_input if editable else "",
                error_char=engine.error_char,
                remaining=engine.remaining_text if show_hint and not engine.has_error else "",
                show_cursor=editable,
            )
        )


class PromptLabel(QLabel):
    """Faded preview of everything the user is about to type."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setWordWrap(True)
        self.setStyleSheet("QLabel { font-size: 22px; }")

    def show_word(self, engine: DrillEngine, word_source, sequencer) -> None:
        segments = preview_segments(engine.word, engine.language, word_source, sequencer)
        self.setText(render_preview_html(segments))


class RevealCard(QFrame):
    """Translation and example sentences revealed after the word is typed."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("revealCard")
        self.setStyleSheet(
            f"""
            QFrame#revealCard {{
                background: {DrillColors.CARD_BG};
                border: 1px solid {DrillColors.CARD_BORDER};
                border-radius: 16px;
            }}
            """
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 18, 24, 18)
        layout.setSpacing(10)
        self._translation = self._make_label(26, DrillColors.PRIMARY, bold=True)
        self._example_target = self._make_label(20, DrillColors.TEXT_PRIMARY)
        self._example_base = self._make_label(18, DrillColors.TEXT_SECONDARY, italic=True)
        for label in (self._translation, self._example_target, self._example_base):
            layout.addWidget(label)

    @staticmethod
    def _make_label(size: int, color: str, bold: bool = False, italic: bool = False) -> QLabel:
        label = QLabel()
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        label.setWordWrap(True)
        weight = 700 if bold else 400
        style = "italic" if italic else "normal"
        label.setStyleSheet(f"QLabel {{ font-size: {size}px; color: {color}; font-weight: {weight}; font-style: {style}; }}")
        return label

    def set_content(self, translation: str, example_target: str, example_base: str) -> None:
        self._translation.setText(translation)
        self._example_target.setText(example_target)
        self._example_base.setText(example_base)

    def reveal(self, translation: bool, example_target: bool, example_base: bool) -> None:
        """Show the parts that have been revealed so far."""
        self._translation.setVisible(translation)
        self._example_target.setVisible(example_target)
        self._example_base.setVisible(example_base)
        self.setVisible(translation or example_target or example_base)
