"""Rich-text rendering of drill segments (kept free of Qt imports)."""

from __future__ import annotations

import html
from typing import Iterable

from drillwort.core.drill_engine import Segment
from drillwort.ui.colors import DrillColors, blend_hex, color_for_class

CURSOR_GLYPH = "|"


def _span(text: str, style: str) -> str:
    return f'<span style="{style}">{html.escape(text)}</span>'


def render_segments_html(
    segments: Iterable[Segment],
    user_input: str = "",
    error_char: str = "",
    remaining: str = "",
    show_cursor: bool = True,
) -> str:
    """Render locked-in segments followed by the live input.

    Order: segments, validated input, offending character (if any), cursor,
    then the muted remainder of the expected string.
    """
    parts = [_span(s.text, f"color:{color_for_class(s.color_class)};") for s in segments]
    if user_input:
        parts.append(_span(user_input, f"color:{DrillColors.TEXT_PRIMARY};"))
    if error_char:
        parts.append(
            _span(error_char, f"color:{DrillColors.ERROR}; background:{DrillColors.ERROR_BG}; font-weight:600;")
        )
    if show_cursor:
        parts.append(_span(CURSOR_GLYPH, f"color:{DrillColors.CURSOR}; font-weight:300;"))
    if remaining:
        parts.append(_span(remaining, f"color:{DrillColors.TEXT_MUTED};"))
    return f'<span style="white-space:pre;">{"".join(parts)}</span>'


def render_preview_html(segments: Iterable[Segment]) -> str:
    """Faded rendering of the full target line shown as a prompt."""
    parts = []
    for segment in segments:
        color = blend_hex(color_for_class(segment.color_class), DrillColors.BG_MAIN, 0.45)
        parts.append(_span(segment.text, f"color:{color};"))
    return f'<span style="white-space:pre;">{"".join(parts)}</span>'
