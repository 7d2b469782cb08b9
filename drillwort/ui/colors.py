"""Theme colors and color utilities for the UI."""

from typing import Optional


class DrillColors:
    """Light theme palette."""

    BG_MAIN = "#EEF6F6"
    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(15, 23, 42, 0.10)"

    PRIMARY = "#0F766E"
    PRIMARY_LIGHT = "#4fb3bf"

    TEXT_PRIMARY = "#1F2933"
    TEXT_SECONDARY = "#334155"
    TEXT_MUTED = "#94A3B8"

    SUCCESS = "#2F855A"
    ERROR = "#D64545"
    ERROR_BG = "rgba(214, 69, 69, 0.18)"
    CURSOR = "#0F766E"


# Article colors: masculine = blue, feminine = pink, neuter = green.
GENDER_COLORS = {
    "masculine": "#3B82F6",
    "feminine": "#EC4899",
    "neuter": "#22C55E",
}


def color_for_class(color_class: Optional[str], default: str = DrillColors.TEXT_PRIMARY) -> str:
    """Map a segment color tag to a #RRGGBB color."""
    if not color_class:
        return default
    return GENDER_COLORS.get(color_class, default)


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except (AttributeError, TypeError, ValueError):
        return a
