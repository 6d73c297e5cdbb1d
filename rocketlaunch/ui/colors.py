"""Theme colors and color utilities for the UI."""


class LaunchColors:
    """Night-sky palette for the launch pad."""

    BG_TOP = "#0b1026"
    BG_MIDDLE = "#1b2350"
    BG_BOTTOM = "#3a2f5b"

    PRIMARY = "#ff7a18"
    PRIMARY_LIGHT = "#ffb347"
    PRIMARY_DARK = "#c2410c"

    FUEL = "#2dd4bf"
    FUEL_LIGHT = "#99f6e4"

    # Meter fill runs from LOW at 0% to HIGH at 100%
    METER_LOW = "#ef4444"
    METER_HIGH = "#22c55e"

    CARD_BG = "rgba(15, 23, 42, 0.78)"
    CARD_BORDER = "rgba(255, 255, 255, 0.15)"

    TEXT_PRIMARY = "#f8fafc"
    TEXT_SECONDARY = "#cbd5e1"
    TEXT_MUTED = "#94a3b8"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        t = max(0.0, min(1.0, float(t)))
    except (TypeError, ValueError):
        return a
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"
