"""
Contrast metrics.

apca_lc is the APCA-W3 (0.0.98G) lightness contrast: signed, roughly
0..106 for dark text on light backgrounds and 0..-108 for the reverse.
The ink selector works on its absolute value.
"""

from __future__ import annotations

import numpy as np

from .color import Oklch, clamp_to_gamut, to_linear_srgb

# ============================================================
# APCA-W3 constants
# ============================================================

Y_COEFFS = np.array([0.2126390059, 0.7151686788, 0.0721923154])

NORM_BG = 0.56
NORM_TXT = 0.57
REV_TXT = 0.62
REV_BG = 0.65

BLACK_THRESHOLD = 0.022
BLACK_CLAMP = 1.414

SCALE = 1.14
LO_OFFSET = 0.027
DELTA_Y_MIN = 0.0005
LO_CLIP = 0.1


def luminance_y(color: Oklch) -> float:
    rgb = np.clip(to_linear_srgb(clamp_to_gamut(color)), 0.0, 1.0)
    return float(Y_COEFFS @ rgb)


def _soft_clamp_black(y: float) -> float:
    y = max(0.0, y)
    if y >= BLACK_THRESHOLD:
        return y
    return y + (BLACK_THRESHOLD - y) ** BLACK_CLAMP


def apca_lc(text_y: float, bg_y: float) -> float:
    txt = _soft_clamp_black(text_y)
    bg = _soft_clamp_black(bg_y)

    if abs(bg - txt) < DELTA_Y_MIN:
        return 0.0

    if bg > txt:
        # dark text on light background
        sapc = (bg**NORM_BG - txt**NORM_TXT) * SCALE
        out = 0.0 if sapc < LO_CLIP else sapc - LO_OFFSET
    else:
        sapc = (bg**REV_BG - txt**REV_TXT) * SCALE
        out = 0.0 if sapc > -LO_CLIP else sapc + LO_OFFSET

    return out * 100.0


def apca_contrast(text: Oklch, bg: Oklch) -> float:
    return abs(apca_lc(luminance_y(text), luminance_y(bg)))


def wcag_contrast_ratio(a: Oklch, b: Oklch) -> float:
    ya = luminance_y(a)
    yb = luminance_y(b)
    hi, lo = max(ya, yb), min(ya, yb)
    return (hi + 0.05) / (lo + 0.05)
