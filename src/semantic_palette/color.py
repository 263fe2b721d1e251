"""
OKLCH color primitives.

Every color the engine produces is an ``Oklch`` value: lightness (0..1),
chroma (>= 0) and hue (degrees, circular). Gamut membership is checked
against linear sRGB; hex/sRGB only appear as input/output notation.

Pipeline used for gamut checks:
  OKLCH -> OKLab -> LMS (cube) -> linear sRGB
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Tuple

import colour
import numpy as np

# ============================================================
# OKLab matrices (Ottosson)
# ============================================================

_OKLAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)

_LMS_TO_LINEAR_SRGB = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)

_LINEAR_SRGB_TO_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ]
)

_LMS_TO_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ]
)

GAMUT_EPSILON = 1e-4
CLAMP_ITERATIONS = 24

OKLCH_RE = re.compile(
    r"^oklch\(\s*([-+0-9.eE]+)(%?)\s+([-+0-9.eE]+)\s+([-+0-9.eE]+)\s*\)$",
    re.IGNORECASE,
)
HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


# ============================================================
# Value type
# ============================================================


def _finite(x: float) -> float:
    x = float(x)
    return x if math.isfinite(x) else 0.0


def normalize(L: float, C: float, H: float) -> Tuple[float, float, float]:
    """Clamp lightness to [0, 1], chroma to >= 0 and wrap hue into [0, 360)."""
    L = min(1.0, max(0.0, _finite(L)))
    C = max(0.0, _finite(C))
    H = _finite(H) % 360.0
    return L, C, H


@dataclass(frozen=True)
class Oklch:
    L: float
    C: float
    H: float

    @classmethod
    def create(cls, L: float, C: float, H: float) -> "Oklch":
        return cls(*normalize(L, C, H))

    def with_lightness(self, L: float) -> "Oklch":
        return replace(self, L=min(1.0, max(0.0, float(L))))

    def with_chroma(self, C: float) -> "Oklch":
        return replace(self, C=max(0.0, float(C)))

    def __str__(self) -> str:
        return to_css(self)


# ============================================================
# Conversions
# ============================================================


def to_oklab(color: Oklch) -> Tuple[float, float, float]:
    hr = math.radians(color.H)
    return (color.L, color.C * math.cos(hr), color.C * math.sin(hr))


def from_oklab(L: float, a: float, b: float) -> Oklch:
    C = math.sqrt(a * a + b * b)
    H = (math.degrees(math.atan2(b, a)) % 360.0) if C > 1e-9 else 0.0
    return Oklch.create(L, C, H)


def to_linear_srgb(color: Oklch) -> np.ndarray:
    lms_ = _OKLAB_TO_LMS @ np.array(to_oklab(color), dtype=float)
    return _LMS_TO_LINEAR_SRGB @ (lms_**3)


def from_linear_srgb(rgb: np.ndarray) -> Oklch:
    lms = _LINEAR_SRGB_TO_LMS @ np.asarray(rgb, dtype=float)
    L, a, b = _LMS_TO_OKLAB @ np.cbrt(lms)
    return from_oklab(float(L), float(a), float(b))


def to_hex(color: Oklch) -> str:
    rgb = np.clip(to_linear_srgb(clamp_to_gamut(color)), 0.0, 1.0)
    encoded = np.clip(colour.cctf_encoding(rgb, function="sRGB"), 0.0, 1.0)
    # round to the nearest 8-bit level, RGB_to_HEX would truncate
    levels = np.rint(encoded * 255).astype(int)
    return "#" + "".join(f"{v:02x}" for v in levels)


def from_hex(hex_color: str) -> Oklch:
    m = HEX_RE.match(hex_color.strip())
    if m is None:
        raise ValueError(f"Not a #rrggbb color: {hex_color!r}")
    encoded = colour.notation.HEX_to_RGB(f"#{m.group(1)}")
    return from_linear_srgb(colour.cctf_decoding(encoded, function="sRGB"))


def parse_color(text: str) -> Oklch:
    """
    Parse '#rrggbb' or 'oklch(L C H)' into a normalized Oklch.
    L may be a fraction (0.55) or a percentage (55%).
    """
    s = text.strip()
    m = OKLCH_RE.match(s)
    if m:
        L = float(m.group(1))
        if m.group(2) == "%":
            L /= 100.0
        return Oklch.create(L, float(m.group(3)), float(m.group(4)))
    return from_hex(s)


def to_css(color: Oklch) -> str:
    return f"oklch({color.L * 100:.1f}% {color.C:.4f} {color.H:.1f})"


# ============================================================
# Gamut
# ============================================================


def is_in_gamut(color: Oklch) -> bool:
    rgb = to_linear_srgb(color)
    return bool(np.all((rgb >= -GAMUT_EPSILON) & (rgb <= 1.0 + GAMUT_EPSILON)))


def clamp_to_gamut(color: Oklch) -> Oklch:
    """
    Reduce chroma at fixed L and H until the color fits sRGB.
    Out-of-range components are normalized first; colors already in gamut
    are then returned unchanged.
    """
    normalized = Oklch.create(color.L, color.C, color.H)
    if normalized != color:
        color = normalized
    if is_in_gamut(color):
        return color

    lo, hi = 0.0, color.C
    for _ in range(CLAMP_ITERATIONS):
        mid = (lo + hi) / 2.0
        if is_in_gamut(replace(color, C=mid)):
            lo = mid
        else:
            hi = mid
    return replace(color, C=lo)
