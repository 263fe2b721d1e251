"""
Ramp generator: neutral + foundation ramps and brand derivatives.

Lightness is positional from a 10-value step table. The table's direction
is the theme polarity: a decreasing table yields a light palette (index 0
lightest), an increasing one a dark palette. Chroma and hue come from the
seeds and every generated color goes through the gamut clamp.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence

from .color import Oklch, clamp_to_gamut
from .config import DerivativeSpec, EngineConfig
from .errors import InvalidStepTableError
from .primitives import RAMP_SIZE, PrimitivePalette

logger = logging.getLogger(__name__)

# ============================================================
# Canonical step tables
# ============================================================

LIGHT_LIGHTNESS_STEPS = (0.985, 0.945, 0.88, 0.79, 0.68, 0.56, 0.45, 0.34, 0.23, 0.12)
DARK_LIGHTNESS_STEPS = (0.10, 0.16, 0.24, 0.33, 0.43, 0.54, 0.65, 0.76, 0.86, 0.94)

STEP_TABLES = {
    "light": LIGHT_LIGHTNESS_STEPS,
    "dark": DARK_LIGHTNESS_STEPS,
}

# foundation seeds used when the caller gives none
DEFAULT_LIGHT_FOUNDATION = Oklch(0.97, 0.005, 0.0)
DEFAULT_DARK_FOUNDATION = Oklch(0.16, 0.005, 0.0)

# below this chroma a seed has no meaningful hue
ACHROMATIC_CHROMA = 1e-4

DERIVATIVE_KEYS = {"tint": "Bt", "shade": "Bs", "fill": "Bf"}


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def validate_steps(lightness_steps: Sequence[float]) -> List[float]:
    steps = [float(x) for x in lightness_steps]
    if len(steps) != RAMP_SIZE:
        raise InvalidStepTableError(
            f"Lightness step table needs {RAMP_SIZE} values, got {len(steps)}"
        )
    if any(not math.isfinite(x) or x < 0.0 or x > 1.0 for x in steps):
        raise InvalidStepTableError(f"Lightness steps must lie in [0, 1]: {steps}")

    diffs = [b - a for a, b in zip(steps, steps[1:])]
    if not (all(d < 0 for d in diffs) or all(d > 0 for d in diffs)):
        raise InvalidStepTableError(
            f"Lightness steps must be strictly monotonic: {steps}"
        )
    return steps


def is_light_table(lightness_steps: Sequence[float]) -> bool:
    return lightness_steps[0] > lightness_steps[-1]


# ============================================================
# Ramps
# ============================================================


def _ramp(hue: float, chroma: float, steps: Sequence[float]) -> List[Oklch]:
    return [clamp_to_gamut(Oklch.create(L, chroma, hue)) for L in steps]


def generate_neutral_ramp(
    brand: Oklch,
    lightness_steps: Sequence[float],
    chroma_ratio: float,
    max_chroma: float,
) -> List[Oklch]:
    steps = validate_steps(lightness_steps)
    chroma = min(brand.C * max(0.0, chroma_ratio), max(0.0, max_chroma))
    return _ramp(brand.H, chroma, steps)


def generate_foundation_ramp(
    foundation: Oklch,
    lightness_steps: Sequence[float],
    chroma_ratio: float,
) -> List[Oklch]:
    steps = validate_steps(lightness_steps)
    chroma = foundation.C * max(0.0, chroma_ratio)
    return _ramp(foundation.H, chroma, steps)


# ============================================================
# Brand derivatives
# ============================================================


def derive(brand: Oklch, spec: DerivativeSpec) -> Oklch:
    L = clamp(brand.L + spec.lightness_offset, spec.lightness_min, spec.lightness_max)
    if brand.C <= ACHROMATIC_CHROMA:
        C = 0.0
    else:
        C = clamp(brand.C * spec.chroma_ratio, spec.chroma_min, spec.chroma_max)
    return clamp_to_gamut(Oklch.create(L, C, brand.H))


def generate_brand_derivatives(
    brand: Oklch, config: Optional[EngineConfig] = None
) -> Dict[str, Oklch]:
    config = config or EngineConfig()
    return {name: derive(brand, config.derivative(name)) for name in DERIVATIVE_KEYS}


# ============================================================
# Full primitive palette
# ============================================================


def default_foundation(lightness_steps: Sequence[float]) -> Oklch:
    if is_light_table(lightness_steps):
        return DEFAULT_LIGHT_FOUNDATION
    return DEFAULT_DARK_FOUNDATION


def generate_primitive_palette(
    brand: Oklch,
    foundation: Optional[Oklch] = None,
    lightness_steps: Sequence[float] = LIGHT_LIGHTNESS_STEPS,
    config: Optional[EngineConfig] = None,
) -> PrimitivePalette:
    config = config or EngineConfig()
    steps = validate_steps(lightness_steps)

    brand = clamp_to_gamut(Oklch.create(brand.L, brand.C, brand.H))
    if foundation is None:
        foundation = default_foundation(steps)
    foundation = Oklch.create(foundation.L, foundation.C, foundation.H)

    shaping = config.ramp
    neutrals = generate_neutral_ramp(
        brand, steps, shaping.neutral_chroma_ratio, shaping.neutral_max_chroma
    )
    foundations = generate_foundation_ramp(
        foundation, steps, shaping.foundation_chroma_ratio
    )
    derivatives = generate_brand_derivatives(brand, config)

    colors: Dict[str, Oklch] = {}
    for i in range(RAMP_SIZE):
        colors[f"N{i}"] = neutrals[i]
    for i in range(RAMP_SIZE):
        colors[f"F{i}"] = foundations[i]
    colors["B"] = brand
    for name, key in DERIVATIVE_KEYS.items():
        colors[key] = derivatives[name]

    palette = PrimitivePalette.from_colors(colors)
    logger.debug(
        "primitive palette: direction=%s neutral C=%.4f foundation C=%.4f",
        palette.direction,
        neutrals[0].C,
        foundations[0].C,
    )
    return palette
