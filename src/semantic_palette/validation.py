"""
Seed pair validation for palette editors.

Checks a base (foundation) seed and a brand seed individually, then
requires the brand text variant to reach WCAG AA against the base.
Also reports which base lightness values would work for a given brand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .color import Oklch, clamp_to_gamut
from .contrast import wcag_contrast_ratio

REQUIRED_CONTRAST_RATIO = 4.5
BRAND_TEXT_CHROMA_RATIO = 0.9

BASE_L_MIN = 0.08
BASE_L_MAX = 0.98
BASE_MAX_CHROMA = 0.05

BRAND_L_MIN = 0.15
BRAND_L_MAX = 0.90
BRAND_MAX_CHROMA = 0.37

SEARCH_ITERATIONS = 30


@dataclass(frozen=True)
class PairIssue:
    code: str
    message: str


@dataclass(frozen=True)
class PairValidation:
    contrast_ratio: float
    issues: Tuple[PairIssue, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.issues

    def codes(self) -> Tuple[str, ...]:
        return tuple(i.code for i in self.issues)


def derive_brand_text(brand: Oklch) -> Oklch:
    return clamp_to_gamut(
        Oklch.create(brand.L, brand.C * BRAND_TEXT_CHROMA_RATIO, brand.H)
    )


def _range_issues(
    prefix: str, color: Oklch, l_min: float, l_max: float, c_max: float
) -> Tuple[PairIssue, ...]:
    issues = []
    if not l_min <= color.L <= l_max:
        issues.append(
            PairIssue(
                f"{prefix}_LIGHTNESS",
                f"{prefix.lower()} lightness {color.L:.3f} outside [{l_min}, {l_max}]",
            )
        )
    if color.C > c_max:
        issues.append(
            PairIssue(
                f"{prefix}_CHROMA",
                f"{prefix.lower()} chroma {color.C:.3f} above {c_max}",
            )
        )
    return tuple(issues)


def validate_color_pair(
    base: Oklch, brand: Oklch, required: float = REQUIRED_CONTRAST_RATIO
) -> PairValidation:
    issues = _range_issues("BASE", base, BASE_L_MIN, BASE_L_MAX, BASE_MAX_CHROMA)
    issues += _range_issues("BRAND", brand, BRAND_L_MIN, BRAND_L_MAX, BRAND_MAX_CHROMA)

    ratio = wcag_contrast_ratio(derive_brand_text(brand), base)
    if ratio < required:
        issues += (
            PairIssue(
                "INSUFFICIENT_CONTRAST",
                f"brand text contrast {ratio:.2f}:1 below {required}:1",
            ),
        )
    return PairValidation(ratio, issues)


def _base_ratio(brand_text: Oklch, L: float) -> float:
    return wcag_contrast_ratio(brand_text, Oklch(L, 0.0, brand_text.H))


def _threshold_lightness(brand_text: Oklch, required: float, light_side: bool) -> float:
    """Bisect for the boundary between passing and failing base lightness."""
    lo, hi = BASE_L_MIN, BASE_L_MAX
    for _ in range(SEARCH_ITERATIONS):
        mid = (lo + hi) / 2.0
        passes = _base_ratio(brand_text, mid) >= required
        # light side: passing values are above the boundary
        if passes == light_side:
            hi = mid
        else:
            lo = mid
    return hi if light_side else lo


def allowable_base_lightness_range(
    brand: Oklch, required: float = REQUIRED_CONTRAST_RATIO
) -> Optional[Tuple[float, float]]:
    """
    Contiguous [min, max] of base lightness meeting the contrast requirement
    for this brand, or None when no base lightness works.

    Dark brands get a range on the light side and light brands one on the
    dark side. When both ends pass, the side opposite the brand wins.
    """
    brand_text = derive_brand_text(brand)
    dark_ok = _base_ratio(brand_text, BASE_L_MIN) >= required
    light_ok = _base_ratio(brand_text, BASE_L_MAX) >= required

    if not dark_ok and not light_ok:
        return None

    if dark_ok and light_ok:
        light_side = brand.L <= 0.5
    else:
        light_side = light_ok

    boundary = _threshold_lightness(brand_text, required, light_side)
    if light_side:
        return (boundary, BASE_L_MAX)
    return (BASE_L_MIN, boundary)


def is_base_lightness_allowed(
    L: float, brand: Oklch, required: float = REQUIRED_CONTRAST_RATIO
) -> bool:
    bounds = allowable_base_lightness_range(brand, required)
    if bounds is None:
        return False
    return bounds[0] <= L <= bounds[1]
