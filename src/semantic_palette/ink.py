"""
Ink selection: pick a legible primitive for an ink role on a surface.

Selection is a constrained search over a small candidate pool:

- score every candidate by |APCA Lc| against the surface
- keep candidates at or above the role's threshold
- choose the one closest to the threshold (the least over-contrasted);
  ties keep pool order
- if nothing qualifies, fall back to the more contrasting ramp endpoint
  and mark the selection degraded

The search never raises for a non-empty pool.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .color import Oklch
from .config import ContrastTargets
from .contrast import apca_lc, luminance_y
from .roles import InkRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InkSelection:
    key: str
    color: Oklch
    contrast: float
    threshold: float
    degraded: bool = False

    @property
    def passes(self) -> bool:
        return self.contrast >= self.threshold


def _score(color: Oklch, bg_y: float) -> float:
    return abs(apca_lc(luminance_y(color), bg_y))


def _pool_extremes(candidates: Mapping[str, Oklch]) -> Dict[str, Oklch]:
    items = list(candidates.items())
    lightest = max(items, key=lambda kv: kv[1].L)
    darkest = min(items, key=lambda kv: kv[1].L)
    return dict([lightest, darkest])


def select_ink_for_surface_with_bg_y(
    bg_y: float,
    candidates: Mapping[str, Oklch],
    role: InkRole,
    targets: Optional[ContrastTargets] = None,
    *,
    disabled: bool = False,
    fallback: Optional[Mapping[str, Oklch]] = None,
) -> InkSelection:
    if not candidates and not fallback:
        raise ValueError(f"No ink candidates for role '{InkRole(role).value}'")

    targets = targets or ContrastTargets()
    threshold = targets.threshold(role, disabled=disabled)

    best: Optional[InkSelection] = None
    for key, color in candidates.items():
        score = _score(color, bg_y)
        if score < threshold:
            continue
        if best is None or score < best.contrast:
            best = InkSelection(key, color, score, threshold)
    if best is not None:
        return best

    endpoints = fallback or _pool_extremes(candidates)
    chosen: Optional[InkSelection] = None
    for key, color in endpoints.items():
        score = _score(color, bg_y)
        if chosen is None or score > chosen.contrast:
            chosen = InkSelection(key, color, score, threshold, degraded=True)

    logger.warning(
        "no %s ink reaches Lc %.1f (bg Y=%.4f); falling back to %s at Lc %.1f",
        InkRole(role).value,
        threshold,
        bg_y,
        chosen.key,
        chosen.contrast,
    )
    return chosen


def select_ink_for_surface(
    surface: Oklch,
    candidates: Mapping[str, Oklch],
    role: InkRole,
    targets: Optional[ContrastTargets] = None,
    *,
    disabled: bool = False,
    fallback: Optional[Mapping[str, Oklch]] = None,
) -> InkSelection:
    return select_ink_for_surface_with_bg_y(
        luminance_y(surface),
        candidates,
        role,
        targets,
        disabled=disabled,
        fallback=fallback,
    )


def select_all_inks_for_surface(
    surface: Oklch,
    pools: Mapping[InkRole, Mapping[str, Oklch]],
    targets: Optional[ContrastTargets] = None,
    *,
    disabled: bool = False,
    fallback: Optional[Mapping[str, Oklch]] = None,
) -> Dict[InkRole, InkSelection]:
    bg_y = luminance_y(surface)
    return {
        InkRole(role): select_ink_for_surface_with_bg_y(
            bg_y, pool, role, targets, disabled=disabled, fallback=fallback
        )
        for role, pool in pools.items()
    }
