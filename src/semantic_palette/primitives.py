"""
The primitive palette: one Oklch per key of a closed key set.

  N0..N9  neutral ramp (brand hue, capped chroma)
  F0..F9  foundation ramp (foundation seed hue/chroma)
  B       brand seed
  Bt Bs Bf  brand tint / shade / fill

Index 0 is the first entry of the lightness step table, so for a light
table N0 is the lightest neutral and for a dark table the darkest.
Reference maps address ramps by position from the light end; key_at
translates that into the actual key for this palette's direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

import pandas as pd

from .color import Oklch, to_css, to_hex

RAMP_SIZE = 10
RAMP_FAMILIES = ("N", "F")
BRAND_KEYS = ("B", "Bt", "Bs", "Bf")

PRIMITIVE_KEYS: Tuple[str, ...] = (
    tuple(f"N{i}" for i in range(RAMP_SIZE))
    + tuple(f"F{i}" for i in range(RAMP_SIZE))
    + BRAND_KEYS
)

LIGHT = "light"
DARK = "dark"


def family_of(key: str) -> str:
    if key in BRAND_KEYS:
        return "brand"
    return {"N": "neutral", "F": "foundation"}[key[0]]


@dataclass(frozen=True)
class PrimitivePalette:
    colors: Mapping[str, Oklch]
    direction: str

    @classmethod
    def from_colors(cls, colors: Mapping[str, Oklch]) -> "PrimitivePalette":
        missing = [k for k in PRIMITIVE_KEYS if k not in colors]
        extra = sorted(set(colors) - set(PRIMITIVE_KEYS))
        if missing or extra:
            raise ValueError(
                f"Primitive palette keys mismatch (missing={missing}, extra={extra})"
            )
        ordered = {k: colors[k] for k in PRIMITIVE_KEYS}
        direction = LIGHT if ordered["N0"].L >= ordered["N9"].L else DARK
        return cls(MappingProxyType(ordered), direction)

    def __getitem__(self, key: str) -> Oklch:
        return self.colors[key]

    def __contains__(self, key: object) -> bool:
        return key in self.colors

    def __iter__(self):
        return iter(self.colors)

    def keys(self) -> Tuple[str, ...]:
        return PRIMITIVE_KEYS

    def ramp(self, family: str) -> List[Oklch]:
        if family not in RAMP_FAMILIES:
            raise KeyError(f"Not a ramp family: {family!r}")
        return [self.colors[f"{family}{i}"] for i in range(RAMP_SIZE)]

    def key_at(self, family: str, position: int) -> str:
        """Key of the ramp step `position` steps away from the light end."""
        if family not in RAMP_FAMILIES:
            raise KeyError(f"Not a ramp family: {family!r}")
        if not 0 <= position < RAMP_SIZE:
            raise IndexError(f"Ramp position out of range: {position}")
        idx = position if self.direction == LIGHT else RAMP_SIZE - 1 - position
        return f"{family}{idx}"

    def neutral_endpoints(self) -> Dict[str, Oklch]:
        return {"N0": self.colors["N0"], "N9": self.colors["N9"]}

    def to_frame(self) -> pd.DataFrame:
        rows = []
        for key, c in self.colors.items():
            rows.append(
                {
                    "key": key,
                    "family": family_of(key),
                    "L": c.L,
                    "C": c.C,
                    "H": c.H,
                    "css": to_css(c),
                    "hex": to_hex(c),
                }
            )
        return pd.DataFrame(rows)
