"""
Primitive reference maps: per-theme tables from semantic roles to
primitive keys.

A table names surfaces and ink candidate pools, never final ink colors;
the ink selector resolves every ink inside the pool given here.

Ramp keys in a table are positions counted from the light end of the
ramp ("F1" = second lightest foundation step), so the same table reads
correctly against a palette built from either step-table direction.
Brand keys (B, Bt, Bs, Bf) are used as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .color import Oklch, clamp_to_gamut
from .errors import UnknownThemeError
from .primitives import RAMP_FAMILIES, PrimitivePalette
from .roles import (
    ACTION_STATES,
    INK_ROLES,
    STATEFUL_INK_ROLES,
    ActionState,
    ComponentName,
    ContextName,
    InkRole,
    is_stateful,
)

# ============================================================
# Reference types
# ============================================================


@dataclass(frozen=True)
class PrimitiveRef:
    key: str
    color: Optional[Oklch] = None
    lightness_offset: float = 0.0


def ref(key: str, lightness_offset: float = 0.0) -> PrimitiveRef:
    return PrimitiveRef(key, None, lightness_offset)


Pool = Tuple[str, ...]


@dataclass(frozen=True)
class SurfaceRefs:
    surface: PrimitiveRef
    tint_surface: PrimitiveRef
    accent: PrimitiveRef
    inks: Mapping[InkRole, Pool]


@dataclass(frozen=True)
class StatefulRefs:
    surface: Mapping[ActionState, PrimitiveRef]
    tint_surface: Mapping[ActionState, PrimitiveRef]
    # title/link_text/border are required; other ink roles are optional extras
    inks: Mapping[InkRole, Pool]


EntryRefs = Union[SurfaceRefs, StatefulRefs]


@dataclass(frozen=True)
class PrimitiveRefMap:
    name: str
    context: Mapping[ContextName, SurfaceRefs]
    component: Mapping[ComponentName, EntryRefs] = field(default_factory=dict)


# ============================================================
# Resolution against a primitive palette
# ============================================================


def resolve_key(palette: PrimitivePalette, key: str) -> str:
    if key[:1] in RAMP_FAMILIES and key[1:].isdigit():
        return palette.key_at(key[0], int(key[1:]))
    if key not in palette:
        raise KeyError(f"Unknown primitive key: {key!r}")
    return key


def resolve_ref(palette: PrimitivePalette, r: PrimitiveRef) -> Tuple[str, Oklch]:
    """Return (actual primitive key, color) for a reference."""
    if r.color is not None:
        color = Oklch.create(r.color.L, r.color.C, r.color.H)
        return r.key, clamp_to_gamut(color)

    key = resolve_key(palette, r.key)
    color = palette[key]
    if r.lightness_offset:
        color = clamp_to_gamut(color.with_lightness(color.L + r.lightness_offset))
    return key, color


def resolve_pool(palette: PrimitivePalette, pool: Pool) -> Dict[str, Oklch]:
    out: Dict[str, Oklch] = {}
    for key in pool:
        actual = resolve_key(palette, key)
        out.setdefault(actual, palette[actual])
    return out


# ============================================================
# Validation
# ============================================================


def _check_inks(path: str, inks: Mapping[InkRole, Pool], roles) -> List[str]:
    return [f"{path}.inks.{r.value}" for r in roles if not inks.get(r)]


def validate_ref_map(ref_map: PrimitiveRefMap) -> List[str]:
    """List every role path the assembler needs that the table lacks."""
    missing: List[str] = []

    for name in ContextName:
        entry = ref_map.context.get(name)
        path = f"context.{name.value}"
        if not isinstance(entry, SurfaceRefs):
            missing.append(path)
            continue
        missing += _check_inks(path, entry.inks, INK_ROLES)

    for name in ComponentName:
        entry = ref_map.component.get(name)
        path = f"component.{name.value}"
        if is_stateful(name):
            if not isinstance(entry, StatefulRefs):
                missing.append(path)
                continue
            for state in ACTION_STATES:
                if state not in entry.surface:
                    missing.append(f"{path}.surface.{state.value}")
                if state not in entry.tint_surface:
                    missing.append(f"{path}.tint_surface.{state.value}")
            missing += _check_inks(path, entry.inks, STATEFUL_INK_ROLES)
        else:
            if not isinstance(entry, SurfaceRefs):
                missing.append(path)
                continue
            missing += _check_inks(path, entry.inks, INK_ROLES)

    return missing


# ============================================================
# Built-in tables
# ============================================================

NEUTRAL_POOL: Pool = tuple(f"N{i}" for i in range(10))
BRAND_INK_POOL: Pool = ("Bs", "B", "Bf", "Bt", "N0", "N9")


def _inks(roles=INK_ROLES) -> Mapping[InkRole, Pool]:
    pools = {}
    for role in roles:
        if role in (InkRole.LINK_TEXT, InkRole.HIGHLIGHT):
            pools[role] = BRAND_INK_POOL
        else:
            pools[role] = NEUTRAL_POOL
    return MappingProxyType(pools)


def _surface(surface: str, tint: str, accent: str = "B") -> SurfaceRefs:
    return SurfaceRefs(ref(surface), ref(tint), ref(accent), _inks())


def _states(default, hover, active, disabled) -> Mapping[ActionState, PrimitiveRef]:
    return MappingProxyType(
        {
            ActionState.DEFAULT: default,
            ActionState.HOVER: hover,
            ActionState.ACTIVE: active,
            ActionState.DISABLED: disabled,
        }
    )


def _stateful(surfaces, tints) -> StatefulRefs:
    return StatefulRefs(
        surface=_states(*surfaces),
        tint_surface=_states(*tints),
        inks=_inks(STATEFUL_INK_ROLES),
    )


LIGHT_REF_MAP = PrimitiveRefMap(
    name="light",
    context=MappingProxyType(
        {
            ContextName.CANVAS: _surface("F1", "F2"),
            ContextName.SECTION_NEUTRAL: _surface("F1", "F2"),
            ContextName.SECTION_TINT: _surface("Bt", "F0"),
            ContextName.SECTION_CONTRAST: _surface("Bf", "Bs", accent="Bt"),
        }
    ),
    component=MappingProxyType(
        {
            ComponentName.CARD: _surface("Bt", "F1"),
            ComponentName.CARD_FLAT: _surface("F2", "F1"),
            ComponentName.ACTION: _stateful(
                (ref("Bf"), ref("Bf", -0.05), ref("Bf", -0.10), ref("N2")),
                (ref("Bs"), ref("Bs"), ref("Bs"), ref("N3")),
            ),
            ComponentName.ACTION_QUIET: _stateful(
                (ref("F1"), ref("F2"), ref("F3"), ref("F1")),
                (ref("F2"), ref("F3"), ref("F4"), ref("F2")),
            ),
        }
    ),
)

DARK_REF_MAP = PrimitiveRefMap(
    name="dark",
    context=MappingProxyType(
        {
            ContextName.CANVAS: _surface("F8", "F7"),
            ContextName.SECTION_NEUTRAL: _surface("F8", "F7"),
            ContextName.SECTION_TINT: _surface("Bs", "F8"),
            ContextName.SECTION_CONTRAST: SurfaceRefs(
                ref("Bf", -0.10), ref("Bs"), ref("Bt"), _inks()
            ),
        }
    ),
    component=MappingProxyType(
        {
            ComponentName.CARD: _surface("Bs", "F7"),
            ComponentName.CARD_FLAT: _surface("F7", "F8"),
            ComponentName.ACTION: _stateful(
                (ref("Bf", -0.10), ref("Bf", -0.05), ref("Bf"), ref("N7")),
                (ref("Bs"), ref("Bs"), ref("Bs"), ref("N6")),
            ),
            ComponentName.ACTION_QUIET: _stateful(
                (ref("F8"), ref("F7"), ref("F6"), ref("F8")),
                (ref("F7"), ref("F6"), ref("F5"), ref("F7")),
            ),
        }
    ),
)

THEME_REF_MAPS: Mapping[str, PrimitiveRefMap] = MappingProxyType(
    {"light": LIGHT_REF_MAP, "dark": DARK_REF_MAP}
)


def create_primitive_ref_map(theme: str) -> PrimitiveRefMap:
    try:
        return THEME_REF_MAPS[theme]
    except KeyError:
        raise UnknownThemeError(theme, THEME_REF_MAPS) from None
