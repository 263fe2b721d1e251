"""
Semantic palette assembly.

  primitive palette + reference map -> context / component token tree

Each entry resolves its surface from the reference map and then asks the
ink selector for every ink role against that surface. Stateful components
repeat this per state against the state's own surface, with the disabled
thresholds for the disabled state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple, Union

from .color import Oklch
from .config import ContrastTargets
from .contrast import luminance_y
from .errors import MissingRoleError
from .ink import InkSelection, select_ink_for_surface_with_bg_y
from .primitives import PrimitivePalette
from .refmap import (
    PrimitiveRefMap,
    StatefulRefs,
    SurfaceRefs,
    resolve_pool,
    resolve_ref,
    validate_ref_map,
)
from .roles import (
    ACTION_STATES,
    INK_ROLES,
    STATEFUL_INK_ROLES,
    ActionState,
    ComponentName,
    ContextName,
    InkRole,
)

logger = logging.getLogger(__name__)

# ============================================================
# Token types
# ============================================================


@dataclass(frozen=True)
class ContrastWarning:
    path: str
    role: InkRole
    state: Optional[ActionState]
    key: str
    contrast: float
    threshold: float

    def __str__(self) -> str:
        where = self.path if self.state is None else f"{self.path}:{self.state.value}"
        return (
            f"{where} {self.role.value} -> {self.key} "
            f"Lc {self.contrast:.1f} < {self.threshold:.1f}"
        )


@dataclass(frozen=True)
class SurfaceTokens:
    surface_key: str
    surface: Oklch
    tint_surface: Oklch
    accent: Oklch
    inks: Mapping[InkRole, InkSelection]


@dataclass(frozen=True)
class StateTokens:
    surface_key: str
    surface: Oklch
    tint_surface: Oklch
    inks: Mapping[InkRole, InkSelection]


@dataclass(frozen=True)
class StatefulTokens:
    states: Mapping[ActionState, StateTokens]

    def __getitem__(self, state: ActionState) -> StateTokens:
        return self.states[ActionState(state)]


EntryTokens = Union[SurfaceTokens, StatefulTokens]
EntryName = Union[ContextName, ComponentName]


def entry_name(name: Union[str, EntryName]) -> EntryName:
    if isinstance(name, (ContextName, ComponentName)):
        return name
    try:
        return ContextName(name)
    except ValueError:
        return ComponentName(name)


@dataclass(frozen=True)
class SemanticColorPalette:
    context: Mapping[ContextName, SurfaceTokens]
    component: Mapping[ComponentName, EntryTokens]
    warnings: Tuple[ContrastWarning, ...]
    ref_map_name: str
    direction: str

    # --------------------------------------------------------
    # Typed accessors
    # --------------------------------------------------------

    def entry(self, name: Union[str, EntryName]) -> EntryTokens:
        name = entry_name(name)
        if isinstance(name, ContextName):
            return self.context[name]
        return self.component[name]

    def _tokens(
        self, name: Union[str, EntryName], state: Optional[ActionState]
    ) -> Union[SurfaceTokens, StateTokens]:
        entry = self.entry(name)
        if isinstance(entry, StatefulTokens):
            return entry[state or ActionState.DEFAULT]
        if state not in (None, ActionState.DEFAULT):
            raise KeyError(f"'{entry_name(name).value}' has no interaction states")
        return entry

    def surface(
        self, name: Union[str, EntryName], state: Optional[ActionState] = None
    ) -> Oklch:
        return self._tokens(name, state).surface

    def tint_surface(
        self, name: Union[str, EntryName], state: Optional[ActionState] = None
    ) -> Oklch:
        return self._tokens(name, state).tint_surface

    def accent(self, name: Union[str, EntryName]) -> Oklch:
        entry = self.entry(name)
        if not isinstance(entry, SurfaceTokens):
            raise KeyError(f"'{entry_name(name).value}' has no accent")
        return entry.accent

    def selection(
        self,
        name: Union[str, EntryName],
        role: InkRole,
        state: Optional[ActionState] = None,
    ) -> InkSelection:
        return self._tokens(name, state).inks[InkRole(role)]

    def ink(
        self,
        name: Union[str, EntryName],
        role: InkRole,
        state: Optional[ActionState] = None,
    ) -> Oklch:
        return self.selection(name, role, state).color

    def iter_selections(
        self,
    ) -> Iterator[Tuple[EntryName, Optional[ActionState], InkRole, InkSelection, Oklch]]:
        """Yield (entry, state, role, selection, surface) for every resolved ink."""
        entries: List[Tuple[EntryName, EntryTokens]] = list(self.context.items())
        entries += list(self.component.items())
        for name, entry in entries:
            if isinstance(entry, StatefulTokens):
                for state, tokens in entry.states.items():
                    for role, sel in tokens.inks.items():
                        yield name, state, role, sel, tokens.surface
            else:
                for role, sel in entry.inks.items():
                    yield name, None, role, sel, entry.surface

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)


# ============================================================
# Assembly
# ============================================================


class _Assembler:
    def __init__(
        self,
        primitive: PrimitivePalette,
        ref_map: PrimitiveRefMap,
        targets: ContrastTargets,
    ):
        self.primitive = primitive
        self.ref_map = ref_map
        self.targets = targets
        self.fallback = primitive.neutral_endpoints()
        self.warnings: List[ContrastWarning] = []

    def inks(
        self,
        path: str,
        surface: Oklch,
        pools,
        roles,
        state: Optional[ActionState] = None,
    ) -> Mapping[InkRole, InkSelection]:
        bg_y = luminance_y(surface)
        disabled = state is ActionState.DISABLED
        out = {}
        for role in roles:
            sel = select_ink_for_surface_with_bg_y(
                bg_y,
                resolve_pool(self.primitive, pools[role]),
                role,
                self.targets,
                disabled=disabled,
                fallback=self.fallback,
            )
            if sel.degraded:
                self.warnings.append(
                    ContrastWarning(path, role, state, sel.key, sel.contrast, sel.threshold)
                )
            out[role] = sel
        return MappingProxyType(out)

    def static(self, path: str, refs: SurfaceRefs) -> SurfaceTokens:
        surface_key, surface = resolve_ref(self.primitive, refs.surface)
        return SurfaceTokens(
            surface_key=surface_key,
            surface=surface,
            tint_surface=resolve_ref(self.primitive, refs.tint_surface)[1],
            accent=resolve_ref(self.primitive, refs.accent)[1],
            inks=self.inks(path, surface, refs.inks, INK_ROLES),
        )

    def stateful(self, path: str, refs: StatefulRefs) -> StatefulTokens:
        extra = [r for r in INK_ROLES if r in refs.inks and r not in STATEFUL_INK_ROLES]
        roles = list(STATEFUL_INK_ROLES) + extra

        states = {}
        for state in ACTION_STATES:
            surface_key, surface = resolve_ref(self.primitive, refs.surface[state])
            states[state] = StateTokens(
                surface_key=surface_key,
                surface=surface,
                tint_surface=resolve_ref(self.primitive, refs.tint_surface[state])[1],
                inks=self.inks(path, surface, refs.inks, roles, state),
            )
        return StatefulTokens(MappingProxyType(states))


def create_semantic_from_primitive(
    primitive: PrimitivePalette,
    ref_map: PrimitiveRefMap,
    targets: Optional[ContrastTargets] = None,
) -> SemanticColorPalette:
    missing = validate_ref_map(ref_map)
    if missing:
        raise MissingRoleError(ref_map.name, missing)

    asm = _Assembler(primitive, ref_map, targets or ContrastTargets())

    context = {
        name: asm.static(f"context.{name.value}", ref_map.context[name])
        for name in ContextName
    }

    component = {}
    for name in ComponentName:
        refs = ref_map.component[name]
        path = f"component.{name.value}"
        if isinstance(refs, StatefulRefs):
            component[name] = asm.stateful(path, refs)
        else:
            component[name] = asm.static(path, refs)

    if asm.warnings:
        logger.warning(
            "%d ink selection(s) fell back to ramp endpoints with '%s' map",
            len(asm.warnings),
            ref_map.name,
        )
    logger.debug(
        "assembled semantic palette: map=%s direction=%s",
        ref_map.name,
        primitive.direction,
    )

    return SemanticColorPalette(
        context=MappingProxyType(context),
        component=MappingProxyType(component),
        warnings=tuple(asm.warnings),
        ref_map_name=ref_map.name,
        direction=primitive.direction,
    )
