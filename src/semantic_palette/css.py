"""
CSS output.

Custom properties:
  --context-{context}-{role}
  --component-{component}-{role}            (static components)
  --component-{component}-{role}-{state}    (stateful components)

Rule sets bind those properties to .context-* / .component-* classes and
re-export them under role aliases (--surface, --title, ...) so nested
markup can use "the current surface's ink" without knowing where it is.
Rule sets do not depend on the palette.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .color import to_css
from .roles import (
    ACTION_STATES,
    INK_ROLES,
    STATEFUL_INK_ROLES,
    STATIC_COMPONENTS,
    STATEFUL_COMPONENTS,
    ActionState,
    ComponentName,
    ContextName,
    kebab,
)
from .semantic import SemanticColorPalette, StatefulTokens

SURFACE = "surface"
TINT_SURFACE = "tint-surface"
ACCENT = "accent"

STATIC_ROLES: Tuple[str, ...] = (SURFACE, TINT_SURFACE, ACCENT) + tuple(
    kebab(r.value) for r in INK_ROLES
)
STATEFUL_ROLES: Tuple[str, ...] = (SURFACE, TINT_SURFACE) + tuple(
    kebab(r.value) for r in STATEFUL_INK_ROLES
)

# role -> CSS property it drives on the entry's own selector
PROPERTY_BINDINGS = (
    ("background-color", SURFACE),
    ("color", "body"),
    ("border-color", "border"),
)
STATEFUL_PROPERTY_BINDINGS = (
    ("background-color", SURFACE),
    ("color", "title"),
    ("border-color", "border"),
)

DISABLED_SELECTORS = (":disabled", "[disabled]", ".is-disabled")


# ============================================================
# Names
# ============================================================


def context_var(context: ContextName, role: str) -> str:
    return f"--context-{kebab(ContextName(context).value)}-{role}"


def component_var(
    component: ComponentName, role: str, state: Optional[ActionState] = None
) -> str:
    name = f"--component-{kebab(ComponentName(component).value)}-{role}"
    if state is not None:
        name += f"-{ActionState(state).value}"
    return name


def context_class(context: ContextName) -> str:
    return f"context-{kebab(ContextName(context).value)}"


def component_class(component: ComponentName) -> str:
    return f"component-{kebab(ComponentName(component).value)}"


# ============================================================
# Declarations
# ============================================================


def _static_values(tokens) -> List[Tuple[str, str]]:
    values = [
        (SURFACE, to_css(tokens.surface)),
        (TINT_SURFACE, to_css(tokens.tint_surface)),
        (ACCENT, to_css(tokens.accent)),
    ]
    for role, sel in tokens.inks.items():
        values.append((kebab(role.value), to_css(sel.color)))
    return values


def iter_declarations(palette: SemanticColorPalette) -> Iterable[Tuple[str, str]]:
    for name, tokens in palette.context.items():
        for role, value in _static_values(tokens):
            yield context_var(name, role), value

    for name, entry in palette.component.items():
        if isinstance(entry, StatefulTokens):
            roles = [SURFACE, TINT_SURFACE]
            roles += [kebab(r.value) for r in entry[ActionState.DEFAULT].inks]
            for role in roles:
                for state, tokens in entry.states.items():
                    if role == SURFACE:
                        color = tokens.surface
                    elif role == TINT_SURFACE:
                        color = tokens.tint_surface
                    else:
                        color = tokens.inks[_ink_role(role)].color
                    yield component_var(name, role, state), to_css(color)
        else:
            for role, value in _static_values(entry):
                yield component_var(name, role), value


def _ink_role(css_role: str):
    for r in INK_ROLES:
        if kebab(r.value) == css_role:
            return r
    raise KeyError(css_role)


def to_css_text(palette: SemanticColorPalette, selector: str = ":root") -> str:
    lines = [f"{selector} {{"]
    for prop, value in iter_declarations(palette):
        lines.append(f"  {prop}: {value};")
    lines.append("}")
    return "\n".join(lines) + "\n"


# ============================================================
# Rule sets
# ============================================================


@dataclass(frozen=True)
class CSSRuleSet:
    selector: str
    declarations: Tuple[Tuple[str, str], ...]

    def to_text(self) -> str:
        body = "".join(f"  {p}: {v};\n" for p, v in self.declarations)
        return f"{self.selector} {{\n{body}}}\n"


def _var(name: str) -> str:
    return f"var({name})"


def _rule_declarations(var_for, roles: Sequence[str], bindings) -> Tuple[Tuple[str, str], ...]:
    decls = [(f"--{role}", _var(var_for(role))) for role in roles]
    decls += [(prop, _var(var_for(role))) for prop, role in bindings]
    return tuple(decls)


def collect_css_rule_sets() -> List[CSSRuleSet]:
    rule_sets: List[CSSRuleSet] = []

    for context in ContextName:
        rule_sets.append(
            CSSRuleSet(
                f".{context_class(context)}",
                _rule_declarations(
                    lambda role, c=context: context_var(c, role),
                    STATIC_ROLES,
                    PROPERTY_BINDINGS,
                ),
            )
        )

    for component in STATIC_COMPONENTS:
        rule_sets.append(
            CSSRuleSet(
                f".{component_class(component)}",
                _rule_declarations(
                    lambda role, c=component: component_var(c, role),
                    STATIC_ROLES,
                    PROPERTY_BINDINGS,
                ),
            )
        )

    for component in STATEFUL_COMPONENTS:
        cls = f".{component_class(component)}"
        selectors = {
            ActionState.DEFAULT: cls,
            ActionState.HOVER: f"{cls}:hover",
            ActionState.ACTIVE: f"{cls}:active",
            ActionState.DISABLED: ", ".join(f"{cls}{s}" for s in DISABLED_SELECTORS),
        }
        for state in ACTION_STATES:
            rule_sets.append(
                CSSRuleSet(
                    selectors[state],
                    _rule_declarations(
                        lambda role, c=component, s=state: component_var(c, role, s),
                        STATEFUL_ROLES,
                        STATEFUL_PROPERTY_BINDINGS,
                    ),
                )
            )

    return rule_sets


def to_css_rule_sets_text(rule_sets: Optional[Sequence[CSSRuleSet]] = None) -> str:
    if rule_sets is None:
        rule_sets = collect_css_rule_sets()
    return "\n".join(rs.to_text() for rs in rule_sets)
