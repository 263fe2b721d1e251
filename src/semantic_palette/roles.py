"""
Closed vocabularies of the semantic token tree.

Everything that addresses a token (assembler, CSS emitter, CLI) goes
through these enums instead of dotted path strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class InkRole(str, Enum):
    TITLE = "title"
    BODY = "body"
    META = "meta"
    LINK_TEXT = "link_text"
    HIGHLIGHT = "highlight"
    BORDER = "border"
    DIVIDER = "divider"


class ContextName(str, Enum):
    CANVAS = "canvas"
    SECTION_NEUTRAL = "section_neutral"
    SECTION_TINT = "section_tint"
    SECTION_CONTRAST = "section_contrast"


class ComponentName(str, Enum):
    CARD = "card"
    CARD_FLAT = "card_flat"
    ACTION = "action"
    ACTION_QUIET = "action_quiet"


class ActionState(str, Enum):
    DEFAULT = "default"
    HOVER = "hover"
    ACTIVE = "active"
    DISABLED = "disabled"


INK_ROLES: Tuple[InkRole, ...] = tuple(InkRole)
ACTION_STATES: Tuple[ActionState, ...] = tuple(ActionState)

STATIC_COMPONENTS = (ComponentName.CARD, ComponentName.CARD_FLAT)
STATEFUL_COMPONENTS = (ComponentName.ACTION, ComponentName.ACTION_QUIET)

# inks every stateful component resolves per state
STATEFUL_INK_ROLES: Tuple[InkRole, ...] = (
    InkRole.TITLE,
    InkRole.LINK_TEXT,
    InkRole.BORDER,
)


def kebab(name: str) -> str:
    return name.replace("_", "-")


def is_stateful(component: ComponentName) -> bool:
    return component in STATEFUL_COMPONENTS
