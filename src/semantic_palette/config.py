"""
Engine configuration: ramp chroma shaping, brand derivative bands and
ink contrast thresholds.

Overrides come from a JSON file shaped like the defaults:

  {
    "ramp": {"neutral_chroma_ratio": 0.1, "neutral_max_chroma": 0.02},
    "derivatives": {"tint": {"lightness_offset": 0.4}},
    "contrast": {"default": {"body": 80}, "disabled": {"body": 50}}
  }

load_config never raises for user input. It reports whether the file was
used, missing, or unusable so callers can tell the two fallbacks apart.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .roles import INK_ROLES, InkRole

logger = logging.getLogger(__name__)

# ============================================================
# Defaults
# ============================================================

DEFAULT_THRESHOLDS: Dict[str, float] = {
    InkRole.BODY.value: 75.0,
    InkRole.TITLE.value: 60.0,
    InkRole.LINK_TEXT.value: 60.0,
    InkRole.HIGHLIGHT.value: 60.0,
    InkRole.META.value: 45.0,
    InkRole.BORDER.value: 30.0,
    InkRole.DIVIDER.value: 15.0,
}

DISABLED_THRESHOLDS: Dict[str, float] = {
    InkRole.BODY.value: 45.0,
    InkRole.TITLE.value: 45.0,
    InkRole.LINK_TEXT.value: 45.0,
    InkRole.HIGHLIGHT.value: 45.0,
    InkRole.META.value: 30.0,
    InkRole.BORDER.value: 15.0,
    InkRole.DIVIDER.value: 10.0,
}


# ============================================================
# Config types
# ============================================================


@dataclass(frozen=True)
class RampShaping:
    neutral_chroma_ratio: float = 0.15
    neutral_max_chroma: float = 0.03
    foundation_chroma_ratio: float = 0.5


@dataclass(frozen=True)
class DerivativeSpec:
    lightness_offset: float
    chroma_ratio: float
    chroma_min: float
    chroma_max: float
    lightness_min: float
    lightness_max: float


DEFAULT_DERIVATIVES: Dict[str, DerivativeSpec] = {
    # light surfaces
    "tint": DerivativeSpec(0.35, 0.25, 0.01, 0.06, 0.90, 0.97),
    # dark surfaces
    "shade": DerivativeSpec(-0.25, 0.6, 0.02, 0.12, 0.18, 0.35),
    # high emphasis fills; kept dark enough for light inks
    "fill": DerivativeSpec(0.0, 1.0, 0.04, 0.25, 0.30, 0.50),
}


@dataclass(frozen=True)
class ContrastTargets:
    default: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_THRESHOLDS))
    disabled: Dict[str, float] = field(
        default_factory=lambda: dict(DISABLED_THRESHOLDS)
    )

    def threshold(self, role: InkRole, disabled: bool = False) -> float:
        table = self.disabled if disabled else self.default
        return float(table[InkRole(role).value])


@dataclass(frozen=True)
class EngineConfig:
    ramp: RampShaping = field(default_factory=RampShaping)
    derivatives: Dict[str, DerivativeSpec] = field(
        default_factory=lambda: dict(DEFAULT_DERIVATIVES)
    )
    contrast: ContrastTargets = field(default_factory=ContrastTargets)

    def derivative(self, name: str) -> DerivativeSpec:
        return self.derivatives[name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ramp": asdict(self.ramp),
            "derivatives": {k: asdict(v) for k, v in self.derivatives.items()},
            "contrast": {
                "default": dict(self.contrast.default),
                "disabled": dict(self.contrast.disabled),
            },
        }


# ============================================================
# Parsing
# ============================================================


class ConfigStatus(str, Enum):
    LOADED = "loaded"
    ABSENT = "absent"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class ConfigLoad:
    config: EngineConfig
    status: ConfigStatus
    reason: Optional[str] = None
    path: Optional[Path] = None

    @property
    def used_defaults(self) -> bool:
        return self.status is not ConfigStatus.LOADED


class ConfigValueError(ValueError):
    pass


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValueError(f"{where}: expected a number, got {value!r}")
    x = float(value)
    if not math.isfinite(x):
        raise ConfigValueError(f"{where}: must be finite")
    return x


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key, {})
    if not isinstance(value, Mapping):
        raise ConfigValueError(f"{key}: expected an object")
    return value


def _override_fields(base, overrides: Mapping[str, Any], where: str):
    known = {f.name for f in fields(base)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigValueError(f"{where}: unknown keys {', '.join(unknown)}")
    values = {k: _number(v, f"{where}.{k}") for k, v in overrides.items()}
    return replace(base, **values)


def _check_derivative(name: str, spec: DerivativeSpec) -> None:
    if spec.chroma_ratio < 0 or spec.chroma_min < 0:
        raise ConfigValueError(f"derivatives.{name}: chroma values must be >= 0")
    if spec.chroma_min > spec.chroma_max:
        raise ConfigValueError(f"derivatives.{name}: chroma_min > chroma_max")
    if not (0.0 <= spec.lightness_min <= spec.lightness_max <= 1.0):
        raise ConfigValueError(
            f"derivatives.{name}: lightness band must satisfy 0 <= min <= max <= 1"
        )


def _thresholds(base: Dict[str, float], overrides: Any, where: str) -> Dict[str, float]:
    if not isinstance(overrides, Mapping):
        raise ConfigValueError(f"{where}: expected an object")
    known = {r.value for r in INK_ROLES}
    out = dict(base)
    for role, value in overrides.items():
        if role not in known:
            raise ConfigValueError(f"{where}: unknown ink role '{role}'")
        x = _number(value, f"{where}.{role}")
        if x < 0:
            raise ConfigValueError(f"{where}.{role}: must be >= 0")
        out[role] = x
    return out


def config_from_dict(raw: Any) -> EngineConfig:
    """Apply overrides on top of the defaults. Raises ConfigValueError."""
    if not isinstance(raw, Mapping):
        raise ConfigValueError("top level: expected an object")

    unknown = sorted(set(raw) - {"ramp", "derivatives", "contrast"})
    if unknown:
        raise ConfigValueError(f"top level: unknown keys {', '.join(unknown)}")

    base = EngineConfig()

    ramp = _override_fields(base.ramp, _section(raw, "ramp"), "ramp")
    if min(asdict(ramp).values()) < 0:
        raise ConfigValueError("ramp: values must be >= 0")

    derivatives = dict(base.derivatives)
    for name, overrides in _section(raw, "derivatives").items():
        if name not in derivatives:
            raise ConfigValueError(f"derivatives: unknown derivative '{name}'")
        if not isinstance(overrides, Mapping):
            raise ConfigValueError(f"derivatives.{name}: expected an object")
        spec = _override_fields(derivatives[name], overrides, f"derivatives.{name}")
        _check_derivative(name, spec)
        derivatives[name] = spec

    contrast_raw = _section(raw, "contrast")
    unknown = sorted(set(contrast_raw) - {"default", "disabled"})
    if unknown:
        raise ConfigValueError(f"contrast: unknown keys {', '.join(unknown)}")
    contrast = ContrastTargets(
        default=_thresholds(
            base.contrast.default, contrast_raw.get("default", {}), "contrast.default"
        ),
        disabled=_thresholds(
            base.contrast.disabled, contrast_raw.get("disabled", {}), "contrast.disabled"
        ),
    )

    return EngineConfig(ramp=ramp, derivatives=derivatives, contrast=contrast)


def load_config(path: Optional[Path]) -> ConfigLoad:
    if path is None:
        return ConfigLoad(EngineConfig(), ConfigStatus.ABSENT, "no config file given")

    path = Path(path)
    if not path.exists():
        logger.debug("config %s not found, using defaults", path)
        return ConfigLoad(
            EngineConfig(), ConfigStatus.ABSENT, f"{path} does not exist", path
        )

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        return ConfigLoad(EngineConfig(), ConfigStatus.CORRUPT, f"{path}: {e}", path)

    try:
        config = config_from_dict(raw)
    except ConfigValueError as e:
        return ConfigLoad(EngineConfig(), ConfigStatus.CORRUPT, f"{path}: {e}", path)

    logger.debug("loaded config overrides from %s", path)
    return ConfigLoad(config, ConfigStatus.LOADED, None, path)
