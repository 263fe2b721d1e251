from .color import Oklch, clamp_to_gamut, is_in_gamut, parse_color, to_css
from .config import ConfigLoad, ConfigStatus, EngineConfig, load_config
from .css import collect_css_rule_sets, to_css_rule_sets_text, to_css_text
from .errors import InvalidStepTableError, MissingRoleError, PaletteError, UnknownThemeError
from .ink import (
    InkSelection,
    select_all_inks_for_surface,
    select_ink_for_surface,
    select_ink_for_surface_with_bg_y,
)
from .primitives import PRIMITIVE_KEYS, PrimitivePalette
from .ramps import (
    DARK_LIGHTNESS_STEPS,
    LIGHT_LIGHTNESS_STEPS,
    generate_brand_derivatives,
    generate_foundation_ramp,
    generate_neutral_ramp,
    generate_primitive_palette,
)
from .refmap import DARK_REF_MAP, LIGHT_REF_MAP, PrimitiveRefMap, create_primitive_ref_map
from .roles import ActionState, ComponentName, ContextName, InkRole
from .semantic import SemanticColorPalette, create_semantic_from_primitive

__version__ = "0.1.0"
