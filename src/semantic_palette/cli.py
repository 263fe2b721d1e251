"""
semantic-palette: build a primitive + semantic palette from seed colors and
emit CSS, tables, CSV or plots.

  semantic-palette css --brand "oklch(0.55 0.15 220)" --theme dark --rules
  semantic-palette show --brand "#1e6fa8"
  semantic-palette primitives out.csv
  semantic-palette plot ramps.png
  semantic-palette validate --base "#fafafa" --brand "#1e6fa8"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .color import Oklch, parse_color, to_css
from .config import ConfigStatus, EngineConfig, load_config
from .css import to_css_rule_sets_text, to_css_text
from .display import render_primitives, render_semantic, swatch
from .plot import plot_ramps
from .primitives import PrimitivePalette
from .ramps import STEP_TABLES, generate_primitive_palette
from .refmap import THEME_REF_MAPS, create_primitive_ref_map
from .semantic import SemanticColorPalette, create_semantic_from_primitive
from .validation import (
    REQUIRED_CONTRAST_RATIO,
    allowable_base_lightness_range,
    validate_color_pair,
)

logger = logging.getLogger(__name__)

DEFAULT_BRAND = "oklch(0.55 0.15 220)"

# ============================================================
# Parameter types / shared options
# ============================================================


class ColorParamType(click.ParamType):
    name = "color"

    def convert(self, value, param, ctx):
        if isinstance(value, Oklch):
            return value
        try:
            return parse_color(value)
        except ValueError as e:
            self.fail(f"{value!r} is not a color ({e})", param, ctx)


COLOR = ColorParamType()


def palette_options(f):
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="JSON file with ramp / derivative / contrast overrides.",
    )(f)
    f = click.option(
        "--theme",
        type=click.Choice(sorted(THEME_REF_MAPS)),
        default="light",
        show_default=True,
        help="Step table and reference map.",
    )(f)
    f = click.option(
        "--foundation",
        type=COLOR,
        default=None,
        help="Foundation seed (default: near-white / near-black by theme).",
    )(f)
    f = click.option(
        "--brand",
        type=COLOR,
        default=DEFAULT_BRAND,
        show_default=True,
        help="Brand seed, '#rrggbb' or 'oklch(L C H)'.",
    )(f)
    return f


def resolve_config(config_path: Optional[Path]) -> EngineConfig:
    loaded = load_config(config_path)
    if loaded.status is ConfigStatus.CORRUPT:
        logger.warning("ignoring config, using defaults: %s", loaded.reason)
    elif loaded.status is ConfigStatus.ABSENT and config_path is not None:
        logger.warning("config not found, using defaults: %s", loaded.reason)
    return loaded.config


def build_palettes(
    brand: Oklch,
    foundation: Optional[Oklch],
    theme: str,
    config_path: Optional[Path],
) -> tuple[PrimitivePalette, SemanticColorPalette]:
    config = resolve_config(config_path)
    primitive = generate_primitive_palette(
        brand,
        foundation,
        lightness_steps=STEP_TABLES[theme],
        config=config,
    )
    semantic = create_semantic_from_primitive(
        primitive, create_primitive_ref_map(theme), config.contrast
    )
    return primitive, semantic


# ============================================================
# CLI
# ============================================================


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def cli(verbose: bool):
    """
    Primitive and semantic color palettes from seed colors.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@cli.command()
@palette_options
@click.option("--selector", default=":root", show_default=True)
@click.option("--rules", is_flag=True, help="Append context/component rule sets.")
@click.option(
    "--out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write CSS here instead of stdout.",
)
def css(brand, foundation, theme, config_path, selector, rules, out):
    """
    Emit CSS custom properties for the semantic palette.
    """
    _, semantic = build_palettes(brand, foundation, theme, config_path)

    text = to_css_text(semantic, selector)
    if rules:
        text += "\n" + to_css_rule_sets_text()

    if out is None:
        click.echo(text, nl=False)
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    click.echo(f"✓ Wrote {out}")


@cli.command()
@palette_options
@click.option(
    "--semantic/--no-semantic",
    default=True,
    show_default=True,
    help="Also show semantic tokens with their chosen inks.",
)
def show(brand, foundation, theme, config_path, semantic):
    """
    Rich preview of the primitive palette and the resolved semantic tokens.
    """
    primitive, sem = build_palettes(brand, foundation, theme, config_path)

    console = Console()
    render_primitives(primitive, console)
    if semantic:
        render_semantic(sem, console)


@cli.command()
@palette_options
@click.argument("out_csv", type=click.Path(dir_okay=False, path_type=Path))
def primitives(brand, foundation, theme, config_path, out_csv):
    """
    Write the primitive palette (key, family, L, C, H, css, hex) as CSV.
    """
    primitive, _ = build_palettes(brand, foundation, theme, config_path)

    out_csv.parent.mkdir(parents=True, exist_ok=True)
    primitive.to_frame().to_csv(out_csv, index=False)
    click.echo(f"✓ Wrote {out_csv}")


@cli.command()
@palette_options
@click.argument("out_png", type=click.Path(dir_okay=False, path_type=Path))
def plot(brand, foundation, theme, config_path, out_png):
    """
    Plot ramp lightness and chroma per step.
    """
    primitive, _ = build_palettes(brand, foundation, theme, config_path)

    out_png.parent.mkdir(parents=True, exist_ok=True)
    plot_ramps(primitive, out_png, title=f"Primitive ramps ({theme}, brand {to_css(brand)})")
    click.echo(f"✓ Wrote {out_png}")


@cli.command()
@click.option("--base", type=COLOR, required=True, help="Base (foundation) seed.")
@click.option("--brand", type=COLOR, required=True, help="Brand seed.")
@click.option(
    "--ratio",
    type=float,
    default=REQUIRED_CONTRAST_RATIO,
    show_default=True,
    help="Required WCAG contrast ratio for brand text on base.",
)
def validate(base, brand, ratio):
    """
    Check a base/brand seed pair and report the usable base lightness range.
    """
    result = validate_color_pair(base, brand, ratio)

    console = Console()
    table = Table(title="Seed pair", show_header=True, header_style="bold")
    table.add_column("Seed", style="cyan")
    table.add_column("Swatch")
    table.add_column("OKLCH")
    table.add_row("base", swatch(base), to_css(base))
    table.add_row("brand", swatch(brand), to_css(brand))
    console.print(table)

    console.print(f"brand text contrast: {result.contrast_ratio:.2f}:1 (need {ratio}:1)")

    bounds = allowable_base_lightness_range(brand, ratio)
    if bounds is None:
        console.print("allowable base lightness: none")
    else:
        console.print(f"allowable base lightness: {bounds[0]:.3f} .. {bounds[1]:.3f}")

    if not result.valid:
        for issue in result.issues:
            console.print(f"[red]{issue.code}[/red] {issue.message}")
        raise click.ClickException("Seed pair is not valid")

    click.echo("✓ Seed pair is valid")


def main():
    cli()


if __name__ == "__main__":
    main()
