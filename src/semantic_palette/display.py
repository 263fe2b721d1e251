from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .color import Oklch, to_hex
from .primitives import PrimitivePalette
from .semantic import SemanticColorPalette, StatefulTokens

# ============================================================
# Rich tables
# ============================================================


def swatch(color: Oklch) -> Text:
    return Text("      ", style=Style(bgcolor=to_hex(color)))


def ink_sample(ink: Oklch, surface: Oklch) -> Text:
    return Text(" Aa ", style=Style(color=to_hex(ink), bgcolor=to_hex(surface)))


def render_primitives(palette: PrimitivePalette, console: Optional[Console] = None):
    console = console or Console()
    table = Table(
        title=f"Primitive palette ({palette.direction})",
        show_header=True,
        header_style="bold",
    )

    table.add_column("Key", style="cyan")
    table.add_column("Swatch")
    table.add_column("Hex")
    table.add_column("L", justify="right")
    table.add_column("C", justify="right")
    table.add_column("H", justify="right")

    for key in palette.keys():
        c = palette[key]
        table.add_row(
            key,
            swatch(c),
            to_hex(c),
            f"{c.L:.3f}",
            f"{c.C:.4f}",
            f"{c.H:.0f}°",
        )

    console.print(table)


def render_semantic(palette: SemanticColorPalette, console: Optional[Console] = None):
    """Surface and chosen ink key for every token, with achieved contrast."""
    console = console or Console()
    table = Table(
        title=f"Semantic palette ({palette.ref_map_name} map)",
        show_header=True,
        header_style="bold",
    )

    table.add_column("Entry", style="cyan")
    table.add_column("State")
    table.add_column("Surface")
    table.add_column("Role")
    table.add_column("Ink")
    table.add_column("Sample")
    table.add_column("Lc", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("")

    for name, state, role, sel, surface in palette.iter_selections():
        entry = palette.entry(name)
        if isinstance(entry, StatefulTokens):
            surface_key = entry[state].surface_key
        else:
            surface_key = entry.surface_key
        table.add_row(
            name.value,
            state.value if state is not None else "",
            Text.assemble(swatch(surface), f" {surface_key}"),
            role.value,
            sel.key,
            ink_sample(sel.color, surface),
            f"{sel.contrast:.1f}",
            f"{sel.threshold:.0f}",
            Text("degraded", style="bold red") if sel.degraded else Text("ok", style="green"),
        )

    console.print(table)

    for w in palette.warnings:
        console.print(f"[yellow]warning[/yellow] {w}")
