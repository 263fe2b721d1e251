from pathlib import Path

import matplotlib.pyplot as plt

from .primitives import BRAND_KEYS, PrimitivePalette

# ------------------------------------------------------------
# Configuration
# ------------------------------------------------------------

FAMILY_LABELS = {
    "N": "Neutral",
    "F": "Foundation",
}

# ------------------------------------------------------------
# Plot
# ------------------------------------------------------------


def plot_ramps(palette: PrimitivePalette, out_png: Path, title: str = "") -> Path:
    """
    Lightness and chroma per ramp step, one marker per primitive drawn in
    its own color. Brand colors are shown as horizontal reference lines.
    """
    df = palette.to_frame()
    df["family_key"] = df["key"].str[0]
    df["step"] = df["key"].str[1:]

    fig, axes = plt.subplots(nrows=2, ncols=1, figsize=(10, 6.4), sharex=True)

    for ax, column, label in zip(axes, ["L", "C"], ["Lightness (L)", "Chroma (C)"]):
        for family, marker in [("N", "o"), ("F", "s")]:
            sub = df[df["family_key"] == family]
            steps = sub["step"].astype(int)
            ax.plot(
                steps,
                sub[column],
                color="#888888",
                linewidth=1.0,
                alpha=0.6,
                label=FAMILY_LABELS[family],
            )
            ax.scatter(
                steps,
                sub[column],
                c=list(sub["hex"]),
                edgecolors="black",
                marker=marker,
                s=70,
                zorder=3,
            )

        for _, row in df[df["key"].isin(BRAND_KEYS)].iterrows():
            ax.axhline(row[column], color=row["hex"], linestyle="--", linewidth=1.2)
            ax.annotate(
                row["key"],
                xy=(9.3, row[column]),
                fontsize=8,
                va="center",
            )

        ax.set_ylabel(label)
        ax.grid(axis="y", linestyle="--", alpha=0.4)

    axes[0].legend(loc="best", fontsize=8)
    axes[-1].set_xticks(range(10))
    axes[-1].set_xlabel("Ramp step")

    fig.suptitle(title or f"Primitive ramps ({palette.direction})", y=0.98)

    plt.tight_layout(rect=[0, 0, 1, 0.96])
    plt.savefig(out_png, dpi=150)
    plt.close(fig)
    return out_png
