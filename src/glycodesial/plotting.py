"""Mirror plots of computed spectra against the experimental reference."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from rich.console import Console

console = Console()

COMPUTED_COLOR = "tab:blue"
REFERENCE_COLOR = "tab:red"


def _plt():
    import matplotlib.pyplot as plt
    return plt


def _vlines(ax, masses, heights, color, label):
    ax.vlines(masses, 0, heights, colors=color, linewidth=1.0, label=label)


def plot_mirror(
    reference: pd.DataFrame,
    spectrum: pd.DataFrame,
    title: str = "",
    mass_column: str = "measured_mass",
    intensity_column: str = "relative_intensity",
):
    """
    Plot a computed spectrum above the mirrored experimental reference.

    Reference intensities are negated so both spectra share the mass axis.

    Returns:
        matplotlib Figure
    """
    fig, ax = _plt().subplots(figsize=(10, 5))

    _vlines(ax, spectrum["mass"], spectrum["intensity"], COMPUTED_COLOR, "Computed")
    _vlines(
        ax,
        reference[mass_column],
        -np.asarray(reference[intensity_column], dtype=float),
        REFERENCE_COLOR,
        "Experimental (desialylated)",
    )

    ax.axhline(0, color="black", linewidth=0.6)
    ax.set_ylim(-110, 110)
    ax.set_yticks([-100, -50, 0, 50, 100])
    ax.set_yticklabels(["100", "50", "0", "50", "100"])
    ax.set_xlabel("Mass (Da)")
    ax.set_ylabel("Relative intensity (%)")
    if title:
        ax.set_title(title)
    ax.legend(loc="upper right", frameon=False)
    fig.tight_layout()

    return fig


def save_variant_plots(
    results: dict,
    reference: pd.DataFrame,
    out_dir: Path,
    fmt: str = "png",
) -> list[Path]:
    """
    Write one mirror plot per successful variant.

    Args:
        results: Variant name -> VariantResult from run_all_variants()
        reference: Desialylated reference rows
        out_dir: Output directory (created if missing)
        fmt: Image format understood by matplotlib (png, pdf, svg)

    Returns:
        Paths of the written files
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []

    for name, result in results.items():
        if not result.ok:
            console.print(f"  [dim]Skipping plot for failed variant '{name}'[/dim]")
            continue

        fig = plot_mirror(reference, result.spectrum, title=name.replace("_", " "))
        path = out_dir / f"{name}_mirror.{fmt}"
        fig.savefig(path)
        _plt().close(fig)
        console.print(f"[green]Wrote[/green] plot to {path}")
        written.append(path)

    return written
