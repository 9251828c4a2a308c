"""Command-line interface for glycodesial."""

import sys
from pathlib import Path

import click
import rich_click as rclick
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from glycodesial import __version__
from glycodesial.config import (
    ACETYL_MASS_DELTA,
    DEFAULT_CONFIDENCE_CUTOFF,
    DEFAULT_MASS_TOLERANCE,
    SIALIC_ACID_MASS_DELTA,
    VARIANTS,
    ModificationDeltas,
)
from glycodesial.io import (
    read_sialylated_peaks,
    read_desialylated_reference,
    reference_masses,
    write_tsv,
)
from glycodesial.pipeline import run_all_variants
from glycodesial.plotting import save_variant_plots

# Configure rich-click
rclick.rich_click.USE_RICH_MARKUP = True
rclick.rich_click.USE_MARKDOWN = True
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True
rclick.rich_click.STYLE_ERRORS_SUGGESTION = "yellow italic"

console = Console()


def print_variant_report(results: dict) -> None:
    """Print a formatted summary of every variant's outcome."""
    table = Table(title="Computed Desialylated Spectra")
    table.add_column("Variant", style="cyan")
    table.add_column("Kept hits", justify="right")
    table.add_column("Kept peaks", justify="right")
    table.add_column("Keep rate", justify="right")
    table.add_column("Bins", justify="right")
    table.add_column("Mass range (Da)", justify="right")
    table.add_column("Status", style="bold")

    for name, result in results.items():
        if not result.ok:
            table.add_row(name, "-", "-", "-", "-", "-", "[red]Failed[/red]")
            continue

        spectrum = result.spectrum
        stats = result.stats
        table.add_row(
            name,
            f"{stats['kept_rows']:,}/{stats['total_rows']:,}",
            f"{stats['kept_groups']:,}/{stats['total_groups']:,}",
            f"{stats['keep_rate']:.1%}",
            f"{len(spectrum):,}",
            f"{spectrum['lower'].min():.2f} - {spectrum['upper'].max():.2f}",
            "[green]OK[/green]",
        )

    console.print(table)

    for name, result in results.items():
        if not result.ok:
            console.print(f"  [red]{name}:[/red] {result.error}")


@rclick.command()
@rclick.option(
    "-s",
    "--sialylated",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Annotated sialylated peak list (CSV, TSV or Excel)",
)
@rclick.option(
    "-d",
    "--desialylated",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Experimental desialylated reference peak list (CSV, TSV or Excel)",
)
@rclick.option(
    "-o",
    "--output-dir",
    default="glycodesial_out",
    type=click.Path(file_okay=False),
    help="Output directory for spectra and plots [default: glycodesial_out]",
)
@rclick.option(
    "--mass-tolerance",
    default=DEFAULT_MASS_TOLERANCE,
    type=click.FloatRange(min=0, min_open=True),
    help=f"Matching tolerance and nominal bin width in Da [default: {DEFAULT_MASS_TOLERANCE:g}]",
)
@rclick.option(
    "--confidence-cutoff",
    default=DEFAULT_CONFIDENCE_CUTOFF,
    type=float,
    help=f"Minimum hit score kept by the confidence filter [default: {DEFAULT_CONFIDENCE_CUTOFF:g}]",
)
@rclick.option(
    "--sialic-acid-delta",
    default=SIALIC_ACID_MASS_DELTA,
    type=float,
    help=f"Mass removed per sialic acid in Da [default: {SIALIC_ACID_MASS_DELTA}]",
)
@rclick.option(
    "--acetyl-delta",
    default=ACETYL_MASS_DELTA,
    type=float,
    help=f"Mass removed per acetyl group in Da [default: {ACETYL_MASS_DELTA}]",
)
@rclick.option(
    "--variant",
    "variants",
    multiple=True,
    type=click.Choice(list(VARIANTS)),
    help="Variant(s) to compute, repeatable [default: all]",
)
@rclick.option(
    "--plots/--no-plots",
    default=True,
    help="Write mirror plots against the reference [default: plots]",
)
@rclick.option(
    "--plot-format",
    default="png",
    type=click.Choice(["png", "pdf", "svg"]),
    help="Image format for plots [default: png]",
)
@rclick.option(
    "--workers",
    default=1,
    type=click.IntRange(min=1),
    help="Variants computed in parallel [default: 1]",
)
@rclick.version_option(version=__version__, prog_name="glycodesial")
def main(
    sialylated: str,
    desialylated: str,
    output_dir: str,
    mass_tolerance: float,
    confidence_cutoff: float,
    sialic_acid_delta: float,
    acetyl_delta: float,
    variants: tuple[str, ...],
    plots: bool,
    plot_format: str,
    workers: int,
):
    """
    **glycodesial** - Computational desialylation of glycoprotein spectra.

    Strips sialic acid and acetyl masses from an annotated sialylated peak
    list, reconciles the result against an experimental desialylated
    spectrum and bins it into a comparable spectrum.

    ## Example

    ```
    glycodesial -s sialylated.csv -d desialylated.csv -o results/
    ```

    ## Output

    - **<variant>_spectrum.tsv**: binned spectrum (mass, intensity, bin edges)
    - **<variant>_candidates.tsv**: candidate hits with computed masses and final scores
    - **<variant>_mirror.png**: computed spectrum mirrored against the reference
    """
    console.print(
        Panel.fit(
            f"[bold blue]glycodesial[/bold blue] v{__version__}\n"
            "Computational Desialylation Pipeline",
            border_style="blue",
        )
    )

    sialylated_path = Path(sialylated)
    reference_path = Path(desialylated)
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    # Step 1: Read input files
    console.print("\n[bold]Step 1:[/bold] Reading input files...")

    console.print(f"  Reading sialylated peaks from [cyan]{sialylated_path.name}[/cyan]...")
    sialylated_df = read_sialylated_peaks(sialylated_path)
    console.print(
        f"  [green]Found {len(sialylated_df):,} hits on "
        f"{sialylated_df['peak_id'].nunique():,} peaks[/green]"
    )

    console.print(f"  Reading reference from [cyan]{reference_path.name}[/cyan]...")
    reference_df = read_desialylated_reference(reference_path)
    masses = reference_masses(reference_df)
    console.print(f"  [green]Found {len(masses):,} distinct reference masses[/green]")

    # Step 2: Run variants
    console.print("\n[bold]Step 2:[/bold] Computing desialylated spectra...")
    results = run_all_variants(
        sialylated_df,
        masses,
        variants=variants or None,
        max_workers=workers,
        mass_tolerance=mass_tolerance,
        confidence_cutoff=confidence_cutoff,
        deltas=ModificationDeltas(sialic_acid=sialic_acid_delta, acetyl=acetyl_delta),
    )
    print_variant_report(results)

    # Step 3: Write output
    console.print("\n[bold]Step 3:[/bold] Writing output files...")
    for name, result in results.items():
        if result.ok:
            write_tsv(result.spectrum, out_dir / f"{name}_spectrum.tsv")
            write_tsv(result.candidates, out_dir / f"{name}_candidates.tsv")

    if plots:
        console.print("\n[bold]Step 4:[/bold] Plotting against reference...")
        save_variant_plots(results, reference_df, out_dir, fmt=plot_format)

    n_ok = sum(1 for r in results.values() if r.ok)
    border = "green" if n_ok == len(results) else "yellow" if n_ok else "red"
    console.print(
        Panel.fit(
            f"[bold]{n_ok}/{len(results)}[/bold] variants computed\n\n"
            f"Output directory: [cyan]{out_dir}[/cyan]",
            title="Summary",
            border_style=border,
        )
    )

    if n_ok == 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
