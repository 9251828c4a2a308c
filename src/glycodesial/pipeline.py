"""Pipeline orchestration for the named analysis variants."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd
from rich.console import Console

from glycodesial.backcalc import back_calculate_masses
from glycodesial.binning import bin_spectrum
from glycodesial.config import VARIANTS, PipelineConfig, variant_config
from glycodesial.errors import DesialylationError
from glycodesial.filtering import filter_by_confidence
from glycodesial.reconcile import get_reconciliation_statistics, reconcile_with_reference

console = Console()


@dataclass(frozen=True)
class VariantResult:
    """Outcome of one named variant: spectrum and statistics, or an error."""

    name: str
    config: PipelineConfig
    spectrum: pd.DataFrame | None = None
    candidates: pd.DataFrame | None = None
    stats: dict | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def compute_candidates(
    sialylated: pd.DataFrame,
    reference_masses: Iterable[float],
    config: PipelineConfig,
) -> pd.DataFrame:
    """
    Back-calculate masses and apply the enabled filter stages.

    Peak reconciliation runs before the confidence filter; each renormalizes
    scores on its own, so the last enabled stage decides the final scores.
    """
    candidates = back_calculate_masses(sialylated, config.deltas)

    if config.peak_filter_enabled:
        candidates = reconcile_with_reference(
            candidates, reference_masses, tolerance=config.mass_tolerance
        )

    if config.confidence_filter_enabled:
        candidates = filter_by_confidence(candidates, cutoff=config.confidence_cutoff)

    return candidates


def run_pipeline(
    sialylated: pd.DataFrame,
    reference_masses: Iterable[float],
    config: PipelineConfig | None = None,
) -> pd.DataFrame:
    """
    Compute the desialylated spectrum for one configuration.

    Returns:
        Spectrum DataFrame (mass, intensity, lower, upper, n_candidates)
    """
    config = config or PipelineConfig()
    candidates = compute_candidates(sialylated, reference_masses, config)
    return bin_spectrum(candidates, tolerance=config.mass_tolerance)


def _run_variant(
    name: str,
    sialylated: pd.DataFrame,
    reference_masses: np.ndarray,
    config: PipelineConfig,
) -> VariantResult:
    try:
        candidates = compute_candidates(sialylated, reference_masses, config)
        spectrum = bin_spectrum(candidates, tolerance=config.mass_tolerance)
    except DesialylationError as exc:
        console.print(f"[red]Variant '{name}' failed:[/red] {type(exc).__name__}: {exc}")
        return VariantResult(name=name, config=config, error=f"{type(exc).__name__}: {exc}")

    stats = get_reconciliation_statistics(sialylated, candidates)
    return VariantResult(
        name=name,
        config=config,
        spectrum=spectrum,
        candidates=candidates,
        stats=stats,
    )


def run_all_variants(
    sialylated: pd.DataFrame,
    reference_masses: Iterable[float],
    variants: Iterable[str] | None = None,
    max_workers: int = 1,
    **overrides,
) -> dict[str, VariantResult]:
    """
    Run the named analysis variants independently.

    A variant that raises a pipeline error is returned as a failed
    VariantResult; the others are unaffected.

    Args:
        sialylated: Sialylated peak rows
        reference_masses: Measured masses of the desialylated reference
        variants: Variant names to run (default: all of VARIANTS)
        max_workers: Threads to run variants on (1 = sequential)
        **overrides: PipelineConfig fields shared by all variants

    Returns:
        Dictionary mapping variant name to VariantResult, in request order
    """
    names = list(variants) if variants is not None else list(VARIANTS)
    configs = {name: variant_config(name, **overrides) for name in names}
    refs = np.asarray(list(reference_masses), dtype=float)

    if max_workers <= 1:
        return {
            name: _run_variant(name, sialylated, refs, cfg)
            for name, cfg in configs.items()
        }

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            name: pool.submit(_run_variant, name, sialylated, refs, cfg)
            for name, cfg in configs.items()
        }
        return {name: future.result() for name, future in futures.items()}
