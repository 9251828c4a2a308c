"""Histogram binning of computed masses into a derived spectrum."""

import numpy as np
import pandas as pd

from glycodesial.config import DEFAULT_MASS_TOLERANCE
from glycodesial.errors import (
    DegenerateSpectrumError,
    EmptyInputError,
    InvalidParameterError,
)

SPECTRUM_COLUMNS = ["mass", "intensity", "lower", "upper", "n_candidates"]


def bin_edges(
    min_mass: float, max_mass: float, tolerance: float = DEFAULT_MASS_TOLERANCE
) -> np.ndarray:
    """
    Equal-width bin edges spanning [min_mass, max_mass].

    The number of bins is round(range / tolerance), at least 1. Python's
    round() is used, so exact halves go to the even neighbour.

    Returns:
        Array of n_bins + 1 edges
    """
    if tolerance <= 0:
        raise InvalidParameterError(f"Mass tolerance must be positive, got {tolerance}")

    n_bins = max(1, int(round((max_mass - min_mass) / tolerance)))
    return np.linspace(min_mass, max_mass, n_bins + 1)


def assign_bins(masses: np.ndarray, edges: np.ndarray) -> np.ndarray:
    """
    Index of the bin holding each mass.

    Bins are [lower, upper) except the last one, which also includes max.
    """
    idx = np.searchsorted(edges, masses, side="right") - 1
    return np.clip(idx, 0, len(edges) - 2)


def aggregate_bins(
    candidates: pd.DataFrame,
    tolerance: float = DEFAULT_MASS_TOLERANCE,
    mass_column: str = "computed_mass",
    score_column: str = "confidence_score",
) -> pd.DataFrame:
    """
    Sum candidate scores into equal-width mass bins, without rescaling.

    Returns:
        DataFrame with columns mass, intensity, lower, upper, n_candidates;
        one row per non-empty bin, ordered by mass

    Raises:
        EmptyInputError: if there are no candidates
    """
    if len(candidates) == 0:
        raise EmptyInputError("No candidate rows to bin")

    masses = candidates[mass_column].to_numpy(dtype=float)
    scores = candidates[score_column].to_numpy(dtype=float)

    edges = bin_edges(masses.min(), masses.max(), tolerance)
    idx = assign_bins(masses, edges)

    n_bins = len(edges) - 1
    intensity = np.bincount(idx, weights=scores, minlength=n_bins)
    counts = np.bincount(idx, minlength=n_bins)

    populated = counts > 0
    lower = edges[:-1][populated]
    upper = edges[1:][populated]

    return pd.DataFrame(
        {
            "mass": (lower + upper) / 2,
            "intensity": intensity[populated],
            "lower": lower,
            "upper": upper,
            "n_candidates": counts[populated],
        },
        columns=SPECTRUM_COLUMNS,
    )


def bin_spectrum(
    candidates: pd.DataFrame,
    tolerance: float = DEFAULT_MASS_TOLERANCE,
    mass_column: str = "computed_mass",
    score_column: str = "confidence_score",
) -> pd.DataFrame:
    """
    Aggregate candidate masses into a spectrum of equal-width bins.

    Each bin is represented by the midpoint of its edges and carries the
    summed confidence score of its candidates, rescaled so that the tallest
    bin is 100.

    Args:
        candidates: Final candidate rows
        tolerance: Mass tolerance in Da, used as the nominal bin width
        mass_column: Column with the computed mass
        score_column: Column with the confidence score

    Returns:
        DataFrame with columns mass, intensity, lower, upper, n_candidates;
        one row per non-empty bin, ordered by mass

    Raises:
        EmptyInputError: if there are no candidates
        DegenerateSpectrumError: if every bin has zero intensity
    """
    spectrum = aggregate_bins(candidates, tolerance, mass_column, score_column)

    peak = spectrum["intensity"].max()
    if peak == 0:
        raise DegenerateSpectrumError(
            "All bins have zero intensity; cannot rescale spectrum"
        )

    spectrum["intensity"] = spectrum["intensity"] / peak * 100
    return spectrum
