"""Reconciliation of computed masses against the desialylated reference."""

from typing import Iterable

import numpy as np
import pandas as pd

from glycodesial.config import DEFAULT_MASS_TOLERANCE
from glycodesial.grouping import renormalize_by_peak, report_lost_groups


def nearest_reference_distance(
    masses: np.ndarray, reference_masses: Iterable[float]
) -> np.ndarray:
    """
    Absolute distance (Da) from each mass to its closest reference mass.

    Returns inf for every mass when there are no finite reference masses.
    """
    masses = np.asarray(masses, dtype=float)
    refs = np.unique(np.asarray(list(reference_masses), dtype=float))
    refs = refs[np.isfinite(refs)]

    if len(refs) == 0:
        return np.full(masses.shape, np.inf)

    idx = np.searchsorted(refs, masses)
    left = refs[np.clip(idx - 1, 0, len(refs) - 1)]
    right = refs[np.clip(idx, 0, len(refs) - 1)]

    return np.minimum(np.abs(masses - left), np.abs(masses - right))


def reconcile_with_reference(
    candidates: pd.DataFrame,
    reference_masses: Iterable[float],
    tolerance: float = DEFAULT_MASS_TOLERANCE,
    mass_column: str = "computed_mass",
) -> pd.DataFrame:
    """
    Keep candidates whose computed mass matches an experimental reference mass.

    A row is kept when |computed_mass - m| < tolerance for at least one
    reference mass m. Rows are then deduplicated on (peak_id, hit_id), first
    occurrence wins, and scores are renormalized per peak group.

    Args:
        candidates: Candidate rows from back_calculate_masses()
        reference_masses: Measured masses of the desialylated reference
        tolerance: Matching window in Da (strict)
        mass_column: Column holding the computed mass

    Returns:
        New DataFrame with the surviving, renormalized rows

    Raises:
        EmptyInputError: if no candidate survives
        DegenerateGroupError: if a surviving group has zero total score
    """
    if mass_column not in candidates.columns:
        raise ValueError(f"Candidates DataFrame must have '{mass_column}' column")

    distance = nearest_reference_distance(
        candidates[mass_column].to_numpy(), reference_masses
    )
    matched = candidates[distance < tolerance]
    matched = matched.drop_duplicates(subset=["peak_id", "hit_id"], keep="first")

    report_lost_groups(candidates, matched, stage="Peak reconciliation")

    return renormalize_by_peak(matched)


def get_reconciliation_statistics(
    candidates: pd.DataFrame, reconciled: pd.DataFrame
) -> dict:
    """
    Summarize how many rows and peak groups a filter stage kept.

    Returns:
        Dictionary with statistics
    """
    total_rows = len(candidates)
    kept_rows = len(reconciled)
    total_groups = candidates["peak_id"].nunique() if total_rows > 0 else 0
    kept_groups = reconciled["peak_id"].nunique() if kept_rows > 0 else 0

    return {
        "total_rows": total_rows,
        "kept_rows": kept_rows,
        "dropped_rows": total_rows - kept_rows,
        "total_groups": total_groups,
        "kept_groups": kept_groups,
        "keep_rate": kept_rows / total_rows if total_rows > 0 else 0,
    }
