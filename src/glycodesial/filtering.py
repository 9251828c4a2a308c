"""Confidence score filtering."""

import pandas as pd

from glycodesial.config import DEFAULT_CONFIDENCE_CUTOFF
from glycodesial.grouping import renormalize_by_peak, report_lost_groups


def filter_by_confidence(
    candidates: pd.DataFrame,
    cutoff: float = DEFAULT_CONFIDENCE_CUTOFF,
    score_column: str = "confidence_score",
) -> pd.DataFrame:
    """
    Drop hits at or below a confidence cutoff and renormalize each peak group.

    Args:
        candidates: Candidate rows, reconciled or not
        cutoff: Rows need confidence_score > cutoff to survive
        score_column: Column holding the confidence score

    Returns:
        New DataFrame with the surviving, renormalized rows
    """
    kept = candidates[candidates[score_column] > cutoff]
    report_lost_groups(candidates, kept, stage=f"Confidence cutoff {cutoff:g}")

    return renormalize_by_peak(kept, score_column=score_column)
