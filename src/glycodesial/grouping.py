"""Per-peak grouping helpers shared by the filtering stages."""

import pandas as pd
from rich.console import Console

from glycodesial.errors import DegenerateGroupError, EmptyInputError

console = Console()


def group_by_peak(
    df: pd.DataFrame, peak_column: str = "peak_id"
) -> dict[str, pd.DataFrame]:
    """Partition rows into a fresh {peak_id: rows} mapping, in first-seen order."""
    return {peak_id: rows for peak_id, rows in df.groupby(peak_column, sort=False)}


def renormalize_by_peak(
    df: pd.DataFrame,
    score_column: str = "confidence_score",
    peak_column: str = "peak_id",
) -> pd.DataFrame:
    """
    Rescale scores so that every peak group sums to 100.

    score_i <- score_i / sum(group scores) * 100

    Args:
        df: Candidate rows surviving a filter stage
        score_column: Column holding the confidence score
        peak_column: Column identifying the peak group

    Returns:
        New DataFrame with rescaled scores, rows in input order

    Raises:
        EmptyInputError: if df has no rows
        DegenerateGroupError: if a group's scores sum to exactly 0
    """
    if len(df) == 0:
        raise EmptyInputError("No candidate rows left to renormalize")

    groups = group_by_peak(df, peak_column)
    totals = {peak_id: rows[score_column].sum() for peak_id, rows in groups.items()}

    degenerate = [peak_id for peak_id, total in totals.items() if total == 0]
    if degenerate:
        console.print(
            f"[yellow]Warning:[/yellow] {len(degenerate)} peak group(s) have zero "
            f"total confidence score: {', '.join(map(str, degenerate))}"
        )
        raise DegenerateGroupError(degenerate)

    out = df.copy()
    out[score_column] = out[score_column] / out[peak_column].map(totals) * 100
    return out


def report_lost_groups(
    before: pd.DataFrame,
    after: pd.DataFrame,
    stage: str,
    peak_column: str = "peak_id",
) -> list:
    """
    Warn about peak groups that lost every row in a filter stage.

    Returns:
        List of peak ids present in before but absent from after
    """
    kept = set(after[peak_column])
    lost = [peak_id for peak_id in before[peak_column].unique() if peak_id not in kept]

    if lost:
        preview = ", ".join(map(str, lost[:10]))
        more = f" (+{len(lost) - 10} more)" if len(lost) > 10 else ""
        console.print(
            f"[yellow]Warning:[/yellow] {stage}: {len(lost)} peak group(s) "
            f"lost all hits: {preview}{more}"
        )

    return lost
