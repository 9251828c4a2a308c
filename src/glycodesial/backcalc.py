"""Back-calculation of desialylated masses from sialylated annotations."""

import numpy as np
import pandas as pd

from glycodesial.config import ModificationDeltas
from glycodesial.errors import MalformedRowError

REQUIRED_COLUMNS = ["peak_id", "hit_id", "measured_mass", "confidence_score"]
COUNT_COLUMNS = ["sialic_acid_count", "acetyl_count"]


def _reject(df: pd.DataFrame, mask, reason: str) -> None:
    if mask.any():
        labels = df.index[np.asarray(mask, dtype=bool)].tolist()
        preview = ", ".join(map(str, labels[:10]))
        more = f" (+{len(labels) - 10} more)" if len(labels) > 10 else ""
        raise MalformedRowError(f"{len(labels)} row(s) {reason}: {preview}{more}", labels)


def validate_sialylated_rows(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate sialylated peak rows and fill missing modification counts.

    Missing counts (absent column or empty cell) are read as 0. Everything
    else that would let NaN/Inf or negative values leak into later stages is
    rejected.

    Args:
        df: Sialylated peak rows

    Returns:
        Copy of df with integer count columns

    Raises:
        MalformedRowError: on missing columns or invalid values
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise MalformedRowError(
            f"Sialylated peaks must have columns {missing}. "
            f"Found columns: {list(df.columns)}"
        )

    df = df.copy()
    _reject(df, df["peak_id"].isna() | df["hit_id"].isna(), "have no peak_id/hit_id")

    mass = pd.to_numeric(df["measured_mass"], errors="coerce")
    _reject(df, ~np.isfinite(mass.to_numpy(dtype=float)), "have a non-finite measured_mass")

    score = pd.to_numeric(df["confidence_score"], errors="coerce")
    _reject(df, score.isna(), "have a missing confidence_score")
    _reject(df, score < 0, "have a negative confidence_score")

    df["measured_mass"] = mass.astype(float)
    df["confidence_score"] = score.astype(float)

    for col in COUNT_COLUMNS:
        if col not in df.columns:
            df[col] = 0
        counts = pd.to_numeric(df[col], errors="coerce")
        _reject(df, df[col].notna() & counts.isna(), f"have a non-numeric {col}")
        counts = counts.fillna(0)
        _reject(df, counts < 0, f"have a negative {col}")
        _reject(
            df,
            ~np.isfinite(counts) | (counts != np.floor(counts)),
            f"have a non-integer {col}",
        )
        df[col] = counts.astype(int)

    return df


def back_calculate_masses(
    df: pd.DataFrame, deltas: ModificationDeltas | None = None
) -> pd.DataFrame:
    """
    Compute the desialylated mass of every sialylated hit.

    computed_mass = measured_mass
                    - sialic_acid delta * sialic_acid_count
                    - acetyl delta * acetyl_count

    Args:
        df: Sialylated peak rows
        deltas: Per-modification mass deltas (default: sialic acid / acetyl constants)

    Returns:
        New DataFrame, one candidate row per input row in input order,
        with an added computed_mass column
    """
    deltas = deltas or ModificationDeltas()
    candidates = validate_sialylated_rows(df)

    candidates["computed_mass"] = (
        candidates["measured_mass"]
        - deltas.sialic_acid * candidates["sialic_acid_count"]
        - deltas.acetyl * candidates["acetyl_count"]
    )

    return candidates
