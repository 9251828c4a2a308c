"""I/O utilities for reading annotated peak tables and writing TSV output."""

import re
from pathlib import Path

import numpy as np
import pandas as pd
from rich.console import Console

from glycodesial.errors import MalformedRowError

console = Console()

# Column aliases seen in annotation exports, after clean_column_names()
COLUMN_ALIASES = {
    "measured_mass": ["measured_mass", "mass", "observed_mass", "monoisotopic_mass", "mw"],
    "sialic_acid_count": ["sialic_acid_count", "sialic_acid", "neuac", "neu5ac", "sia"],
    "acetyl_count": ["acetyl_count", "acetyl", "acetylation", "ac"],
    "confidence_score": ["confidence_score", "score", "hit_score", "confidence"],
    "relative_intensity": [
        "relative_intensity",
        "rel_intens",
        "relative_abundance",
        "rel_abundance",
        "intensity",
    ],
    "identifier": ["identifier", "id", "peak_hit_id", "hit"],
}

TEXT_EXTENSIONS = {".csv": ",", ".tsv": "\t", ".txt": "\t"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}


def clean_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """Clean column names: lowercase, replace special chars with underscore."""
    df.columns = [
        re.sub(r"[^a-z0-9]+", "_", str(col).lower()).strip("_") for col in df.columns
    ]
    return df


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename known aliases to canonical column names.

    The first alias present wins; canonical names already present are kept.
    """
    renames = {}
    for canonical, aliases in COLUMN_ALIASES.items():
        if canonical in df.columns:
            continue
        for alias in aliases:
            if alias in df.columns and alias not in renames:
                renames[alias] = canonical
                break
    return df.rename(columns=renames)


def parse_identifier(value) -> tuple[str, str, str | None]:
    """
    Split a composite '<peak_id>-<hit_id>-<perm_id>' identifier.

    perm_id is optional. Extra hyphens are kept in perm_id.

    Raises:
        MalformedRowError: if peak_id or hit_id is missing
    """
    if value is None or (isinstance(value, float) and np.isnan(value)):
        raise MalformedRowError("Empty identifier")

    parts = str(value).strip().split("-", 2)
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise MalformedRowError(
            f"Identifier '{value}' must look like <peak_id>-<hit_id>[-<perm_id>]"
        )

    perm_id = parts[2] if len(parts) == 3 and parts[2] else None
    return parts[0], parts[1], perm_id


def _id_to_str(value) -> str | None:
    """Stringify an id cell; whole floats (from blank-padded columns) lose their .0."""
    if pd.isna(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def split_identifiers(df: pd.DataFrame, column: str = "identifier") -> pd.DataFrame:
    """
    Add peak_id, hit_id and perm_id columns parsed from a composite identifier.

    Tables that already carry peak_id and hit_id only have those ids
    stringified; blank ids stay missing and are rejected downstream.
    """
    if "peak_id" in df.columns and "hit_id" in df.columns:
        df = df.copy()
        df["peak_id"] = [_id_to_str(v) for v in df["peak_id"]]
        df["hit_id"] = [_id_to_str(v) for v in df["hit_id"]]
        return df

    if column not in df.columns:
        raise MalformedRowError(
            f"Table must have an '{column}' column or peak_id/hit_id columns. "
            f"Found columns: {list(df.columns)}"
        )

    df = df.copy()
    parsed = [parse_identifier(v) for v in df[column]]
    df["peak_id"] = [p[0] for p in parsed]
    df["hit_id"] = [p[1] for p in parsed]
    df["perm_id"] = [p[2] for p in parsed]
    return df


def read_table(path: Path, sheet_name: str | int = 0) -> pd.DataFrame:
    """
    Read a CSV, TSV or Excel table and clean its column names.

    Args:
        path: Path to the table
        sheet_name: Sheet to read for Excel files (default: first sheet)

    Returns:
        DataFrame with cleaned column names
    """
    path = Path(path)
    ext = path.suffix.lower()

    if ext in TEXT_EXTENSIONS:
        df = pd.read_csv(path, sep=TEXT_EXTENSIONS[ext])
    elif ext in EXCEL_EXTENSIONS:
        df = pd.read_excel(path, sheet_name=sheet_name)
    else:
        raise ValueError(
            f"Unsupported table extension '{ext}'. "
            f"Use one of: {', '.join(sorted(TEXT_EXTENSIONS) + sorted(EXCEL_EXTENSIONS))}"
        )

    df = df.dropna(how="all")
    return clean_column_names(df)


def read_sialylated_peaks(path: Path, sheet_name: str | int = 0) -> pd.DataFrame:
    """
    Read the annotated sialylated peak list.

    Expected columns (after alias mapping): identifier (or peak_id + hit_id),
    measured_mass, sialic_acid_count, acetyl_count, confidence_score.

    Returns:
        DataFrame of sialylated peak rows
    """
    df = canonicalize_columns(read_table(path, sheet_name=sheet_name))
    df = split_identifiers(df)

    required = ["measured_mass", "confidence_score"]
    for req in required:
        if req not in df.columns:
            raise ValueError(
                f"Sialylated peak list must have '{req}' column. "
                f"Found columns: {list(df.columns)}"
            )

    return df.reset_index(drop=True)


def read_desialylated_reference(path: Path, sheet_name: str | int = 0) -> pd.DataFrame:
    """
    Read the experimental desialylated reference peak list.

    Expected columns (after alias mapping): identifier (or peak_id + hit_id),
    measured_mass, relative_intensity.

    Returns:
        DataFrame of reference rows
    """
    df = canonicalize_columns(read_table(path, sheet_name=sheet_name))
    df = split_identifiers(df)

    if "measured_mass" not in df.columns:
        raise ValueError(
            f"Desialylated reference must have 'measured_mass' column. "
            f"Found columns: {list(df.columns)}"
        )

    if "relative_intensity" not in df.columns:
        console.print(
            "[yellow]Warning:[/yellow] No relative intensity column in reference, "
            "plots will show uniform reference peaks"
        )
        df["relative_intensity"] = 100.0

    return df.reset_index(drop=True)


def reference_masses(df: pd.DataFrame, mass_column: str = "measured_mass") -> np.ndarray:
    """Sorted distinct finite masses of the reference spectrum."""
    masses = pd.to_numeric(df[mass_column], errors="coerce").to_numpy(dtype=float)
    return np.unique(masses[np.isfinite(masses)])


def write_tsv(df: pd.DataFrame, path: Path) -> None:
    """Write DataFrame to TSV file."""
    df.to_csv(path, sep="\t", index=False)
    console.print(f"[green]Wrote[/green] {len(df):,} rows to {path}")
