"""Configuration constants and per-run pipeline settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Average residue masses (Da) removed per modification.
SIALIC_ACID_MASS_DELTA = 291.256
ACETYL_MASS_DELTA = 42.0106

DEFAULT_MASS_TOLERANCE = 5.0  # Da
DEFAULT_CONFIDENCE_CUTOFF = 0.01


class ModificationDeltas(BaseModel):
    """Mass subtracted for each counted modification."""

    model_config = ConfigDict(frozen=True)

    sialic_acid: float = SIALIC_ACID_MASS_DELTA
    acetyl: float = ACETYL_MASS_DELTA


class PipelineConfig(BaseModel):
    """Toggles and parameters for a single pipeline run."""

    model_config = ConfigDict(frozen=True)

    peak_filter_enabled: bool = False
    confidence_filter_enabled: bool = False
    confidence_cutoff: float = DEFAULT_CONFIDENCE_CUTOFF
    mass_tolerance: float = Field(default=DEFAULT_MASS_TOLERANCE, gt=0)
    deltas: ModificationDeltas = ModificationDeltas()


# --- Named analysis variants ---

VARIANTS: dict[str, dict[str, bool]] = {
    "unfiltered": {
        "peak_filter_enabled": False,
        "confidence_filter_enabled": False,
    },
    "peak_filtered": {
        "peak_filter_enabled": True,
        "confidence_filter_enabled": False,
    },
    "peak_and_confidence": {
        "peak_filter_enabled": True,
        "confidence_filter_enabled": True,
    },
}


def variant_config(name: str, **overrides) -> PipelineConfig:
    """
    Build the PipelineConfig for a named variant.

    Args:
        name: One of the keys of VARIANTS
        **overrides: Extra PipelineConfig fields (mass_tolerance, deltas, ...)

    Returns:
        PipelineConfig with the variant's toggles applied
    """
    if name not in VARIANTS:
        raise ValueError(
            f"Unknown variant '{name}'. Options: {', '.join(VARIANTS)}"
        )
    return PipelineConfig(**{**overrides, **VARIANTS[name]})
