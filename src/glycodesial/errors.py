"""Error types raised by the desialylation pipeline."""

from __future__ import annotations


class DesialylationError(ValueError):
    """Base class for all pipeline errors."""


class EmptyInputError(DesialylationError):
    """A stage received zero rows where at least one is required."""


class MalformedRowError(DesialylationError):
    """Input rows failed validation at ingestion."""

    def __init__(self, message: str, rows: list | None = None):
        super().__init__(message)
        self.rows = list(rows) if rows is not None else []


class DegenerateGroupError(DesialylationError):
    """
    One or more peak groups have a total confidence score of exactly 0.

    Renormalizing such a group would divide by zero, so the run is aborted
    instead of emitting NaN or a fake 0 score.
    """

    def __init__(self, peak_ids: list[str]):
        self.peak_ids = list(peak_ids)
        super().__init__(
            f"Cannot renormalize {len(self.peak_ids)} peak group(s) with zero "
            f"total confidence score: {', '.join(map(str, self.peak_ids))}"
        )


class DegenerateSpectrumError(DesialylationError):
    """Every bin of a spectrum has zero intensity, so it cannot be rescaled."""


class InvalidParameterError(DesialylationError):
    """A pipeline parameter is outside its valid range."""
