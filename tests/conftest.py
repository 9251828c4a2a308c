import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402
import pytest  # noqa: E402


@pytest.fixture
def scenario_rows():
    """Two hits on one peak: one carrying a sialic acid, one bare."""
    return pd.DataFrame(
        [
            {
                "peak_id": "P1",
                "hit_id": "H1",
                "measured_mass": 1000.0,
                "sialic_acid_count": 1,
                "acetyl_count": 0,
                "confidence_score": 80.0,
            },
            {
                "peak_id": "P1",
                "hit_id": "H2",
                "measured_mass": 1005.0,
                "sialic_acid_count": 0,
                "acetyl_count": 0,
                "confidence_score": 20.0,
            },
        ]
    )


@pytest.fixture
def multi_peak_rows():
    """Three peaks with mixed modifications and unnormalized scores."""
    return pd.DataFrame(
        {
            "peak_id": ["1", "1", "1", "2", "2", "3"],
            "hit_id": ["1", "2", "3", "1", "2", "1"],
            "measured_mass": [2500.0, 2542.0, 2791.3, 3100.0, 3391.2, 4000.0],
            "sialic_acid_count": [0, 0, 1, 1, 2, 0],
            "acetyl_count": [0, 1, 0, 0, 1, 0],
            "confidence_score": [3.0, 1.0, 0.005, 40.0, 10.0, 7.5],
        }
    )
