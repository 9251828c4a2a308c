import numpy as np
import pytest

from glycodesial.backcalc import back_calculate_masses
from glycodesial.errors import DegenerateGroupError, EmptyInputError
from glycodesial.filtering import filter_by_confidence
from glycodesial.reconcile import reconcile_with_reference


def test_cutoff_removes_low_score_hit(scenario_rows):
    candidates = back_calculate_masses(scenario_rows)

    out = filter_by_confidence(candidates, cutoff=25)

    assert out["hit_id"].tolist() == ["H1"]
    assert out["confidence_score"].tolist() == pytest.approx([100.0])


def test_cutoff_is_strict(scenario_rows):
    candidates = back_calculate_masses(scenario_rows)

    out = filter_by_confidence(candidates, cutoff=20.0)

    assert out["hit_id"].tolist() == ["H1"]


def test_default_cutoff_drops_tiny_scores(multi_peak_rows):
    candidates = back_calculate_masses(multi_peak_rows)

    out = filter_by_confidence(candidates)

    assert ("1", "3") not in set(zip(out["peak_id"], out["hit_id"]))
    assert len(out) == 5
    sums = out.groupby("peak_id")["confidence_score"].sum()
    assert np.allclose(sums.to_numpy(), 100.0, atol=1e-9)


def test_everything_filtered_raises(scenario_rows):
    candidates = back_calculate_masses(scenario_rows)

    with pytest.raises(EmptyInputError):
        filter_by_confidence(candidates, cutoff=1000)


def test_zero_score_group_with_negative_cutoff(scenario_rows):
    df = scenario_rows.copy()
    df["confidence_score"] = 0.0
    candidates = back_calculate_masses(df)

    with pytest.raises(DegenerateGroupError):
        filter_by_confidence(candidates, cutoff=-1)


def test_second_renormalization_supersedes_first(multi_peak_rows):
    candidates = back_calculate_masses(multi_peak_rows)
    reconciled = reconcile_with_reference(candidates, [2500.0, 2809.0, 4000.0], tolerance=5.0)

    # group 1 after reconciliation: 3 / 1 / 0.005 over 4.005
    out = filter_by_confidence(reconciled, cutoff=0.5)

    group = out[out["peak_id"] == "1"]
    assert group["hit_id"].tolist() == ["1", "2"]
    assert group["confidence_score"].tolist() == pytest.approx([75.0, 25.0])
    assert set(zip(out["peak_id"], out["hit_id"])) <= set(
        zip(reconciled["peak_id"], reconciled["hit_id"])
    )
