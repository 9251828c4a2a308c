import matplotlib.pyplot as plt
import pandas as pd

from glycodesial.pipeline import run_all_variants
from glycodesial.plotting import plot_mirror, save_variant_plots


def _reference():
    return pd.DataFrame(
        {"measured_mass": [708.0, 1005.0], "relative_intensity": [40.0, 100.0]}
    )


def test_plot_mirror_negates_reference():
    spectrum = pd.DataFrame({"mass": [708.7, 1005.0], "intensity": [100.0, 25.0]})

    fig = plot_mirror(_reference(), spectrum, title="unfiltered")
    ax = fig.axes[0]

    computed, reference = ax.collections[:2]
    assert max(seg[1][1] for seg in computed.get_segments()) == 100.0
    assert min(seg[1][1] for seg in reference.get_segments()) == -100.0
    assert ax.get_title() == "unfiltered"
    plt.close(fig)


def test_save_variant_plots_skips_failed(scenario_rows, tmp_path):
    results = run_all_variants(scenario_rows, [700.0])

    written = save_variant_plots(results, _reference(), tmp_path / "plots")

    assert [p.name for p in written] == ["unfiltered_mirror.png"]
    assert written[0].stat().st_size > 0
