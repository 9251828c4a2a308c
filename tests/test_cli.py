from click.testing import CliRunner
from rich.console import Console

from glycodesial import cli
from glycodesial.cli import main
from glycodesial.pipeline import run_all_variants

SIALYLATED = (
    "ID,Mass,NeuAc,Acetyl,Score\n"
    "1-1-1,1000.0,1,0,80\n"
    "1-2-1,1005.0,0,0,20\n"
    "2-1-1,2542.0,0,1,5\n"
)


def _write_inputs(tmp_path, reference_masses):
    sialylated = tmp_path / "sialylated.csv"
    sialylated.write_text(SIALYLATED)
    reference = tmp_path / "desialylated.csv"
    rows = "".join(f"{i}-1,{m},{100 - i}\n" for i, m in enumerate(reference_masses, start=1))
    reference.write_text("ID,Mass,Rel Intens\n" + rows)
    return sialylated, reference


def test_cli_writes_all_variants(tmp_path):
    sialylated, reference = _write_inputs(tmp_path, [709.0, 1005.0, 2500.0])
    out_dir = tmp_path / "out"

    result = CliRunner().invoke(
        main, ["-s", str(sialylated), "-d", str(reference), "-o", str(out_dir)]
    )

    assert result.exit_code == 0, result.output
    for name in ("unfiltered", "peak_filtered", "peak_and_confidence"):
        assert (out_dir / f"{name}_spectrum.tsv").is_file()
        assert (out_dir / f"{name}_candidates.tsv").is_file()
        assert (out_dir / f"{name}_mirror.png").is_file()


def test_cli_single_variant_without_plots(tmp_path):
    sialylated, reference = _write_inputs(tmp_path, [1005.0])
    out_dir = tmp_path / "out"

    result = CliRunner().invoke(
        main,
        [
            "-s", str(sialylated),
            "-d", str(reference),
            "-o", str(out_dir),
            "--variant", "peak_filtered",
            "--no-plots",
        ],
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "peak_filtered_candidates.tsv",
        "peak_filtered_spectrum.tsv",
    ]


def test_cli_exits_nonzero_when_every_variant_fails(tmp_path):
    sialylated, reference = _write_inputs(tmp_path, [50.0])

    result = CliRunner().invoke(
        main,
        [
            "-s", str(sialylated),
            "-d", str(reference),
            "-o", str(tmp_path / "out"),
            "--variant", "peak_filtered",
            "--variant", "peak_and_confidence",
            "--no-plots",
        ],
    )

    assert result.exit_code == 1


def test_variant_report_shows_keep_statistics(scenario_rows, monkeypatch):
    recorder = Console(record=True, width=200)
    monkeypatch.setattr(cli, "console", recorder)

    results = run_all_variants(scenario_rows, [1005.0])
    cli.print_variant_report(results)

    text = recorder.export_text()
    assert "Keep rate" in text
    assert "1/2" in text
    assert "50.0%" in text
