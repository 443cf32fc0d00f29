from __future__ import annotations

from pathlib import Path

import polars as pl
from typer.testing import CliRunner

from examples import ethnicity
from examples.boltzmann_wealth import model as boltzmann
from examples.boltzmann_wealth import sweep

runner = CliRunner()


def test_boltzmann_simulate() -> None:
    result = boltzmann.simulate(agents=20, steps=5, seed=1)
    model_df = result.datacollector.data["model"]
    assert result.steps == 5
    assert model_df["step"].to_list() == [0, 1, 2, 3, 4, 5]
    assert model_df["total_wealth"].to_list() == [20] * 6
    assert model_df["gini"].min() >= 0.0

    agent_df = result.datacollector.data["agent"]
    assert agent_df.height == 20 * 6
    assert agent_df.columns == ["step", "seed", "unique_id", "wealth", "x", "y"]


def test_boltzmann_cli_runs_minimal(tmp_path: Path) -> None:
    result = runner.invoke(
        boltzmann.app,
        [
            "--agents",
            "10",
            "--steps",
            "2",
            "--seed",
            "1",
            "--results-dir",
            str(tmp_path),
        ],
    )

    assert result.exit_code == 0
    assert "Metrics in the final 5 steps" in result.stdout
    assert "Saved CSV results under" in result.stdout
    assert (tmp_path / "model_step2.csv").exists()
    assert (tmp_path / "agent_step0.csv").exists()


def test_boltzmann_cli_no_save() -> None:
    result = runner.invoke(boltzmann.app, ["--agents", "5", "--steps", "1", "--no-save-results"])
    assert result.exit_code == 0
    assert "Saved CSV results under" not in result.stdout


def test_sweep() -> None:
    results = sweep.sweep([5, 10], iterations=2, max_steps=3)
    assert results.columns == ["run_id", "iteration", "n", "step", "gini"]
    assert results["run_id"].to_list() == [0, 1, 2, 3]
    assert results["n"].to_list() == [5, 5, 10, 10]
    assert results["step"].to_list() == [3, 3, 3, 3]


def test_sweep_cli(tmp_path: Path) -> None:
    output = tmp_path / "sweep.csv"
    result = runner.invoke(
        sweep.app,
        [
            "--start",
            "5",
            "--stop",
            "15",
            "--stride",
            "5",
            "--iterations",
            "1",
            "--max-steps",
            "2",
            "--output",
            str(output),
        ],
    )
    assert result.exit_code == 0
    assert pl.read_csv(output)["n"].to_list() == [5, 10]


def test_ethnicity() -> None:
    model = ethnicity.EthnicityModel(30, seed=2)
    assert {a.group for a in model.population} <= set(ethnicity.GROUPS)
    model.run_model(5)

    model_df = model.datacollector.data["model"]
    assert model_df.columns == ["step", "seed", "Green", "Blue", "Mixed"]
    totals = model_df.select(pl.sum_horizontal("Green", "Blue", "Mixed")).to_series()
    assert totals.to_list() == [30] * 5

    # Green and Blue agents only give within their own group
    before = {g: ethnicity.group_wealth(model, g) for g in ("Green", "Blue")}
    members = model.agents.group_by("group")
    for group in ("Green", "Blue"):
        if group in members:
            members[group].shuffle_do("give_within", members[group])
            assert ethnicity.group_wealth(model, group) == before[group]


def test_ethnicity_cli() -> None:
    result = runner.invoke(ethnicity.app, ["--agents", "10", "--steps", "2", "--seed", "1"])
    assert result.exit_code == 0
    assert "Wealth by group over time" in result.stdout
