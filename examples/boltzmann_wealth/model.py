"""Boltzmann wealth model on a grid with Typer CLI."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter
from typing import Annotated

import os
import typer

from mesa_lite import DataCollector, Model
from examples.utils import SimulationResult


class MoneyModel(Model):
    """Agents wander on a torus and hand one unit of wealth to a random cellmate."""

    def __init__(
        self,
        n: int,
        width: int = 10,
        height: int = 10,
        *,
        seed: int | None = None,
        capacity: int | None = None,
        results_dir: Path | None = None,
    ) -> None:
        super().__init__(n, width, height, capacity=capacity, seed=seed)
        # Persisting to disk adds IO to every run. Collect in memory unless a
        # results_dir is supplied, in which case CSV files are written there.
        if results_dir is None:
            storage = "memory"
            storage_uri = None
        else:
            storage = "csv"
            storage_uri = str(results_dir)
        self.datacollector = DataCollector(
            model=self,
            model_reporters={"gini": "gini", "total_wealth": "total_wealth"},
            agent_reporters={"wealth": "wealth", "x": "x", "y": "y"},
            storage=storage,
            storage_uri=storage_uri,
        )

    def step(self) -> None:
        self.agents.shuffle_do("move")
        self.agents.shuffle_do("give_money")


def simulate(
    agents: int,
    steps: int,
    seed: int | None = None,
    width: int = 10,
    height: int = 10,
    results_dir: Path | None = None,
) -> SimulationResult:
    model = MoneyModel(agents, width, height, seed=seed, results_dir=results_dir)
    model.run_model(steps)
    # The hook collects before each step; record the state after the last one too.
    model.datacollector.collect()
    return SimulationResult(datacollector=model.datacollector, steps=model.steps)


app = typer.Typer(add_completion=False)


@app.command()
def run(
    agents: Annotated[int, typer.Option(help="Number of agents to simulate.")] = 100,
    steps: Annotated[int, typer.Option(help="Number of model steps to run.")] = 100,
    width: Annotated[int, typer.Option(help="Grid width.")] = 10,
    height: Annotated[int, typer.Option(help="Grid height.")] = 10,
    seed: Annotated[int | None, typer.Option(help="Optional RNG seed.")] = None,
    save_results: Annotated[bool, typer.Option(help="Persist metrics as CSV.")] = True,
    results_dir: Annotated[
        Path | None,
        typer.Option(
            help="Directory to write CSV results into. If omitted a timestamped subdir under `results/` is used."
        ),
    ] = None,
) -> None:
    runtime_typechecking = os.environ.get("MESA_LITE_RUNTIME_TYPECHECKING", "")
    if runtime_typechecking and runtime_typechecking.lower() not in {"0", "false"}:
        typer.secho(
            "Warning: MESA_LITE_RUNTIME_TYPECHECKING is enabled; this run will be slower.",
            fg=typer.colors.YELLOW,
        )
    typer.echo(
        f"Running Boltzmann wealth model with {agents} agents on a {width}x{height} grid for {steps} steps"
    )
    if save_results and results_dir is None:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        results_dir = (
            Path(__file__).resolve().parent / "results" / timestamp
        ).resolve()
    start_time = perf_counter()
    result = simulate(
        agents=agents,
        steps=steps,
        seed=seed,
        width=width,
        height=height,
        results_dir=results_dir if save_results else None,
    )

    typer.echo(f"Simulation complete in {perf_counter() - start_time:.2f} seconds")

    model_metrics = result.datacollector.data["model"].select("step", "gini")

    typer.echo(f"Metrics in the final 5 steps: {model_metrics.tail(5)}")

    if save_results:
        result.datacollector.flush().result()
        typer.echo(f"Saved CSV results under {results_dir}")


if __name__ == "__main__":
    app()
