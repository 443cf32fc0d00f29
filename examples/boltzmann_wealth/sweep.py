"""Parameter sweep of the Boltzmann wealth model over population sizes."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import polars as pl
import typer

from mesa_lite import batch_run
from examples.boltzmann_wealth.model import MoneyModel


def sweep(
    populations: list[int],
    iterations: int = 5,
    max_steps: int = 100,
    width: int = 10,
    height: int = 10,
    processes: int = 1,
) -> pl.DataFrame:
    """Run every population size ``iterations`` times and return the final Gini of each run."""
    results = batch_run(
        MoneyModel,
        parameters={"n": populations, "width": width, "height": height},
        iterations=iterations,
        max_steps=max_steps,
        number_processes=processes,
        data_collection_period=-1,
    )
    return (
        results.select("run_id", "iteration", "n", "step", "gini")
        .unique(subset=["run_id"], keep="first", maintain_order=True)
        .sort("run_id")
    )


app = typer.Typer(add_completion=False)


@app.command()
def run(
    start: Annotated[int, typer.Option(help="Smallest population size.")] = 10,
    stop: Annotated[int, typer.Option(help="Largest population size (exclusive).")] = 200,
    stride: Annotated[int, typer.Option(help="Population size increment.")] = 10,
    iterations: Annotated[int, typer.Option(help="Runs per population size.")] = 5,
    max_steps: Annotated[int, typer.Option(help="Steps per run.")] = 100,
    processes: Annotated[int, typer.Option(help="Worker processes.")] = 1,
    output: Annotated[
        Path | None, typer.Option(help="CSV file to write the results into.")
    ] = None,
) -> None:
    populations = list(range(start, stop, stride))
    typer.echo(
        f"Sweeping {len(populations)} population sizes x {iterations} iterations, {max_steps} steps each"
    )
    results = sweep(
        populations,
        iterations=iterations,
        max_steps=max_steps,
        processes=processes,
    )
    summary = results.group_by("n", maintain_order=True).agg(
        pl.col("gini").mean().alias("mean_gini"),
        pl.col("gini").std().alias("std_gini"),
    )
    typer.echo(f"{summary}")
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        results.write_csv(output)
        typer.echo(f"Saved CSV results under {output}")


if __name__ == "__main__":
    app()
