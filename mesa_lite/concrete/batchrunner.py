"""
Parameter sweeps over independent model instances.

``batch_run`` builds the cross product of the given parameter values, runs
every configuration ``iterations`` times, and gathers what each model's
DataCollector recorded into one Polars DataFrame.

Every run constructs its own model, so each run owns its own RandomStream and
Grid and nothing is shared between runs. With ``number_processes > 1`` runs
are distributed over a ``concurrent.futures.ProcessPoolExecutor`` whose workers
are started with ``spawn``; the model class must then be importable (defined at
module level) so it can be pickled.

Usage:
    from mesa_lite import batch_run

    results = batch_run(
        MoneyModel,
        parameters={"n": range(10, 500, 10), "width": 10, "height": 10},
        iterations=5,
        max_steps=100,
    )
"""

from __future__ import annotations

import multiprocessing
from collections.abc import Iterable, Mapping
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from itertools import product
from typing import Any

import polars as pl

from mesa_lite.exceptions import InvalidParameterError


def batch_run(
    model_cls: type,
    parameters: Mapping[str, Any],
    iterations: int = 1,
    max_steps: int = 1000,
    number_processes: int = 1,
    data_collection_period: int = -1,
) -> pl.DataFrame:
    """Run every combination of parameters and collect the results.

    Parameters
    ----------
    model_cls : type
        The model class. It is called with one configuration as keyword
        arguments and must set a ``datacollector`` attribute.
    parameters : Mapping[str, Any]
        Parameter name to either a fixed value or an iterable of values. Strings
        are fixed values.
    iterations : int, optional
        Number of runs per configuration, by default 1.
    max_steps : int, optional
        Maximum number of steps per run, by default 1000. A run stops earlier if
        the model sets ``running`` to False.
    number_processes : int, optional
        Number of worker processes, by default 1 (sequential, in-process).
    data_collection_period : int, optional
        Keep every n-th collected step; -1 keeps only the final state, by default -1.

    Returns
    -------
    pl.DataFrame
        One row per (run, step), or per (run, step, agent) when agent reporters
        are defined. Columns: ``run_id``, ``iteration``, the parameters,
        ``step`` and the reporter columns.

    Raises
    ------
    InvalidParameterError
        If an argument is out of range, a parameter has no values, or a model
        reporter and an agent reporter share a column name.
    """
    if iterations < 1:
        raise InvalidParameterError(f"iterations must be at least 1, got {iterations}")
    if max_steps < 0:
        raise InvalidParameterError(f"max_steps must be non-negative, got {max_steps}")
    if number_processes < 1:
        raise InvalidParameterError(
            f"number_processes must be at least 1, got {number_processes}"
        )
    if data_collection_period == 0 or data_collection_period < -1:
        raise InvalidParameterError(
            f"data_collection_period must be -1 or positive, got {data_collection_period}"
        )

    runs = [
        (run_id, iteration, kwargs)
        for run_id, (kwargs, iteration) in enumerate(
            product(_make_configurations(parameters), range(iterations))
        )
    ]
    process_func = partial(
        _run_model,
        model_cls,
        max_steps=max_steps,
        data_collection_period=data_collection_period,
    )

    if number_processes == 1:
        frames = [process_func(run) for run in runs]
    else:
        # Forked workers deadlock once Polars has started its thread pool here
        with ProcessPoolExecutor(
            max_workers=number_processes,
            mp_context=multiprocessing.get_context("spawn"),
        ) as executor:
            frames = list(executor.map(process_func, runs))

    frames = [frame for frame in frames if not frame.is_empty()]
    if not frames:
        return pl.DataFrame()
    return pl.concat(frames, how="diagonal_relaxed")


def _make_configurations(parameters: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Expand a parameter mapping into the list of all its combinations."""
    names = list(parameters)
    options = []
    for name in names:
        value = parameters[name]
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            options.append([value])
            continue
        values = list(value)
        if not values:
            raise InvalidParameterError(f"Parameter '{name}' has no values")
        options.append(values)
    return [dict(zip(names, combination)) for combination in product(*options)]


def _run_model(
    model_cls: type,
    run: tuple[int, int, dict[str, Any]],
    max_steps: int,
    data_collection_period: int,
) -> pl.DataFrame:
    """Run one model to completion and return its collected rows."""
    run_id, iteration, kwargs = run
    model = model_cls(**kwargs)
    collector = getattr(model, "datacollector", None)
    if collector is None:
        raise ValueError(
            f"{model_cls.__name__} has no datacollector; batch_run needs one to report results"
        )
    clashing = sorted(set(collector.columns["model"]) & set(collector.columns["agent"]))
    if clashing:
        raise InvalidParameterError(
            f"Model and agent reporters share the column names {clashing}; rename one of them"
        )
    while model.running and model.steps < max_steps:
        model.step()
    # Record the final state, which no step hook has seen.
    collector.collect()
    model.finish()

    data = collector.data
    model_df, agent_df = data["model"], data["agent"]
    if not agent_df.is_empty() and not model_df.is_empty():
        frame = agent_df.join(model_df.drop("seed"), on="step", how="left")
    elif not agent_df.is_empty():
        frame = agent_df
    else:
        frame = model_df
    if frame.is_empty():
        return frame

    last_step = model.steps
    if data_collection_period == -1:
        frame = frame.filter(pl.col("step") == last_step)
    else:
        frame = frame.filter(
            (pl.col("step") % data_collection_period == 0) | (pl.col("step") == last_step)
        )

    run_columns = [
        pl.lit(run_id, dtype=pl.Int64).alias("run_id"),
        pl.lit(iteration, dtype=pl.Int64).alias("iteration"),
        *[pl.lit(value).alias(name) for name, value in kwargs.items()],
    ]
    leading = ["run_id", "iteration", *kwargs, "step"]
    frame = frame.drop([c for c in kwargs if c in frame.columns]).with_columns(run_columns)
    return frame.select([*leading, *[c for c in frame.columns if c not in leading]])
