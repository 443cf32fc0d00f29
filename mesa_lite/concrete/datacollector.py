"""
Concrete class for data collection in mesa-lite.

This module defines a `DataCollector` implementation that gathers and optionally persists
model-level and agent-level data during simulations. Rows are buffered as Polars
LazyFrames and materialized on demand.

Classes:
    DataCollector:
        A concrete class collecting one model row and one row per agent each
        time it runs, with in-memory, CSV or Parquet storage.

Supported Storage Backends:
    - memory         : In-memory collection (default)
    - csv            : Local CSV file output
    - parquet        : Local Parquet file output

Triggers:
    - A `trigger` parameter can be provided to control conditional collection.
      This is a callable taking the model as input and returning a boolean.
      If true, data is collected during `conditional_collect()`.

Timing:
    With ``collect_on_step=True`` (the default) the collector runs as a step
    hook: once per step, before any behavior of that step, so the row labelled
    ``step == k`` describes the model after k completed steps.

Usage:
    from mesa_lite import DataCollector, Model

    class ExampleModel(Model):
        def __init__(self):
            super().__init__(100, 10, 10)
            self.datacollector = DataCollector(
                model=self,
                model_reporters={"gini": "gini"},
                agent_reporters={"wealth": "wealth"},
            )

    model = ExampleModel()
    model.run_model(steps=10)
    model.datacollector.data["agent"]
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import polars as pl

from mesa_lite.abstract.datacollector import AbstractDataCollector
from mesa_lite.types_ import Reporter

if TYPE_CHECKING:
    import mesa_lite


class DataCollector(AbstractDataCollector):
    def __init__(
        self,
        model: mesa_lite.concrete.model.Model,
        model_reporters: dict[str, Reporter] | None = None,
        agent_reporters: dict[str, Reporter] | None = None,
        trigger: Callable[[Any], bool] | None = None,
        reset_memory: bool = True,
        storage: str = "memory",
        storage_uri: str | Path | None = None,
        collect_on_step: bool = True,
        max_workers: int = 1,
    ):
        """
        Initialize the DataCollector with configuration options.

        Parameters
        ----------
        model : mesa_lite.concrete.model.Model
            The model object from which data is collected.
        model_reporters : dict[str, str | Callable] | None
            Registered model attribute names or functions f(model).
        agent_reporters : dict[str, str | Callable] | None
            Registered agent attribute names or functions f(agent).
        trigger : Callable[[Any], bool] | None
            A function(model) -> bool that determines whether to collect data.
        reset_memory : bool
            Whether to reset in-memory data after flushing. Default is True.
        storage : Literal["memory", "csv", "parquet"]
            Storage backend.
        storage_uri: str | Path | None
            Local directory corresponding to the selected storage backend.
        collect_on_step : bool
            Whether to collect automatically at the start of every step. Default is True.
        max_workers : int
            Threads used to flush data. Default is 1.

        Raises
        ------
        UnknownAttributeError
            If a reporter name is not registered on the model.
        ValueError
            If a file storage is selected without a storage_uri.
        """
        self._writers = {
            "csv": self._write_csv_local,
            "parquet": self._write_parquet_local,
        }
        self._storage_uri = storage_uri
        super().__init__(
            model=model,
            model_reporters=model_reporters,
            agent_reporters=agent_reporters,
            trigger=trigger,
            reset_memory=reset_memory,
            storage=storage,
            collect_on_step=collect_on_step,
            max_workers=max_workers,
        )

    def _collect(self):
        """
        Collect data from the model and agents for the current step.

        This method checks for the presence of model and agent reporters
        and calls the appropriate collection routines for each.
        """
        if self._model_reporters:
            self._collect_model_reporters()

        if self._agent_reporters:
            self._collect_agent_reporters()

    def _collect_model_reporters(self):
        """
        Collect model-level data using the model_reporters.

        Creates a LazyFrame containing the step, seed, and values
        returned by each model reporter. Appends the LazyFrame to internal storage.
        """
        model_data_dict = {}
        model_data_dict["step"] = self._model.steps
        model_data_dict["seed"] = str(self.seed)
        for column_name, reporter in self._model_reporters.items():
            model_data_dict[column_name] = reporter(self._model)
        model_lazy_frame = pl.LazyFrame([model_data_dict])
        with self._lock:
            self._frames.append(("model", self._model.steps, model_lazy_frame))

    def _collect_agent_reporters(self):
        """
        Collect agent-level data using the agent_reporters.

        Constructs a LazyFrame with one row per agent, in population order,
        and one column per reporter, plus `step`, `seed` and `unique_id`.
        Appends it to internal storage.
        """
        agents = self._model.population
        agent_data_dict = {"unique_id": [agent.unique_id for agent in agents]}
        for col_name, reporter in self._agent_reporters.items():
            agent_data_dict[col_name] = [reporter(agent) for agent in agents]
        agent_lazy_frame = pl.LazyFrame(agent_data_dict)
        agent_lazy_frame = agent_lazy_frame.with_columns(
            [
                pl.lit(self._model.steps, dtype=pl.Int64).alias("step"),
                pl.lit(str(self.seed)).alias("seed"),
            ]
        ).select(["step", "seed", *agent_data_dict])
        with self._lock:
            self._frames.append(("agent", self._model.steps, agent_lazy_frame))

    @property
    def data(self) -> dict[str, pl.DataFrame]:
        """
        Retrieve the collected data as eagerly evaluated Polars DataFrames.

        Returns
        -------
        dict[str, pl.DataFrame]
            A dictionary with keys "model" and "agent" mapping to concatenated DataFrames of collected data.
        """
        with self._lock:
            frames = list(self._frames)
        model_frames = [lf.collect() for kind, step, lf in frames if kind == "model"]
        agent_frames = [lf.collect() for kind, step, lf in frames if kind == "agent"]
        return {
            "model": pl.concat(model_frames, how="diagonal_relaxed")
            if model_frames
            else pl.DataFrame(),
            "agent": pl.concat(agent_frames, how="diagonal_relaxed")
            if agent_frames
            else pl.DataFrame(),
        }

    def _flush(self, frames_to_flush: list):
        """
        Flush the collected data to the configured external storage backend.

        Uses the appropriate writer function based on the specified storage option.
        Memory storage has nothing to persist.
        """
        writer = self._writers.get(self._storage)
        if writer is not None:
            writer(uri=self._storage_uri, frames_to_flush=frames_to_flush)

    def _write_csv_local(self, uri: str | Path, frames_to_flush: list):
        """
        Write collected data to local CSV files.

        Parameters
        ----------
        uri : str | Path
            Local directory path to write files into.
        frames_to_flush : list
            the collected data in the current thread.
        """
        for kind, step, df in frames_to_flush:
            df.collect().write_csv(Path(uri) / f"{kind}_step{step}.csv")

    def _write_parquet_local(self, uri: str | Path, frames_to_flush: list):
        """
        Write collected data to local Parquet files.

        Parameters
        ----------
        uri: str | Path
            Local directory path to write files into.
        frames_to_flush : list
            the collected data in the current thread.
        """
        for kind, step, df in frames_to_flush:
            df.collect().write_parquet(Path(uri) / f"{kind}_step{step}.parquet")

    def _validate_inputs(self):
        """
        Validate configuration for non-memory storage backends.

        - Ensures the storage backend is known.
        - Ensures a `storage_uri` is provided if needed, and creates the directory.
        """
        if self._storage != "memory" and self._storage not in self._writers:
            raise ValueError(
                f"Unknown storage '{self._storage}'. Expected one of: memory, csv, parquet"
            )
        if self._storage != "memory":
            if self._storage_uri is None:
                raise ValueError(
                    "Please define a storage_uri to if to be stored not in memory"
                )
            Path(self._storage_uri).mkdir(parents=True, exist_ok=True)
