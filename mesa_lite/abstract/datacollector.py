"""
Abstract base classes for data collection components in mesa-lite.

This module defines the core abstraction for data collection. It provides a
standardized interface for collecting model- and agent-level data during
simulation runs, supporting conditional triggers and optional persistence to
local files.

Classes:
    AbstractDataCollector:
        An abstract base class defining the structure and core logic for
        all data collector implementations. It resolves reporters against the
        model's attribute registries, hooks itself into the model's step, and
        flushes buffered data on a background thread.

Usage:
    These classes should not be instantiated directly. Instead, they should be
    subclassed to create concrete DataCollector:

    from mesa_lite.abstract.datacollector import AbstractDataCollector

    class DataCollector(AbstractDataCollector):
        def _collect(self):
            # Implementation using Polars frames to collect model and agent data
            ...

        def data(self):
            # Returns the data currently in memory
            ...

        def _flush(self, frames_to_flush):
            # Persists collected data
            ...
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

import polars as pl

from mesa_lite.types_ import Reporter, StorageBackend

if TYPE_CHECKING:
    import mesa_lite


class AbstractDataCollector(ABC):
    """
    Abstract Base Class for mesa-lite DataCollector.

    This class defines methods for collecting data from both model and agents.
    Sub classes must implement logic for the methods
    """

    _model: mesa_lite.concrete.model.Model
    _model_reporters: dict[str, Callable[[Any], Any]]  # Resolved accessors
    _agent_reporters: dict[str, Callable[[Any], Any]]  # Resolved accessors
    _trigger: Callable[[Any], bool]
    _reset_memory: bool
    _storage: StorageBackend
    _frames: list[tuple[str, int, pl.LazyFrame]]

    def __init__(
        self,
        model: mesa_lite.concrete.model.Model,
        model_reporters: dict[str, Reporter] | None,
        agent_reporters: dict[str, Reporter] | None,
        trigger: Callable[[Any], bool] | None,
        reset_memory: bool,
        storage: str,
        collect_on_step: bool,
        max_workers: int,
    ):
        """
        Initialize a Datacollector.

        Parameters
        ----------
        model : mesa_lite.concrete.model.Model
            The model object from which data is collected.
        model_reporters : dict[str, str | Callable] | None
            Model-level reporters. Values are names registered in
            ``model.model_attributes`` or callables ``f(model)``.
        agent_reporters : dict[str, str | Callable] | None
            Agent-level reporters. Values are names registered in
            ``model.agent_attributes`` or callables ``f(agent)``.
        trigger : Callable[[Any], bool] | None
            A function(model) -> bool that determines whether to collect data.
            When None, every step is collected.
        reset_memory : bool
            Whether to reset in-memory data after flushing.
        storage : Literal["memory", "csv", "parquet"]
            Storage backend.
        collect_on_step : bool
            Whether to register the collector as a step hook of the model, so that
            data is collected at the start of every step.
        max_workers : int
            Maximum number of worker threads used for flushing collected data asynchronously

        Raises
        ------
        UnknownAttributeError
            If a reporter name is not registered on the model.
        """
        self._model = model
        self._model_reporters = self._resolve_reporters(
            model_reporters, model.model_attributes
        )
        self._agent_reporters = self._resolve_reporters(
            agent_reporters, model.agent_attributes
        )
        self._trigger = trigger or (lambda model: True)
        self._reset_memory = reset_memory
        self._storage = storage or "memory"
        self._frames = []
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._validate_inputs()
        if collect_on_step:
            model.add_step_hook(self.conditional_collect)

    @staticmethod
    def _resolve_reporters(
        reporters: dict[str, Reporter] | None,
        registry: mesa_lite.concrete.reporters.AttributeRegistry,
    ) -> dict[str, Callable[[Any], Any]]:
        resolved = {}
        for column_name, reporter in (reporters or {}).items():
            if isinstance(reporter, str):
                resolved[column_name] = registry.resolve(reporter)
            else:
                resolved[column_name] = reporter
        return resolved

    def collect(self) -> None:
        """
        Trigger Data collection.

        This method calls _collect() to perform actual data collection.

        Example
        -------
        >>> datacollector.collect()
        """
        self._collect()

    def conditional_collect(self) -> None:
        """
        Trigger data collection if condition is met.

        This method calls _collect() to perform actual data collection only if trigger returns True

        Example
        -------
        >>> datacollector.conditional_collect()
        """
        if self._should_collect():
            self._collect()

    def _should_collect(self) -> bool:
        """
        Evaluate whether data should be collected at current step.

        Returns
        -------
        bool
            True if the configured trigger condition is met, False otherwise.
        """
        return self._trigger(self._model)

    @abstractmethod
    def _collect(self):
        """
        Perform the actual data collection logic.

        This method must be implemented by subclasses.
        """
        pass

    @property
    @abstractmethod
    def data(self) -> Any:
        """
        Returns collected data currently in memory as a dataframe.

        Example:
        -------
        >>> df = datacollector.data
        >>> print(df)
        """
        pass

    def flush(self) -> Future:
        """
        Persist all collected data to configured backend.

        After flushing data optionally clears in-memory
        data buffer if `reset_memory` is True (default behavior).

        Returns
        -------
        Future
            Completes when the data has been written.

        Example
        -------
        >>> datacollector.flush().result()
        >>> # Data is saved externally and in-memory buffers are cleared if configured
        """
        with self._lock:
            frames_to_flush = list(self._frames)
            if self._reset_memory:
                self._reset()

        return self._executor.submit(self._flush, frames_to_flush)

    def _validate_inputs(self) -> None:
        """Check the storage configuration. Raise before the collector is hooked into the model."""
        pass

    def _reset(self):
        """
        Clear all collected data currently stored in memory.

        Use this to free memory or start fresh without affecting persisted data.
        """
        self._frames = []

    @abstractmethod
    def _flush(self, frames_to_flush: list) -> None:
        """
        Implement persistence of collected data to external storage.

        This method must be implemented by subclasses to handle
        backend-specific data saving operations.
        """
        pass

    @property
    def seed(self) -> int | Sequence[int]:
        """
        Function to get the model seed.

        Example:
        --------
        >>> seed = datacollector.seed
        """
        return self._model.seed

    @property
    def columns(self) -> dict[str, list[str]]:
        """
        The reporter column names, keyed by ``"model"`` and ``"agent"``.

        Example:
        --------
        >>> datacollector.columns["model"]
        ['gini', 'total_wealth']
        """
        return {
            "model": list(self._model_reporters),
            "agent": list(self._agent_reporters),
        }
