"""
mesa-lite: A minimal agent-based modeling engine.

mesa-lite runs discrete-time simulations of autonomous agents living on a
two-dimensional grid. A model owns a seeded random stream, an optional grid of
capacity-bounded cells, and the full population of agents. Each step activates
named behaviors over the population in a fixed or freshly shuffled order, and
data collectors record model-level and agent-level metrics into Polars
DataFrames.

Key Features:
- Moore, von Neumann and hexagonal grids, with optional toroidal wrap
- Per-cell capacity with atomic moves
- Ordered and shuffled activation of behaviors over agent sets
- select / group_by views over the population
- Fully reproducible runs: every random draw comes from the model's stream
- Parameter sweeps over independent model instances

Main Components:
- Agent: An entity with an identity, a wealth, a group tag and a location
- AgentSet: Ordered view over agents with activation and derivation operations
- Grid: Rectangular lattice of Cells
- Model: Base model class owning the random stream, the grid and the agents
- DataCollector: Model and agent reporters, in memory or on disk
- batch_run: Cross-product parameter sweeps

Usage:
To use mesa-lite, import the necessary components and subclass them as needed:

    from mesa_lite import DataCollector, Model

    class MoneyModel(Model):
        def __init__(self, n, width, height, seed=None):
            super().__init__(n, width, height, seed=seed)
            self.datacollector = DataCollector(
                model=self, model_reporters={"gini": "gini"}
            )

        def step(self):
            self.agents.shuffle_do("move")
            self.agents.shuffle_do("give_money")

License: MIT
"""

from __future__ import annotations

import os

# Enable runtime type checking if requested via environment variable
if os.getenv("MESA_LITE_RUNTIME_TYPECHECKING", "").lower() in ("1", "true", "yes"):
    try:
        from beartype.claw import beartype_this_package

        beartype_this_package()
    except ImportError:
        import warnings

        warnings.warn(
            "MESA_LITE_RUNTIME_TYPECHECKING is enabled but beartype is not installed.",
            ImportWarning,
            stacklevel=2,
        )

from mesa_lite.concrete.agent import Agent, Capability
from mesa_lite.concrete.agentset import AgentSet
from mesa_lite.concrete.batchrunner import batch_run
from mesa_lite.concrete.cell import Cell
from mesa_lite.concrete.datacollector import DataCollector
from mesa_lite.concrete.model import Model, ModelState
from mesa_lite.concrete.reporters import AttributeRegistry, get_attribute, gini
from mesa_lite.concrete.space import Grid
from mesa_lite.exceptions import (
    CapacityExceededError,
    EmptyInputError,
    ImmovableAgentError,
    InvalidParameterError,
    MesaLiteError,
    ModelStateError,
    UnknownAttributeError,
    UnknownBehaviorError,
)
from mesa_lite.rng import RandomStream

__all__ = [
    "Agent",
    "AgentSet",
    "AttributeRegistry",
    "Capability",
    "Cell",
    "DataCollector",
    "Grid",
    "Model",
    "ModelState",
    "RandomStream",
    "batch_run",
    "get_attribute",
    "gini",
    "CapacityExceededError",
    "EmptyInputError",
    "ImmovableAgentError",
    "InvalidParameterError",
    "MesaLiteError",
    "ModelStateError",
    "UnknownAttributeError",
    "UnknownBehaviorError",
]

__version__ = "0.1.0"
