"""
Agent type for mesa-lite.

mesa-lite uses a single Agent class. Variants that other frameworks express as
subclasses (an agent bound to a cell, an agent that can move between cells, an
agent that never leaves its cell) are expressed here as capability tags on the
agent. Behavior functions in ``mesa_lite.concrete.behaviors`` dispatch on those
tags.

Classes:
    Capability:
        The capability tags an agent can carry.
    Agent:
        An entity with an identity, a wealth, an optional group tag and an
        optional location on the model's grid.

Agents are created in bulk by ``Model.create_agent`` during model construction
and are never destroyed during a run. Subclassing Agent to add behavior methods
is still supported: activation resolves behavior names against agent methods
first and registered behaviors second.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from enum import Enum
from typing import TYPE_CHECKING

from mesa_lite.exceptions import InvalidParameterError

if TYPE_CHECKING:
    import mesa_lite


class Capability(str, Enum):
    """Capability tags understood by the built-in behaviors."""

    MOVABLE = "movable"
    FIXED = "fixed"


class Agent:
    """A single agent.

    Parameters
    ----------
    model : mesa_lite.concrete.model.Model
        The model the agent belongs to.
    unique_id : int
        Identity of the agent, unique within the model.
    wealth : int, optional
        Starting wealth, by default 1. Must be non-negative.
    group : Hashable | None, optional
        Categorical tag (for example an ethnicity), by default None.
    capabilities : Iterable[Capability] | None, optional
        Capability tags, by default ``{Capability.MOVABLE}``.
    """

    unique_id: int
    wealth: int
    group: Hashable | None
    capabilities: frozenset[Capability]
    cell: mesa_lite.concrete.cell.Cell | None  # Location record, the cell owns occupancy

    def __init__(
        self,
        model: mesa_lite.concrete.model.Model,
        unique_id: int,
        wealth: int = 1,
        group: Hashable | None = None,
        capabilities: Iterable[Capability] | None = None,
    ) -> None:
        if wealth < 0:
            raise InvalidParameterError(
                f"Agent wealth must be non-negative, got {wealth}"
            )
        if capabilities is None:
            capabilities = (Capability.MOVABLE,)
        capabilities = frozenset(Capability(c) for c in capabilities)
        if Capability.MOVABLE in capabilities and Capability.FIXED in capabilities:
            raise InvalidParameterError(
                "An agent cannot be both movable and fixed"
            )
        self._model = model
        self.unique_id = unique_id
        self.wealth = wealth
        self.group = group
        self.capabilities = capabilities
        self.cell = None

    @property
    def model(self) -> mesa_lite.concrete.model.Model:
        """The model the agent belongs to."""
        return self._model

    @property
    def random(self) -> mesa_lite.rng.RandomStream:
        """The random stream of the agent's model."""
        return self._model.random

    @property
    def is_movable(self) -> bool:
        return Capability.MOVABLE in self.capabilities

    @property
    def is_fixed(self) -> bool:
        return Capability.FIXED in self.capabilities

    @property
    def is_placed(self) -> bool:
        """Whether the agent currently occupies a cell."""
        return self.cell is not None

    @property
    def pos(self) -> tuple[int, int] | None:
        """Coordinate of the agent's cell, or None if it is not placed."""
        return None if self.cell is None else self.cell.coordinate

    def __repr__(self) -> str:
        return f"Agent(unique_id={self.unique_id}, wealth={self.wealth}, pos={self.pos})"
