"""
Cells of a discrete space.

A Cell is a location with a bounded number of occupants and a fixed set of
adjacent cells. Cells are created and connected by their space; the space is
their only owner and the only component that changes their occupancy (see
``AbstractDiscreteSpace.place``).
"""

from __future__ import annotations

import math

from mesa_lite.concrete.agent import Agent
from mesa_lite.exceptions import CapacityExceededError


class Cell:
    """A location on a grid.

    Parameters
    ----------
    coordinate : tuple[int, int]
        The coordinate of the cell, unique within its grid.
    capacity : int | None, optional
        The maximum number of simultaneous occupants, unbounded if None.
    """

    coordinate: tuple[int, int]
    capacity: int | None
    _agents: dict[int, Agent]  # Occupants in arrival order
    _neighbors: tuple[Cell, ...]

    def __init__(self, coordinate: tuple[int, int], capacity: int | None = None) -> None:
        self.coordinate = coordinate
        self.capacity = capacity
        self._agents = {}
        self._neighbors = ()

    @property
    def occupants(self) -> frozenset[int]:
        """The unique ids of the agents located in the cell."""
        return frozenset(self._agents)

    @property
    def agents(self) -> list[Agent]:
        """The agents located in the cell, in arrival order."""
        return list(self._agents.values())

    @property
    def neighbors(self) -> tuple[Cell, ...]:
        """The adjacent cells, fixed when the grid was built."""
        return self._neighbors

    @property
    def is_empty(self) -> bool:
        return not self._agents

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and len(self._agents) >= self.capacity

    @property
    def remaining_capacity(self) -> int | float:
        """Free slots left in the cell; ``math.inf`` if the cell is unbounded."""
        if self.capacity is None:
            return math.inf
        return self.capacity - len(self._agents)

    def _connect(self, neighbors: tuple[Cell, ...]) -> None:
        self._neighbors = neighbors

    def _add_agent(self, agent: Agent) -> None:
        if self.is_full:
            raise CapacityExceededError(self.coordinate, self.capacity)
        self._agents[agent.unique_id] = agent

    def _remove_agent(self, agent: Agent) -> None:
        del self._agents[agent.unique_id]

    def __contains__(self, agent: object) -> bool:
        return isinstance(agent, Agent) and self._agents.get(agent.unique_id) is agent

    def __len__(self) -> int:
        return len(self._agents)

    def __repr__(self) -> str:
        return f"Cell({self.coordinate}, occupants={sorted(self._agents)}, capacity={self.capacity})"
