"""
Abstract base classes for spaces in mesa-lite.

This module defines the interface shared by every cell-based space and
implements the parts that do not depend on the space's geometry: occupancy
bookkeeping, placement with capacity checks, random cell sampling and the
tabular cell view.

Classes:
    AbstractDiscreteSpace(ABC):
        An abstract base class for discrete spaces made of Cells. Concrete
        subclasses build the cells and compute the neighbor coordinates of each
        cell; adjacency is then fixed for the lifetime of the space.

Invariants:
    - Every cell coordinate is unique.
    - Neighbor relationships are symmetric.
    - An agent occupies at most one cell, and ``agent.cell`` always names it.
    - No cell ever holds more agents than its capacity.

Usage:
    from mesa_lite.abstract.space import AbstractDiscreteSpace

    class Ring(AbstractDiscreteSpace):
        def __init__(self, model, n, capacity=None):
            super().__init__(model, capacity)
            self._cells = {(i, 0): Cell((i, 0), capacity) for i in range(n)}
            self._connect_cells()

        def _compute_neighbors(self, coordinate):
            i = coordinate[0]
            return [((i - 1) % len(self), 0), ((i + 1) % len(self), 0)]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING
from warnings import warn

import polars as pl

from mesa_lite.concrete.agent import Agent
from mesa_lite.concrete.cell import Cell
from mesa_lite.exceptions import (
    CapacityExceededError,
    ImmovableAgentError,
    InvalidParameterError,
)
from mesa_lite.types_ import Coordinate

if TYPE_CHECKING:
    import mesa_lite


class AbstractDiscreteSpace(ABC):
    """The AbstractDiscreteSpace class defines the interface for all cell-based spaces.

    Parameters
    ----------
    model : mesa_lite.concrete.model.Model
        The model to which the space belongs.
    capacity : int | None, optional
        The default maximum number of agents per cell, unbounded if None.
    """

    _model: mesa_lite.concrete.model.Model
    _capacity: int | None  # Default capacity of the cells
    _cells: dict[Coordinate, Cell]  # Coordinate -> Cell, in construction order

    def __init__(
        self, model: mesa_lite.concrete.model.Model, capacity: int | None = None
    ) -> None:
        if capacity is not None and capacity < 1:
            raise InvalidParameterError(f"Capacity must be at least 1, got {capacity}")
        self._model = model
        self._capacity = capacity
        self._cells = {}

    @abstractmethod
    def _compute_neighbors(self, coordinate: Coordinate) -> list[Coordinate]:
        """Compute the coordinates adjacent to ``coordinate``.

        Parameters
        ----------
        coordinate : Coordinate
            The coordinate of the cell.

        Returns
        -------
        list[Coordinate]
            The adjacent coordinates. Duplicates and the coordinate itself are
            discarded by the caller.
        """
        ...

    def _connect_cells(self) -> None:
        """Compute the neighbors of every cell once."""
        for coordinate, cell in self._cells.items():
            seen: dict[Coordinate, Cell] = {}
            for neighbor in self._compute_neighbors(coordinate):
                if neighbor != coordinate and neighbor not in seen:
                    seen[neighbor] = self._cells[neighbor]
            cell._connect(tuple(seen.values()))

    def neighbors_of(self, cell: Cell | Coordinate) -> tuple[Cell, ...]:
        """Get the neighbors of a cell.

        Parameters
        ----------
        cell : Cell | Coordinate
            The cell or its coordinate.

        Returns
        -------
        tuple[Cell, ...]
            The adjacent cells.
        """
        return self._get_cell(cell).neighbors

    def place(self, agent: Agent, cell: Cell | Coordinate) -> frozenset[int]:
        """Place an agent in a cell, removing it from its previous cell if any.

        The move is atomic: if the destination is full, nothing changes.

        Parameters
        ----------
        agent : Agent
            The agent to place.
        cell : Cell | Coordinate
            The destination.

        Returns
        -------
        frozenset[int]
            The updated occupants of the destination.

        Raises
        ------
        CapacityExceededError
            If the destination is full.
        ImmovableAgentError
            If the agent is fixed and already placed in another cell.
        """
        destination = self._get_cell(cell)
        if agent.cell is destination:
            return destination.occupants
        if agent.is_fixed and agent.cell is not None:
            raise ImmovableAgentError(
                f"Agent {agent.unique_id} is fixed at {agent.cell.coordinate}"
            )
        if destination.is_full:
            raise CapacityExceededError(destination.coordinate, destination.capacity)
        if agent.cell is not None:
            agent.cell._remove_agent(agent)
        destination._add_agent(agent)
        agent.cell = destination
        return destination.occupants

    def remove(self, agent: Agent) -> None:
        """Remove an agent from the space.

        If the agent is not placed, a RuntimeWarning is raised and nothing changes.
        """
        if agent.cell is None:
            warn(f"Agent {agent.unique_id} is not placed in the space", RuntimeWarning)
            return
        agent.cell._remove_agent(agent)
        agent.cell = None

    def random_cell(
        self, random: mesa_lite.rng.RandomStream | None = None
    ) -> Cell:
        """Return a uniformly chosen cell.

        Parameters
        ----------
        random : RandomStream | None, optional
            The stream to draw from, by default the model's stream.
        """
        stream = random if random is not None else self.random
        return stream.choice(self.all_cells)

    def random_available_cell(
        self, random: mesa_lite.rng.RandomStream | None = None
    ) -> Cell:
        """Return a uniformly chosen cell among those with remaining capacity.

        Raises
        ------
        CapacityExceededError
            If every cell is full.
        """
        available = self.available_cells
        if not available:
            raise CapacityExceededError()
        stream = random if random is not None else self.random
        return stream.choice(available)

    def occupancy(self) -> pl.DataFrame:
        """Tabular view of the cells.

        Returns
        -------
        pl.DataFrame
            One row per cell with columns ``dim_0``, ``dim_1``, ``n_agents`` and
            ``capacity`` (null when unbounded).
        """
        cells = self.all_cells
        return pl.DataFrame(
            {
                "dim_0": [c.coordinate[0] for c in cells],
                "dim_1": [c.coordinate[1] for c in cells],
                "n_agents": [len(c) for c in cells],
                "capacity": [c.capacity for c in cells],
            },
            schema={
                "dim_0": pl.Int64,
                "dim_1": pl.Int64,
                "n_agents": pl.Int64,
                "capacity": pl.Int64,
            },
        )

    def _get_cell(self, cell: Cell | Coordinate | Sequence[int]) -> Cell:
        if isinstance(cell, Cell):
            if self._cells.get(cell.coordinate) is not cell:
                raise ValueError(f"{cell!r} does not belong to this space")
            return cell
        coordinate = tuple(cell)
        try:
            return self._cells[coordinate]
        except KeyError:
            raise ValueError(f"Invalid coordinates {coordinate}") from None

    def __getitem__(self, coordinate: Coordinate | Sequence[int]) -> Cell:
        return self._get_cell(coordinate)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} cells, capacity={self._capacity})"

    @property
    def all_cells(self) -> tuple[Cell, ...]:
        """Every cell of the space, in construction order."""
        return tuple(self._cells.values())

    @property
    def empty_cells(self) -> list[Cell]:
        return [c for c in self._cells.values() if c.is_empty]

    @property
    def available_cells(self) -> list[Cell]:
        """Cells with remaining capacity."""
        return [c for c in self._cells.values() if not c.is_full]

    @property
    def full_cells(self) -> list[Cell]:
        return [c for c in self._cells.values() if c.is_full]

    @property
    def agents(self) -> list[Agent]:
        """The placed agents, cell by cell."""
        return [a for c in self._cells.values() for a in c.agents]

    @property
    def capacity(self) -> int | None:
        """The default capacity of the cells."""
        return self._capacity

    @property
    def total_capacity(self) -> int | float:
        """Sum of the capacities of all cells; ``math.inf`` if unbounded."""
        return sum(c.remaining_capacity + len(c) for c in self._cells.values())

    @property
    def model(self) -> mesa_lite.concrete.model.Model:
        return self._model

    @property
    def random(self) -> mesa_lite.rng.RandomStream:
        """The random stream of the model."""
        return self._model.random
