"""
Concrete grid space for mesa-lite.

Classes:
    Grid(AbstractDiscreteSpace):
        A rectangular 2D lattice of Cells with Moore, von Neumann or hexagonal
        adjacency and an optional toroidal wrap.

Warning
-------
[0, 0] is the bottom-left corner and [width - 1, height - 1] the top-right
corner, consistent with Cartesian coordinates. Hexagonal grids use axial
coordinates: the q-axis points to the right and the r-axis points up and to
the right.

Usage:
    from mesa_lite import Grid, Model

    class MyModel(Model):
        def __init__(self):
            super().__init__()
            self.grid = Grid(self, dimensions=[10, 10], torus=True, capacity=3)
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import product
from typing import TYPE_CHECKING, Literal

from mesa_lite.abstract.space import AbstractDiscreteSpace
from mesa_lite.concrete.cell import Cell
from mesa_lite.exceptions import InvalidParameterError
from mesa_lite.types_ import Coordinate
from mesa_lite.utils import copydoc

if TYPE_CHECKING:
    import mesa_lite


@copydoc(AbstractDiscreteSpace)
class Grid(AbstractDiscreteSpace):
    """Parameters
    ----------
    model : mesa_lite.concrete.model.Model
        The model to which the grid belongs.
    dimensions : Sequence[int]
        The width and height of the grid.
    torus : bool, optional
        If the grid wraps around its edges, by default False.
    capacity : int | None, optional
        The maximum number of agents per cell (default is unbounded).
    neighborhood_type : str, optional
        One of "moore", "von_neumann" or "hexagonal", by default "moore".
    """

    _dimensions: tuple[int, int]
    _torus: bool
    _neighborhood_type: Literal["moore", "von_neumann", "hexagonal"]
    _offsets: list[Coordinate]  # The offsets to compute the neighborhood of a cell

    def __init__(
        self,
        model: mesa_lite.concrete.model.Model,
        dimensions: Sequence[int],
        torus: bool = False,
        capacity: int | None = None,
        neighborhood_type: str = "moore",
    ) -> None:
        if len(dimensions) != 2 or any(d < 1 for d in dimensions):
            raise InvalidParameterError(
                f"Grid dimensions must be two positive integers, got {list(dimensions)}"
            )
        super().__init__(model, capacity)
        self._dimensions = (int(dimensions[0]), int(dimensions[1]))
        self._torus = torus
        self._offsets = self._compute_offsets(neighborhood_type)
        self._neighborhood_type = neighborhood_type
        width, height = self._dimensions
        self._cells = {
            (x, y): Cell((x, y), capacity) for x in range(width) for y in range(height)
        }
        self._connect_cells()

    def _compute_offsets(self, neighborhood_type: str) -> list[Coordinate]:
        """Generate offsets for the neighborhood.

        Parameters
        ----------
        neighborhood_type : str
            The type of neighborhood to consider

        Returns
        -------
        list[Coordinate]
            The offsets

        Raises
        ------
        InvalidParameterError
            If the neighborhood type is invalid
        """
        if neighborhood_type == "moore":
            return [d for d in product(range(-1, 2), repeat=2) if any(d)]
        elif neighborhood_type == "von_neumann":
            return [
                d for d in product(range(-1, 2), repeat=2) if sum(map(abs, d)) == 1
            ]
        elif neighborhood_type == "hexagonal":
            return [
                (1, 0),  # East
                (1, -1),  # South-West
                (0, -1),  # South-East
                (-1, 0),  # West
                (-1, 1),  # North-West
                (0, 1),  # North-East
            ]
        raise InvalidParameterError(
            f"Invalid neighborhood type '{neighborhood_type}'. "
            "Expected one of: moore, von_neumann, hexagonal"
        )

    def _compute_neighbors(self, coordinate: Coordinate) -> list[Coordinate]:
        x, y = coordinate
        neighbors = [(x + dx, y + dy) for dx, dy in self._offsets]
        if self._torus:
            return [self.torus_adj(pos) for pos in neighbors]
        return [pos for pos in neighbors if not self.out_of_bounds(pos)]

    def out_of_bounds(self, pos: Coordinate) -> bool:
        """Check if a position is out of the bounds of a non-toroidal grid.

        Raises
        ------
        ValueError
            If the grid is a torus.
        """
        if self._torus:
            raise ValueError("This method is only valid for non-torus grids")
        width, height = self._dimensions
        return not (0 <= pos[0] < width and 0 <= pos[1] < height)

    def torus_adj(self, pos: Coordinate) -> Coordinate:
        """Wrap a position around the edges of the grid."""
        width, height = self._dimensions
        return (pos[0] % width, pos[1] % height)

    def __repr__(self) -> str:
        return (
            f"Grid(dimensions={list(self._dimensions)}, torus={self._torus}, "
            f"capacity={self._capacity}, neighborhood_type='{self._neighborhood_type}')"
        )

    @property
    def dimensions(self) -> tuple[int, int]:
        return self._dimensions

    @property
    def width(self) -> int:
        return self._dimensions[0]

    @property
    def height(self) -> int:
        return self._dimensions[1]

    @property
    def neighborhood_type(self) -> Literal["moore", "von_neumann", "hexagonal"]:
        return self._neighborhood_type

    @property
    def torus(self) -> bool:
        return self._torus
