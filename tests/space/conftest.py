from __future__ import annotations

import pytest

from mesa_lite import Agent, Grid, Model


@pytest.fixture
def agents(model: Model) -> list[Agent]:
    return [Agent(model, unique_id) for unique_id in range(4)]


@pytest.fixture
def grid_moore(model: Model) -> Grid:
    return Grid(model, dimensions=[3, 3], capacity=2)


@pytest.fixture
def grid_moore_torus(model: Model) -> Grid:
    return Grid(model, dimensions=[5, 5], torus=True)


@pytest.fixture
def grid_von_neumann(model: Model) -> Grid:
    return Grid(model, dimensions=[3, 3], neighborhood_type="von_neumann")


@pytest.fixture
def grid_hexagonal(model: Model) -> Grid:
    return Grid(model, dimensions=[10, 10], neighborhood_type="hexagonal")
