import numpy as np
import pytest

from mesa_lite import (
    Agent,
    Capability,
    Grid,
    ImmovableAgentError,
    InvalidParameterError,
    Model,
)
from mesa_lite.concrete import behaviors


@pytest.fixture
def transfers(monkeypatch: pytest.MonkeyPatch) -> list[tuple[int, int]]:
    """Record every (giver, receiver) pair passed to ``transfer``."""
    recorded = []
    original = behaviors.transfer

    def spy(giver: Agent, receiver: Agent, amount: int = 1) -> None:
        recorded.append((giver.unique_id, receiver.unique_id))
        original(giver, receiver, amount)

    monkeypatch.setattr(behaviors, "transfer", spy)
    return recorded


def test_transfer(model: Model):
    giver = Agent(model, 0, wealth=3)
    receiver = Agent(model, 1, wealth=0)
    behaviors.transfer(giver, receiver, 2)
    assert (giver.wealth, receiver.wealth) == (1, 2)

    with pytest.raises(InvalidParameterError):
        behaviors.transfer(giver, receiver, 2)
    with pytest.raises(InvalidParameterError):
        behaviors.transfer(giver, receiver, -1)
    assert (giver.wealth, receiver.wealth) == (1, 2)


def test_move(grid_model: Model):
    agent = grid_model.population[0]
    start = agent.cell
    behaviors.move(agent)
    assert agent.cell in start.neighbors
    assert agent in agent.cell
    assert agent not in start


def test_move_fixed_and_unplaced(model: Model):
    model.grid = Grid(model, dimensions=[3, 3])
    fixed = Agent(model, 0, capabilities=[Capability.FIXED])
    model.grid.place(fixed, (1, 1))
    behaviors.move(fixed)
    assert fixed.pos == (1, 1)

    unplaced = Agent(model, 1)
    behaviors.move(unplaced)
    assert unplaced.cell is None

    with pytest.raises(ImmovableAgentError):
        behaviors.relocate(fixed, model.grid[(0, 0)])


def test_move_into_full_cell_skips_turn():
    # Two cells of capacity 1, each agent's only neighbor is occupied
    model = Model(2, 2, 1, torus=False, capacity=1, seed=0)
    positions = [a.pos for a in model.population]
    model.agents.do("move")
    assert [a.pos for a in model.population] == positions


def test_move_without_neighbors():
    model = Model(1, 1, 1, torus=False, seed=0)
    model.agents.do("move")
    assert model.population[0].pos == (0, 0)


def test_give_money(model: Model, transfers: list[tuple[int, int]]):
    model.grid = Grid(model, dimensions=[2, 2])
    rich, poor, alone = Agent(model, 0, wealth=2), Agent(model, 1, wealth=0), Agent(model, 2)
    model.grid.place(rich, (0, 0))
    model.grid.place(poor, (0, 0))
    model.grid.place(alone, (1, 1))

    behaviors.give_money(rich)
    assert transfers == [(0, 1)]
    assert (rich.wealth, poor.wealth) == (1, 1)

    # Nobody to give to
    behaviors.give_money(alone)
    assert alone.wealth == 1

    # Nothing to give
    rich.wealth = 0
    behaviors.give_money(rich)
    assert transfers == [(0, 1)]


def reference_exchange(seed: int, population: int) -> list[tuple[int, int]]:
    """The (giver, receiver) pairs of one exchange pass, drawn from numpy directly.

    One permutation gives the activation order, then every giver that still
    has wealth draws one receiver index over the whole population.
    """
    generator = np.random.default_rng(seed)
    wealth = [1] * population
    pairs = []
    for giver in generator.permutation(population).tolist():
        if wealth[giver] > 0:
            receiver = int(generator.integers(population))
            pairs.append((giver, receiver))
            wealth[giver] -= 1
            wealth[receiver] += 1
    return pairs


def test_exchange_sequence(transfers: list[tuple[int, int]]):
    model = Model(10, seed=1234, activation=("exchange",))
    model.step()

    expected = reference_exchange(1234, 10)
    assert transfers == expected
    # Every agent is activated once and only agents with wealth give
    givers = [giver for giver, _ in transfers]
    assert len(givers) == len(set(givers))
    wealth = [1] * 10
    for giver, receiver in expected:
        wealth[giver] -= 1
        wealth[receiver] += 1
    assert [a.wealth for a in model.population] == wealth
    assert sum(wealth) == 10


def test_exchange_sequence_other_seed(transfers: list[tuple[int, int]]):
    model = Model(25, seed=7, activation=("exchange",))
    model.step()
    assert transfers == reference_exchange(7, 25)
