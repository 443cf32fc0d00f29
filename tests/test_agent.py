import os

import pytest

from mesa_lite import (
    Agent,
    AgentSet,
    Capability,
    DataCollector,
    Grid,
    InvalidParameterError,
    Model,
    get_attribute,
)

typechecking = pytest.mark.skipif(
    os.getenv("MESA_LITE_RUNTIME_TYPECHECKING", "").lower() not in ("1", "true", "yes"),
    reason="runtime type checking is disabled",
)


class Test_Agent:
    def test___init__(self, model: Model):
        agent = Agent(model, 3)
        assert agent.unique_id == 3
        assert agent.wealth == 1
        assert agent.group is None
        assert agent.capabilities == frozenset({Capability.MOVABLE})
        assert agent.is_movable and not agent.is_fixed
        assert agent.cell is None
        assert not agent.is_placed
        assert agent.pos is None
        assert agent.model is model
        assert agent.random is model.random

    def test_capabilities(self, model: Model):
        fixed = Agent(model, 0, capabilities=[Capability.FIXED])
        assert fixed.is_fixed and not fixed.is_movable
        with pytest.raises(InvalidParameterError):
            Agent(model, 2, capabilities=[Capability.FIXED, Capability.MOVABLE])

    def test_negative_wealth(self, model: Model):
        with pytest.raises(InvalidParameterError):
            Agent(model, 0, wealth=-1)

    def test_get_attribute(self, grid_model: Model):
        agent = grid_model.population[0]
        agent.group = "Blue"
        assert get_attribute(agent, "wealth") == 1
        assert get_attribute(agent, "group") == "Blue"
        assert (get_attribute(agent, "x"), get_attribute(agent, "y")) == agent.pos

    def test_repr(self, model: Model):
        assert repr(Agent(model, 7, wealth=2)) == "Agent(unique_id=7, wealth=2, pos=None)"


@typechecking
@pytest.mark.parametrize(
    "build",
    [
        lambda: Agent("model", 0),
        lambda: AgentSet("model"),
        lambda: Grid("model", dimensions=[2, 2]),
        lambda: DataCollector("model"),
    ],
    ids=["agent", "agentset", "grid", "datacollector"],
)
def test_model_argument_is_checked(build):
    roar = pytest.importorskip("beartype.roar")
    with pytest.raises(roar.BeartypeCallHintParamViolation):
        build()


@typechecking
def test_random_argument_is_checked(grid_model: Model):
    roar = pytest.importorskip("beartype.roar")
    assert grid_model.grid.random_cell(random=grid_model.random) in grid_model.grid.all_cells
    with pytest.raises(roar.BeartypeCallHintParamViolation):
        grid_model.grid.random_cell(random="not a stream")
