import math

import pytest

from mesa_lite import (
    AttributeRegistry,
    DataCollector,
    Model,
    UnknownAttributeError,
    get_attribute,
    gini,
)


class TestGini:
    def test_empty(self):
        assert math.isnan(gini([]))

    def test_equal(self):
        assert gini([1] * 100) == 0.0
        assert gini([0, 0, 0]) == 0.0

    def test_unequal(self):
        assert gini([0, 0, 0, 1]) == pytest.approx(0.75)
        assert gini([1, 2, 3, 4]) == pytest.approx(0.25)
        # Order of the input does not matter
        assert gini([4, 1, 3, 2]) == pytest.approx(0.25)

    def test_model_reporter(self):
        model = Model(4, seed=0)
        for agent, wealth in zip(model.population, [0, 0, 0, 4]):
            agent.wealth = wealth
        assert model.model_attributes.get(model, "gini") == pytest.approx(0.75)


class TestAttributeRegistry:
    def test_register_resolve(self):
        registry = AttributeRegistry({"double": lambda x: 2 * x})
        registry.register("square", lambda x: x * x)
        assert registry.get(3, "double") == 6
        assert registry.resolve("square")(3) == 9
        assert registry.names == ["double", "square"]
        assert "square" in registry
        assert len(registry) == 2
        assert list(registry) == ["double", "square"]

    def test_unknown(self):
        registry = AttributeRegistry({"b": abs, "a": abs})
        with pytest.raises(UnknownAttributeError) as excinfo:
            registry.resolve("c")
        assert excinfo.value.name == "c"
        assert str(excinfo.value) == "Unknown attribute 'c'. Registered: a, b"
        assert str(UnknownAttributeError("c")) == "Unknown attribute 'c'"

    def test_copy_is_independent(self):
        registry = AttributeRegistry({"a": abs})
        duplicate = registry.copy()
        duplicate.register("b", abs)
        assert "b" not in registry

    def test_defaults(self, grid_model: Model):
        assert grid_model.agent_attributes.names == ["unique_id", "wealth", "group", "x", "y"]
        assert grid_model.model_attributes.names == ["steps", "population", "total_wealth", "gini"]
        assert grid_model.model_attributes.get(grid_model, "population") == 10
        assert grid_model.model_attributes.get(grid_model, "total_wealth") == 10

    def test_custom_agent_attribute(self, grid_model: Model):
        grid_model.agent_attributes.register("is_rich", lambda agent: agent.wealth > 1)
        agent = grid_model.population[0]
        assert get_attribute(agent, "is_rich") is False
        agent.wealth = 5
        assert get_attribute(agent, "is_rich") is True

        collector = DataCollector(
            grid_model, agent_reporters={"is_rich": "is_rich"}, collect_on_step=False
        )
        collector.collect()
        assert collector.data["agent"]["is_rich"].sum() == 1

        with pytest.raises(UnknownAttributeError):
            get_attribute(agent, "is_poor")
