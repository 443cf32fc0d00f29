"""
Concrete implementations of mesa-lite components.

Modules:
    agent.py:
        - Agent, Capability: the single agent type and its capability tags.

    agentset.py:
        - AgentSet: ordered view over agents with ordered and shuffled activation.

    cell.py:
        - Cell: a location with bounded capacity and fixed neighbors.

    space.py:
        - Grid: Cells on a 2D lattice with Moore, von Neumann or hexagonal adjacency.

    behaviors.py:
        - move, give_money, exchange, transfer, relocate: built-in behaviors.

    reporters.py:
        - AttributeRegistry, get_attribute, gini: named accessors for reporters.

    model.py:
        - Model, ModelState: the simulation driver.

    datacollector.py:
        - DataCollector: per-step model and agent data in Polars frames.

    batchrunner.py:
        - batch_run: parameter sweeps over independent model instances.

Usage:
    from mesa_lite.concrete.model import Model

    class MyModel(Model):
        def __init__(self, n, width, height, seed=None):
            super().__init__(n, width, height, seed=seed)

        def step(self):
            self.agents.shuffle_do("move")
            self.agents.shuffle_do("give_money")

For more detailed information on each class, refer to their respective module
and class docstrings.
"""
