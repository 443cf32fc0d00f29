"""
Concrete implementation of the model class for mesa-lite.

This module provides the Model class, which owns everything one simulation
needs: the random stream, the optional grid, the full agent population, the
behavior and attribute registries, and the step counter.

Classes:
    ModelState:
        The lifecycle states of a model.
    Model:
        The base class for models in mesa-lite. Used as is, it builds a
        Boltzmann-style population on an optional grid and activates the
        behaviors named in ``activation`` once per step. Subclass it and
        override ``step`` (and optionally ``create_agent``) for custom models.

Lifecycle:
    CONSTRUCTED --step()--> STEPPING --finish()--> FINISHED

    ``step()`` is valid from CONSTRUCTED and STEPPING. Every call runs the
    step hooks (data collectors) on the state left by the previous step, then
    the user-defined step, and finally increments ``steps``. Steps never
    overlap: calling ``step()`` from inside a step raises ModelStateError.

Usage:
    from mesa_lite import Model

    class MoneyModel(Model):
        def __init__(self, n, width, height, seed=None):
            super().__init__(n, width, height, seed=seed)

        def step(self):
            self.agents.shuffle_do("move")
            self.agents.shuffle_do("give_money")

    model = MoneyModel(100, 10, 10, seed=42)
    model.run_model(steps=20)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum

from mesa_lite.abstract.space import AbstractDiscreteSpace
from mesa_lite.concrete.agent import Agent
from mesa_lite.concrete.agentset import AgentSet
from mesa_lite.concrete.behaviors import BUILTIN_BEHAVIORS
from mesa_lite.concrete.reporters import (
    AttributeRegistry,
    default_agent_attributes,
    default_model_attributes,
)
from mesa_lite.concrete.space import Grid
from mesa_lite.exceptions import InvalidParameterError, ModelStateError
from mesa_lite.rng import RandomStream


class ModelState(Enum):
    CONSTRUCTED = "constructed"
    STEPPING = "stepping"
    FINISHED = "finished"


class Model:
    """Base class for models in the mesa-lite library.

    This class serves as a foundational structure for creating agent-based models.
    It includes the basic attributes and methods necessary for initializing and
    running a simulation model.
    """

    random: RandomStream
    running: bool
    behaviors: dict[str, Callable[..., None]]  # Behavior name -> function(agent, *args)
    agent_attributes: AttributeRegistry
    model_attributes: AttributeRegistry
    activation: tuple[str, ...]  # Behaviors run by the default step, in order
    shuffle: bool
    _seed: int | Sequence[int]
    _population: AgentSet  # The full population, owned by the model
    _space: AbstractDiscreteSpace | None
    _step_hooks: list[Callable[[], None]]

    def __init__(
        self,
        population_size: int = 0,
        width: int | None = None,
        height: int | None = None,
        topology: str = "moore",
        torus: bool = True,
        capacity: int | None = None,
        seed: int | Sequence[int] | None = None,
        activation: Sequence[str] = ("move", "give_money"),
        shuffle: bool = True,
    ) -> None:
        """Create a new model.

        Overload this method with the actual code to start the model. Always
        start with super().__init__(...) to initialize the model object properly.

        Parameters
        ----------
        population_size : int, optional
            Number of agents created at construction, by default 0.
        width : int | None, optional
            Width of the grid. No grid is built when width and height are None.
        height : int | None, optional
            Height of the grid.
        topology : str, optional
            Neighborhood of the grid: "moore", "von_neumann" or "hexagonal",
            by default "moore".
        torus : bool, optional
            Whether the grid wraps around its edges, by default True.
        capacity : int | None, optional
            Maximum number of agents per cell, unbounded if None.
        seed : int | Sequence[int] | None, optional
            The seed for the model's random stream.
        activation : Sequence[str], optional
            Behaviors activated by the default ``step``, one full-population
            pass per behavior, by default ("move", "give_money").
        shuffle : bool, optional
            Whether each pass of the default ``step`` uses a fresh random order,
            by default True.

        Raises
        ------
        InvalidParameterError
            If ``population_size`` is negative, ``capacity`` is lower than 1,
            only one of ``width`` / ``height`` is given, or the grid cannot hold
            the population.
        """
        if population_size < 0:
            raise InvalidParameterError(
                f"population_size must be non-negative, got {population_size}"
            )
        if capacity is not None and capacity < 1:
            raise InvalidParameterError(f"Capacity must be at least 1, got {capacity}")
        if (width is None) != (height is None):
            raise InvalidParameterError("width and height must be given together")

        self.reset_randomizer(seed)
        self.running = True
        self.current_id = 0
        self.behaviors = dict(BUILTIN_BEHAVIORS)
        self.agent_attributes = default_agent_attributes()
        self.model_attributes = default_model_attributes()
        self.activation = tuple(activation)
        self.shuffle = shuffle
        self.datacollector = None
        self._population = AgentSet(self)
        self._space = None
        self._steps = 0
        self._state = ModelState.CONSTRUCTED
        self._in_step = False
        self._step_hooks = []

        if width is not None and height is not None:
            self.space = Grid(
                self,
                dimensions=[width, height],
                torus=torus,
                capacity=capacity,
                neighborhood_type=topology,
            )
        self.create_agents(population_size)

        self._user_step = self.step
        self.step = self._wrapped_step

    def _wrapped_step(self) -> None:
        """Run the step hooks and the user-defined step(), then increment the step counter."""
        if self._state is ModelState.FINISHED:
            raise ModelStateError("Cannot step a finished model")
        if self._in_step:
            raise ModelStateError("step() called while another step is running")
        self._state = ModelState.STEPPING
        self._in_step = True
        try:
            for hook in self._step_hooks:
                hook()
            self._user_step()
        finally:
            self._in_step = False
        self._steps += 1

    def step(self) -> None:
        """Run a single step.

        The default method runs one full-population pass per behavior in
        ``activation``, in a random order if ``shuffle`` is set. Overload as needed.
        """
        for behavior in self.activation:
            if self.shuffle:
                self._population.shuffle_do(behavior)
            else:
                self._population.do(behavior)

    def run_model(self, steps: int | None = None) -> None:
        """Run the model until ``running`` is False or ``steps`` more steps are done.

        Parameters
        ----------
        steps : int | None, optional
            Maximum number of steps to run; unbounded if None.
        """
        start = self._steps
        while self.running and (steps is None or self._steps - start < steps):
            self.step()

    def finish(self) -> None:
        """Mark the model as finished. Further calls to step() raise ModelStateError."""
        self.running = False
        self._state = ModelState.FINISHED

    def create_agent(self, unique_id: int) -> Agent:
        """Create one agent of the initial population. Overload to customize agents.

        Parameters
        ----------
        unique_id : int
            The identity to give to the agent.

        Returns
        -------
        Agent
            The new agent. It is registered and placed by ``create_agents``.
        """
        return Agent(self, unique_id)

    def create_agents(self, n: int) -> list[Agent]:
        """Create ``n`` agents and place each of them on a random cell with room left.

        Raises
        ------
        InvalidParameterError
            If the grid cannot hold ``n`` more agents.
        """
        if self._space is not None:
            room = sum(c.remaining_capacity for c in self._space)
            if n > room:
                raise InvalidParameterError(
                    f"Cannot place {n} agents: the grid has room for {room}"
                )
        agents = []
        for _ in range(n):
            agent = self.create_agent(self.next_id())
            self._population.add(agent)
            if self._space is not None:
                self._space.place(agent, self._space.random_available_cell())
            agents.append(agent)
        return agents

    def next_id(self) -> int:
        """Return the next unique agent id."""
        unique_id = self.current_id
        self.current_id += 1
        return unique_id

    def add_step_hook(self, hook: Callable[[], None]) -> None:
        """Register a callable run at the start of every step, before any behavior.

        Hooks run in registration order and observe the state left by the
        previous step (``steps`` still holds the number of completed steps).
        """
        self._step_hooks.append(hook)

    def reset_randomizer(self, seed: int | Sequence[int] | None) -> None:
        """Reset the model random stream.

        Parameters
        ----------
        seed : int | Sequence[int] | None
            A new seed for the stream; if None, a fresh seed is drawn
        """
        self.random = RandomStream(seed)
        self._seed = self.random.seed_value

    @property
    def steps(self) -> int:
        """Get the number of completed steps.

        Returns
        -------
        int
            The current step count of the model.
        """
        return self._steps

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def seed(self) -> int | Sequence[int]:
        return self._seed

    @property
    def agents(self) -> AgentSet:
        """Get a snapshot view of the population.

        Adding or removing agents on the returned AgentSet does not change the
        population; activating behaviors on it acts on the model's agents.

        Returns
        -------
        AgentSet
            Every agent of the model, in creation order.
        """
        try:
            return self._population.copy()
        except AttributeError:
            if __debug__:  # Only execute in non-optimized mode
                raise RuntimeError(
                    "You haven't called super().__init__() in your model. Make sure to call it in your __init__ method."
                )
            raise

    @property
    def population(self) -> list[Agent]:
        """Every agent of the model, in creation order."""
        return list(self._population)

    @property
    def space(self) -> AbstractDiscreteSpace:
        """Get the space object associated with the model.

        Returns
        -------
        AbstractDiscreteSpace
            The space of the model.

        Raises
        ------
        ValueError
            If the space has not been set for the model.
        """
        if self._space is None:
            raise ValueError(
                "You haven't set the space for the model. Use model.space = your_space"
            )
        return self._space

    @space.setter
    def space(self, space: AbstractDiscreteSpace) -> None:
        self._space = space

    @property
    def grid(self) -> AbstractDiscreteSpace:
        """Alias of ``space``."""
        return self.space

    @grid.setter
    def grid(self, grid: AbstractDiscreteSpace) -> None:
        self.space = grid
