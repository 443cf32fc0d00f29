"""
Concrete implementation of AgentSet for mesa-lite.

This module provides the AgentSet class, an ordered view over agents owned by
a model, with ordered and shuffled activation.

Classes:
    AgentSet(AbstractAgentSet):
        Agents stored in an insertion-ordered ``dict`` keyed by unique id.
        Derived sets (``select``, ``group_by``, ``shuffle``, ``sort``) hold
        the same agent objects in a new mapping.

Usage:
    The AgentSet returned by ``Model.agents`` covers the full population:

    model.agents.shuffle_do("move")
    rich = model.agents.select(lambda agent: agent.wealth > 2)
    by_group = model.agents.group_by("group")
    for group, agents in by_group.items():
        agents.do("give_money")

Resolution of behavior names:
    A name is first looked up as a method of the agent (which supports Agent
    subclasses), then in the model's behavior registry (``Model.behaviors``).
    Callables are invoked with the agent as first positional argument.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from functools import partial
from typing import TYPE_CHECKING, Any, Self

from mesa_lite.abstract.agentset import AbstractAgentSet
from mesa_lite.concrete.agent import Agent
from mesa_lite.exceptions import InvalidParameterError, UnknownBehaviorError
from mesa_lite.types_ import Behavior, GroupKey
from mesa_lite.utils import copydoc

if TYPE_CHECKING:
    import mesa_lite


@copydoc(AbstractAgentSet)
class AgentSet(AbstractAgentSet):
    """Dictionary-backed implementation of AgentSet."""

    def __init__(
        self,
        model: mesa_lite.concrete.model.Model,
        agents: Iterable[Agent] = (),
    ) -> None:
        """Initialize a new AgentSet.

        Parameters
        ----------
        model : mesa_lite.concrete.model.Model
            The model that the agent set belongs to.
        agents : Iterable[Agent], optional
            The initial agents, in activation order.
        """
        self._model = model
        self._agents = {}
        self.add(agents)

    def add(self, agents: Agent | Iterable[Agent], inplace: bool = True) -> Self:
        obj = self._get_obj(inplace)
        if isinstance(agents, Agent):
            agents = [agents]
        for agent in agents:
            present = obj._agents.get(agent.unique_id)
            if present is not None and present is not agent:
                raise ValueError(
                    f"Another agent with unique_id {agent.unique_id} is already in the AgentSet"
                )
            obj._agents[agent.unique_id] = agent
        return obj

    def remove(
        self, agents: Agent | int | Iterable[Agent | int], inplace: bool = True
    ) -> Self:
        obj = self._get_obj(inplace)
        if isinstance(agents, (Agent, int)):
            agents = [agents]
        ids = [a.unique_id if isinstance(a, Agent) else a for a in agents]
        missing = [i for i in ids if i not in obj._agents]
        if missing:
            raise KeyError(f"Some agents are not present in the AgentSet: {missing}")
        for unique_id in ids:
            del obj._agents[unique_id]
        return obj

    def do(self, behavior: Behavior, *args: Any, **kwargs: Any) -> Self:
        self._activate(list(self._agents.values()), behavior, args, kwargs)
        return self

    def shuffle_do(self, behavior: Behavior, *args: Any, **kwargs: Any) -> Self:
        order = self.random.shuffle(list(self._agents.values()))
        self._activate(order, behavior, args, kwargs)
        return self

    def select(
        self,
        predicate: Callable[[Agent], bool] | None = None,
        at_most: int | None = None,
        inplace: bool = False,
    ) -> Self:
        if at_most is not None and at_most < 0:
            raise InvalidParameterError(f"at_most must be non-negative, got {at_most}")
        obj = self._get_obj(inplace)
        selected: dict[int, Agent] = {}
        for unique_id, agent in self._agents.items():
            if at_most is not None and len(selected) >= at_most:
                break
            if predicate is None or predicate(agent):
                selected[unique_id] = agent
        obj._agents = selected
        return obj

    def group_by(self, key: GroupKey) -> dict[Hashable, Self]:
        key_func = self._attribute_accessor(key)
        groups: dict[Hashable, dict[int, Agent]] = {}
        for unique_id, agent in self._agents.items():
            groups.setdefault(key_func(agent), {})[unique_id] = agent
        return {value: self._derive(members) for value, members in groups.items()}

    def shuffle(self, inplace: bool = False) -> Self:
        obj = self._get_obj(inplace)
        order = self.random.shuffle(list(self._agents.items()))
        obj._agents = dict(order)
        return obj

    def sort(
        self,
        key: str | Callable[[Agent], Any],
        ascending: bool = True,
        inplace: bool = False,
    ) -> Self:
        key_func = self._attribute_accessor(key)
        obj = self._get_obj(inplace)
        ordered = sorted(
            self._agents.items(), key=lambda item: key_func(item[1]), reverse=not ascending
        )
        obj._agents = dict(ordered)
        return obj

    def get(self, attr_name: str) -> list[Any]:
        accessor = self._model.agent_attributes.resolve(attr_name)
        return [accessor(agent) for agent in self._agents.values()]

    def set(self, attr_name: str, value: Any) -> Self:
        for agent in self._agents.values():
            setattr(agent, attr_name, value(agent) if callable(value) else value)
        return self

    def _activate(
        self,
        order: list[Agent],
        behavior: Behavior,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        # Agents are invoked one at a time on live state: no snapshot is taken.
        for agent in order:
            self._resolve_behavior(agent, behavior)(*args, **kwargs)

    def _resolve_behavior(self, agent: Agent, behavior: Behavior) -> Callable[..., Any]:
        if callable(behavior):
            return partial(behavior, agent)
        method = getattr(agent, behavior, None)
        if callable(method):
            return method
        registered = self._model.behaviors.get(behavior)
        if registered is not None:
            return partial(registered, agent)
        raise UnknownBehaviorError(
            f"Agent {agent.unique_id} has no behavior '{behavior}'. "
            f"Registered behaviors: {', '.join(sorted(self._model.behaviors))}"
        )

    def _attribute_accessor(self, key: str | Callable[[Agent], Any]) -> Callable[[Agent], Any]:
        if isinstance(key, str):
            return self._model.agent_attributes.resolve(key)
        return key

    def _derive(self, members: dict[int, Agent]) -> Self:
        obj = self.copy()
        obj._agents = members
        return obj
