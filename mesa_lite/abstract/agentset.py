"""
Abstract base classes for agent sets in mesa-lite.

This module defines the core abstraction for agent sets. An agent set is an
ordered view over agents owned by a model: it never owns the agents, several
sets can hold the same agent, and deriving a subset never copies an agent.

Classes:
    AbstractAgentSet:
        An abstract base class for agent sets. It fixes the activation
        contract (``do`` / ``shuffle_do``), the derivation operations
        (``select``, ``group_by``, ``shuffle``, ``sort``) and attribute access
        (``get`` / ``set``), and implements the container protocol on top of
        the ``_agents`` mapping.

Activation semantics:
    Activation is synchronous. The order of the agents is fixed when ``do`` is
    called, and the behavior invoked on the i-th agent observes every mutation
    already made by agents 0..i-1 during the same call. No state is snapshotted
    at the start of the call.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, Self

from mesa_lite.abstract.mixin import CopyMixin
from mesa_lite.concrete.agent import Agent
from mesa_lite.types_ import Behavior, GroupKey

if TYPE_CHECKING:
    import mesa_lite


class AbstractAgentSet(CopyMixin):
    """The AbstractAgentSet class is an ordered view over agents of a model.

    Parameters
    ----------
    model : mesa_lite.concrete.model.Model
        The model that the agent set belongs to.
    """

    _copy_with_method: dict[str, tuple[str, list[str]]] = {"_agents": ("copy", [])}
    _copy_only_reference: list[str] = ["_model"]
    _agents: dict[int, Agent]  # unique_id -> Agent, in activation order
    _model: mesa_lite.concrete.model.Model

    @abstractmethod
    def __init__(self, model: mesa_lite.concrete.model.Model) -> None: ...

    @abstractmethod
    def add(self, agents: Agent | Iterable[Agent], inplace: bool = True) -> Self:
        """Add agents to the AgentSet, keeping insertion order.

        Parameters
        ----------
        agents : Agent | Iterable[Agent]
            The agents to add.
        inplace : bool, optional
            Whether to add the agents in place, by default True.

        Returns
        -------
        Self
            The updated AgentSet.
        """
        ...

    @abstractmethod
    def remove(self, agents: Agent | int | Iterable[Agent | int], inplace: bool = True) -> Self:
        """Remove agents from the AgentSet.

        Parameters
        ----------
        agents : Agent | int | Iterable[Agent | int]
            The agents, or their unique ids, to remove.
        inplace : bool, optional
            Whether to remove the agents in place, by default True.

        Returns
        -------
        Self
            The updated AgentSet.

        Raises
        ------
        KeyError
            If some agents are not in the AgentSet.
        """
        ...

    @abstractmethod
    def do(self, behavior: Behavior, *args: Any, **kwargs: Any) -> Self:
        """Invoke a behavior on every agent of the AgentSet, in the current order.

        Parameters
        ----------
        behavior : str | Callable[..., Any]
            The name of a behavior registered on the model, the name of an agent
            method, or a callable taking the agent as first argument.
        *args : Any
            Positional arguments passed unchanged to every call.
        **kwargs : Any
            Keyword arguments passed unchanged to every call.

        Returns
        -------
        Self
            The AgentSet.

        Raises
        ------
        UnknownBehaviorError
            If the behavior name cannot be resolved for an agent.
        """
        ...

    @abstractmethod
    def shuffle_do(self, behavior: Behavior, *args: Any, **kwargs: Any) -> Self:
        """Invoke a behavior on every agent of the AgentSet, in a random order.

        The order is drawn once per call from the model's random stream.

        Parameters
        ----------
        behavior : str | Callable[..., Any]
            See ``do``.
        *args : Any
            Positional arguments passed unchanged to every call.
        **kwargs : Any
            Keyword arguments passed unchanged to every call.

        Returns
        -------
        Self
            The AgentSet.
        """
        ...

    @abstractmethod
    def select(
        self,
        predicate: Callable[[Agent], bool] | None = None,
        at_most: int | None = None,
        inplace: bool = False,
    ) -> Self:
        """Select the agents satisfying a predicate, preserving their relative order.

        Parameters
        ----------
        predicate : Callable[[Agent], bool] | None, optional
            The condition to satisfy. If None, every agent is selected.
        at_most : int | None, optional
            Keep at most the first ``at_most`` selected agents.
        inplace : bool, optional
            Whether to restrict this AgentSet or return a new one, by default False.

        Returns
        -------
        Self
            The selected agents.
        """
        ...

    @abstractmethod
    def group_by(self, key: GroupKey) -> dict[Hashable, Self]:
        """Partition the agents by a key.

        Parameters
        ----------
        key : str | Callable[[Agent], Hashable]
            An attribute name or a function computing the key of an agent.

        Returns
        -------
        dict[Hashable, Self]
            A mapping from each distinct key value to the AgentSet of agents
            sharing it. Every agent belongs to exactly one group and empty groups
            are omitted.
        """
        ...

    @abstractmethod
    def shuffle(self, inplace: bool = False) -> Self:
        """Randomly permute agent order.

        Parameters
        ----------
        inplace : bool, optional
            Whether to mutate in place or return a shuffled copy, by default False.

        Returns
        -------
        Self
            The shuffled AgentSet.
        """
        ...

    @abstractmethod
    def sort(
        self,
        key: str | Callable[[Agent], Any],
        ascending: bool = True,
        inplace: bool = False,
    ) -> Self:
        """Sort agents by an attribute name or a key function.

        Parameters
        ----------
        key : str | Callable[[Agent], Any]
            The attribute name or key function.
        ascending : bool, optional
            Sort order, by default True.
        inplace : bool, optional
            Whether to mutate in place or return a sorted copy, by default False.

        Returns
        -------
        Self
            The sorted AgentSet.
        """
        ...

    @abstractmethod
    def get(self, attr_name: str) -> list[Any]:
        """Retrieve an attribute of every agent, in the current order.

        Parameters
        ----------
        attr_name : str
            A name registered in the model's agent attribute registry.

        Returns
        -------
        list[Any]
            One value per agent.

        Raises
        ------
        UnknownAttributeError
            If the attribute is not registered.
        """
        ...

    @abstractmethod
    def set(self, attr_name: str, value: Any) -> Self:
        """Set an attribute on every agent.

        Parameters
        ----------
        attr_name : str
            The attribute to set.
        value : Any
            The value. A callable is called with each agent to compute its value.

        Returns
        -------
        Self
            The AgentSet.
        """
        ...

    def agg(self, attr_name: str, func: Callable[[list[Any]], Any]) -> Any:
        """Aggregate an attribute over the agents with ``func`` (for example ``sum``)."""
        return func(self.get(attr_name))

    def contains(self, agent: Agent | int) -> bool:
        """Check whether an agent, or a unique id, is in the AgentSet."""
        unique_id = agent.unique_id if isinstance(agent, Agent) else agent
        return unique_id in self._agents

    @property
    def ids(self) -> list[int]:
        """The unique ids of the agents, in the current order."""
        return list(self._agents)

    @property
    def model(self) -> mesa_lite.concrete.model.Model:
        return self._model

    @property
    def random(self) -> mesa_lite.rng.RandomStream:
        """The random stream of the model."""
        return self._model.random

    def __contains__(self, agent: object) -> bool:
        if isinstance(agent, (Agent, int)):
            return self.contains(agent)
        return False

    def __getitem__(self, unique_id: int) -> Agent:
        return self._agents[unique_id]

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents.values()))

    def __len__(self) -> int:
        return len(self._agents)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} agents)"
