"""
Named attribute accessors used by reporters.

Reporters in mesa-lite refer to agent and model values by name. Instead of
looking names up with ``getattr`` at collection time, every model carries two
explicit registries mapping a name to a pure accessor function: one for agents
and one for the model itself. Data collectors resolve their reporter names
against these registries when they are constructed, so a typo fails
immediately with UnknownAttributeError instead of silently producing a column
of defaults.

Classes:
    AttributeRegistry:
        Mapping from an attribute name to an accessor function.

Functions:
    get_attribute:
        Read a registered attribute of an agent.
    gini:
        Gini coefficient of a wealth distribution.
    default_agent_attributes / default_model_attributes:
        Registries pre-populated with the built-in names.

Usage:
    model.agent_attributes.register("is_rich", lambda agent: agent.wealth > 3)
    get_attribute(agent, "is_rich")
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Self

import numpy as np

from mesa_lite.exceptions import UnknownAttributeError


class AttributeRegistry:
    """A registry of named accessor functions.

    Parameters
    ----------
    accessors : dict[str, Callable[[Any], Any]] | None, optional
        Initial accessors, by default None.
    """

    _accessors: dict[str, Callable[[Any], Any]]

    def __init__(self, accessors: dict[str, Callable[[Any], Any]] | None = None) -> None:
        self._accessors = dict(accessors or {})

    def register(self, name: str, accessor: Callable[[Any], Any]) -> None:
        """Register (or replace) the accessor of ``name``."""
        self._accessors[name] = accessor

    def resolve(self, name: str) -> Callable[[Any], Any]:
        """Return the accessor registered under ``name``.

        Raises
        ------
        UnknownAttributeError
            If ``name`` is not registered.
        """
        try:
            return self._accessors[name]
        except KeyError:
            raise UnknownAttributeError(name, list(self._accessors)) from None

    def get(self, obj: Any, name: str) -> Any:
        """Read ``name`` from ``obj`` through its accessor."""
        return self.resolve(name)(obj)

    @property
    def names(self) -> list[str]:
        return list(self._accessors)

    def copy(self) -> Self:
        return self.__class__(self._accessors)

    def __contains__(self, name: object) -> bool:
        return name in self._accessors

    def __iter__(self) -> Iterator[str]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)


def gini(wealths: Iterable[int | float]) -> float:
    """Compute the Gini coefficient of a wealth distribution.

    Uses the sorted-rank formula ``2 * sum(i * x_i) / (n * sum(x)) - (n + 1) / n``
    with ``i = 1..n`` over the values in ascending order.

    Parameters
    ----------
    wealths : Iterable[int | float]
        The wealth of every agent.

    Returns
    -------
    float
        The coefficient, in [0, 1). NaN for an empty distribution and 0.0 when
        the total wealth is zero.
    """
    values = np.sort(np.fromiter(wealths, dtype=np.float64))
    n = values.size
    if n == 0:
        return float("nan")
    total = values.sum()
    if total == 0 or np.allclose(values, values[0]):
        return 0.0
    index = np.arange(1, n + 1, dtype=np.float64)
    return float((2.0 * np.dot(index, values) / (n * total)) - (n + 1) / n)


def get_attribute(agent: Any, name: str) -> Any:
    """Read a registered attribute of an agent.

    Parameters
    ----------
    agent : mesa_lite.concrete.agent.Agent
        The agent to read from.
    name : str
        A name registered in ``agent.model.agent_attributes``.

    Returns
    -------
    Any
        The attribute value.

    Raises
    ------
    UnknownAttributeError
        If ``name`` is not registered.
    """
    return agent.model.agent_attributes.get(agent, name)


def _coordinate(index: int) -> Callable[[Any], int | None]:
    def accessor(agent: Any) -> int | None:
        return None if agent.cell is None else agent.cell.coordinate[index]

    return accessor


def default_agent_attributes() -> AttributeRegistry:
    return AttributeRegistry(
        {
            "unique_id": lambda agent: agent.unique_id,
            "wealth": lambda agent: agent.wealth,
            "group": lambda agent: agent.group,
            "x": _coordinate(0),
            "y": _coordinate(1),
        }
    )


def default_model_attributes() -> AttributeRegistry:
    return AttributeRegistry(
        {
            "steps": lambda model: model.steps,
            "population": lambda model: len(model.population),
            "total_wealth": lambda model: sum(a.wealth for a in model.population),
            "gini": lambda model: gini(a.wealth for a in model.population),
        }
    )
