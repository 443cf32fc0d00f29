"""
Built-in agent behaviors.

Behaviors are plain functions taking the agent as first argument. They are
registered on every model under their function name (see
``Model.behaviors``) and are activated by name:

    model.agents.shuffle_do("move")
    model.agents.shuffle_do("give_money")

Behaviors dispatch on the agent's capability tags rather than on its class:
fixed agents never move, and agents without a cell neither move nor give
money to cellmates.

Every random draw goes through the model's RandomStream, so a run is fully
determined by its seed.
"""

from __future__ import annotations

from mesa_lite.concrete.agent import Agent
from mesa_lite.concrete.cell import Cell
from mesa_lite.exceptions import CapacityExceededError, ImmovableAgentError, InvalidParameterError


def transfer(giver: Agent, receiver: Agent, amount: int = 1) -> None:
    """Move ``amount`` units of wealth from ``giver`` to ``receiver``.

    Raises
    ------
    InvalidParameterError
        If ``amount`` is negative or larger than the giver's wealth.
    """
    if amount < 0 or amount > giver.wealth:
        raise InvalidParameterError(
            f"Agent {giver.unique_id} cannot give {amount} (wealth={giver.wealth})"
        )
    giver.wealth -= amount
    receiver.wealth += amount


def relocate(agent: Agent, cell: Cell) -> frozenset[int]:
    """Move an agent to ``cell`` on its model's grid.

    Raises
    ------
    ImmovableAgentError
        If the agent is tagged as fixed and is already placed.
    CapacityExceededError
        If ``cell`` is full.
    """
    if agent.is_fixed and agent.is_placed:
        raise ImmovableAgentError(f"Agent {agent.unique_id} is fixed at {agent.pos}")
    return agent.model.grid.place(agent, cell)


def move(agent: Agent) -> None:
    """Move to a random neighboring cell.

    Fixed and unplaced agents stay where they are. If the chosen cell is full
    the agent skips its turn.
    """
    if not agent.is_movable or agent.cell is None or not agent.cell.neighbors:
        return
    destination = agent.random.choice(agent.cell.neighbors)
    try:
        relocate(agent, destination)
    except CapacityExceededError:
        return


def give_money(agent: Agent) -> None:
    """Give one unit of wealth to a random cellmate, if the agent has any wealth."""
    if agent.wealth <= 0 or agent.cell is None:
        return
    cellmates = [other for other in agent.cell.agents if other is not agent]
    if cellmates:
        transfer(agent, agent.random.choice(cellmates))


def exchange(agent: Agent) -> None:
    """Give one unit of wealth to a random agent of the whole population.

    The recipient may be the agent itself, in which case nothing changes.
    """
    if agent.wealth <= 0:
        return
    transfer(agent, agent.random.choice(agent.model.population))


BUILTIN_BEHAVIORS = {
    "move": move,
    "give_money": give_money,
    "exchange": exchange,
}
