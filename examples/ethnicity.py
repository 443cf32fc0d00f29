"""Wealth exchange restricted by group, built on ``AgentSet.group_by``.

Agents are tagged Green, Blue or Mixed. Green and Blue agents only give money
to agents of their own group, while Mixed agents give to anyone.
"""

from __future__ import annotations

from typing import Annotated

import typer

from mesa_lite import AgentSet, DataCollector, Model
from mesa_lite.concrete.agent import Agent
from mesa_lite.concrete.behaviors import transfer

GROUPS = ("Green", "Blue", "Mixed")


def give_within(agent: Agent, recipients: AgentSet) -> None:
    """Give one unit of wealth to a random member of ``recipients``."""
    if agent.wealth <= 0:
        return
    transfer(agent, agent.random.choice(list(recipients)))


class EthnicityModel(Model):
    def __init__(self, n: int, seed: int | None = None) -> None:
        super().__init__(seed=seed)
        self.behaviors["give_within"] = give_within
        self.create_agents(n)
        self.datacollector = DataCollector(
            model=self,
            model_reporters={
                group: (lambda model, group=group: group_wealth(model, group))
                for group in GROUPS
            },
            agent_reporters={"wealth": "wealth", "group": "group"},
        )

    def create_agent(self, unique_id: int) -> Agent:
        return Agent(self, unique_id, group=self.random.choice(GROUPS))

    def step(self) -> None:
        for group, members in self.agents.group_by("group").items():
            recipients = self.agents if group == "Mixed" else members
            members.shuffle_do("give_within", recipients)


def group_wealth(model: Model, group: str) -> int:
    return sum(a.wealth for a in model.population if a.group == group)


app = typer.Typer(add_completion=False)


@app.command()
def run(
    agents: Annotated[int, typer.Option(help="Number of agents to simulate.")] = 100,
    steps: Annotated[int, typer.Option(help="Number of model steps to run.")] = 20,
    seed: Annotated[int | None, typer.Option(help="Optional RNG seed.")] = None,
) -> None:
    model = EthnicityModel(agents, seed=seed)
    model.run_model(steps)
    typer.echo(f"Wealth by group over time:\n{model.datacollector.data['model']}")


if __name__ == "__main__":
    app()
