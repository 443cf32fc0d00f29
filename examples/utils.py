from dataclasses import dataclass

import mesa_lite


@dataclass
class SimulationResult:
    """Container for example simulation outputs.

    The collector holds both the model-level and the agent-level frames.
    """

    datacollector: mesa_lite.DataCollector
    steps: int
