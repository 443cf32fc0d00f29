"""
Exception types raised by mesa-lite.

Every error raised deliberately by the library derives from MesaLiteError, so
callers can catch the whole family at once. Each class also derives from the
closest built-in exception, which keeps ``except ValueError`` style handlers in
user code working.

Classes:
    MesaLiteError:
        Base class of the hierarchy.
    InvalidParameterError:
        Bad construction arguments (negative population, capacity < 1, ...).
    CapacityExceededError:
        Placing an agent into a cell that is already full.
    EmptyInputError:
        Drawing at random from an empty collection.
    UnknownAttributeError:
        A reporter or attribute name that is not registered.
    UnknownBehaviorError:
        An activation names a behavior that cannot be resolved.
    ImmovableAgentError:
        Relocating an agent tagged as fixed.
    ModelStateError:
        Stepping a finished model, or stepping re-entrantly.
"""

from __future__ import annotations


class MesaLiteError(Exception):
    """Base class for all mesa-lite errors."""


class InvalidParameterError(MesaLiteError, ValueError):
    """Raised when a model, grid or batch run is constructed with invalid arguments."""


class CapacityExceededError(MesaLiteError):
    """Raised when an agent is placed into a cell that has no remaining capacity.

    The occupancy of every cell is left untouched when this is raised. It is up
    to the calling behavior to pick another target or to skip its turn.
    """

    def __init__(
        self, coordinate: tuple[int, int] | None = None, capacity: int | None = None
    ) -> None:
        self.coordinate = coordinate
        self.capacity = capacity
        if coordinate is None:
            super().__init__("No cell has remaining capacity")
        else:
            super().__init__(f"Cell {coordinate} is full (capacity={capacity})")


class EmptyInputError(MesaLiteError, IndexError):
    """Raised when a random choice is requested from an empty collection."""


class UnknownAttributeError(MesaLiteError, KeyError):
    """Raised when a reporter requests an attribute name that is not registered."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = sorted(available) if available is not None else []
        super().__init__(name)

    def __str__(self) -> str:
        if self.available:
            return f"Unknown attribute '{self.name}'. Registered: {', '.join(self.available)}"
        return f"Unknown attribute '{self.name}'"


class UnknownBehaviorError(MesaLiteError, AttributeError):
    """Raised when an activation names a behavior that is neither registered nor an agent method."""


class ImmovableAgentError(MesaLiteError):
    """Raised when a placed agent tagged as fixed is asked to move."""


class ModelStateError(MesaLiteError, RuntimeError):
    """Raised when ``step()`` is called on a finished model or while a step is running."""
