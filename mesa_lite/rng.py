"""
Seeded random stream shared by every component of one model.

The stream wraps a ``numpy.random.Generator`` created with
``numpy.random.default_rng``. A model owns exactly one RandomStream, and agents,
cells and agent sets reach it through their model reference. There is no
process-wide generator: two models never share random state, which makes
parallel batch runs safe without any locking.

Given the same seed and the same sequence of calls, every method returns the
same values on every run.

Usage:
    from mesa_lite.rng import RandomStream

    stream = RandomStream(42)
    order = stream.shuffle(["a", "b", "c"])
    pick = stream.choice(order)
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import TypeVar

import numpy as np

from mesa_lite.exceptions import EmptyInputError, InvalidParameterError

T = TypeVar("T")


def _as_sequence(items: Collection[T]) -> Sequence[T]:
    if isinstance(items, Sequence):
        return items
    return list(items)


class RandomStream:
    """Deterministic pseudo-random stream.

    Parameters
    ----------
    seed : int | Sequence[int] | None, optional
        The seed of the stream. If None, a fresh seed is drawn from the OS
        entropy pool and stored so that the run can be reproduced.
    """

    _generator: np.random.Generator
    _seed: int | Sequence[int]

    def __init__(self, seed: int | Sequence[int] | None = None) -> None:
        self.seed(seed)

    def seed(self, value: int | Sequence[int] | None = None) -> None:
        """Initialize or reinitialize the stream.

        Parameters
        ----------
        value : int | Sequence[int] | None, optional
            The new seed; if None, a new entropy seed is drawn.
        """
        if value is None:
            value = np.random.SeedSequence().entropy
        self._seed = value
        self._generator = np.random.default_rng(seed=value)

    @property
    def seed_value(self) -> int | Sequence[int]:
        """The seed the stream was last initialized with."""
        return self._seed

    @property
    def generator(self) -> np.random.Generator:
        """The underlying numpy generator."""
        return self._generator

    def random(self) -> float:
        """Return a float drawn uniformly from [0, 1)."""
        return float(self._generator.random())

    def integers(self, low: int, high: int | None = None) -> int:
        """Return an int drawn uniformly from [low, high), or [0, low) if high is None."""
        return int(self._generator.integers(low, high))

    def choice(self, sequence: Collection[T]) -> T:
        """Return one uniformly selected element.

        Parameters
        ----------
        sequence : Collection[T]
            The elements to choose from.

        Returns
        -------
        T
            The selected element.

        Raises
        ------
        EmptyInputError
            If ``sequence`` is empty.
        """
        items = _as_sequence(sequence)
        if len(items) == 0:
            raise EmptyInputError("Cannot choose from an empty sequence")
        return items[int(self._generator.integers(len(items)))]

    def shuffle(self, sequence: Collection[T]) -> list[T]:
        """Return a new list holding a uniform random permutation of ``sequence``.

        The input is not modified.
        """
        items = _as_sequence(sequence)
        return [items[int(i)] for i in self._generator.permutation(len(items))]

    def choices(self, population: Collection[T], k: int) -> list[T]:
        """Return ``k`` independent uniform selections, with replacement.

        Raises
        ------
        InvalidParameterError
            If ``k`` is negative.
        EmptyInputError
            If ``k`` is positive and ``population`` is empty.
        """
        if k < 0:
            raise InvalidParameterError(f"k must be non-negative, got {k}")
        if k == 0:
            return []
        items = _as_sequence(population)
        if len(items) == 0:
            raise EmptyInputError("Cannot choose from an empty population")
        indices = self._generator.integers(0, len(items), size=k)
        return [items[int(i)] for i in indices]

    def __repr__(self) -> str:
        return f"RandomStream(seed={self._seed!r})"
