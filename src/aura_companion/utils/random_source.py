"""
Random-source abstraction.

Every non-deterministic decision in the companion (template choice,
personalization, follow-up scheduling, simulated latency) goes through a
'RandomSource' passed in at construction, so tests can seed it or replace it
with a scripted source that forces a specific branch.
"""

import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource(ABC):
    @abstractmethod
    def random(self) -> float:
        """Return a float in [0, 1)."""
        pass

    @abstractmethod
    def uniform(self, low: float, high: float) -> float:
        pass

    @abstractmethod
    def choice(self, items: Sequence[T]) -> T:
        """Return one element of a non-empty sequence, uniformly."""
        pass


class SeededRandomSource(RandomSource):
    """'random.Random' behind the 'RandomSource' interface. 'seed=None' seeds from the OS."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(items)
