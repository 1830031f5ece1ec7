"""Deterministic random helpers used across the game logic."""

from __future__ import annotations

from collections.abc import Iterable, Sequence  # noqa: TC003
from random import Random
from typing import Any, TypeVar

_T = TypeVar("_T")


class DeterministicRandomService:
    """Thin wrapper around :class:`random.Random` providing deterministic utilities."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)  # noqa: S311

    def uniform(self, low: float, high: float) -> float:
        """Return a float between *low* and *high*."""
        return self._random.uniform(low, high)

    def randint(self, low: int, high: int) -> int:
        """Return an integer between *low* and *high* inclusive."""
        return self._random.randint(low, high)

    def chance(self, probability: float) -> bool:
        """Return ``True`` with the given *probability*."""
        return self._random.random() < probability

    def choice(self, population: Sequence[_T]) -> _T:
        """Return a deterministic choice from *population*."""
        if not population:
            msg = "Cannot choose from an empty population."
            raise ValueError(msg)
        return population[self._random.randrange(len(population))]

    def shuffle(self, items: Iterable[_T]) -> tuple[_T, ...]:
        """Return a shuffled tuple of *items* using the service RNG."""
        mutable = list(items)
        self._random.shuffle(mutable)
        return tuple(mutable)

    def export_state(self) -> list[Any]:
        """Return the generator state in a JSON-friendly shape."""
        version, internal, gauss = self._random.getstate()
        return [version, list(internal), gauss]

    def restore_state(self, state: Sequence[Any]) -> None:
        """Restore a state previously produced by :meth:`export_state`."""
        version, internal, gauss = state
        self._random.setstate((version, tuple(internal), gauss))


__all__ = ["DeterministicRandomService"]
