"""Seedable random helpers used by every casino game and random event."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence  # noqa: TC003
from random import Random
from typing import TypeVar

_T = TypeVar("_T")


class CasinoRandomService:
    """Thin wrapper around :class:`random.Random` providing casino utilities.

    Games receive an instance through their constructor so tests and the RTP
    simulation can replay identical outcomes by seeding the service.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._random = Random(seed)  # noqa: S311

    @property
    def seed(self) -> int | None:
        """Return the base seed for the service (``None`` when unseeded)."""
        return self._seed

    def reseed(self, seed: int | None) -> None:
        """Reset the random generator to a new seed."""
        self._seed = seed
        self._random = Random(seed)  # noqa: S311

    def next_double(self) -> float:
        """Return a float in ``[0, 1)``."""
        return self._random.random()

    def next_int(self, upper: int) -> int:
        """Return an integer in ``[0, upper)``."""
        if upper <= 0:
            msg = "Upper bound must be positive."
            raise ValueError(msg)
        return self._random.randrange(upper)

    def next_bool(self) -> bool:
        """Return ``True`` or ``False`` with equal probability."""
        return self._random.random() < 0.5  # noqa: PLR2004

    def select_weighted(self, weights: Mapping[_T, float]) -> _T:
        """Pick a key from *weights*, proportionally to its weight."""
        if not weights:
            msg = "Cannot select from an empty weight table."
            raise ValueError(msg)
        total = sum(weights.values())
        remaining = self.next_double() * total
        for option, weight in weights.items():
            remaining -= weight
            if remaining <= 0:
                return option
        # Floating point drift can leave a tiny positive remainder.
        return list(weights)[-1]

    def select_random(self, population: Sequence[_T]) -> _T:
        """Return a uniform choice from *population*."""
        if not population:
            msg = "Cannot choose from an empty population."
            raise ValueError(msg)
        return population[self.next_int(len(population))]

    def shuffle(self, items: Iterable[_T]) -> tuple[_T, ...]:
        """Return a shuffled tuple of *items* using the service RNG."""
        mutable = list(items)
        self._random.shuffle(mutable)
        return tuple(mutable)

    def generate_crash_point(self, house_edge: float) -> float:
        """Draw a crash multiplier via inverse transform sampling.

        ``P(crash >= x) = (1 - house_edge) / x`` for ``x >= 1`` which keeps the
        expected return at ``1 - house_edge`` for any cash-out target. Rolls below
        the edge crash at 1.0.
        """
        roll = self.next_double()
        return max(1.0, (1 - house_edge) / (1 - roll))


__all__ = ["CasinoRandomService"]
