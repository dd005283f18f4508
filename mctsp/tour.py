from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidTourError
from .tsp import DistanceTable


@dataclass(frozen=True)
class Tour:
    """Closed tour: N+1 city indices, the first N a permutation of 0..N-1, the last equal to the first."""
    cities: Tuple[int, ...]

    def __post_init__(self):
        cities = tuple(int(c) for c in self.cities)
        object.__setattr__(self, "cities", cities)
        if len(cities) < 2:
            raise InvalidTourError("a tour needs at least one city plus the closing return")
        if cities[0] != cities[-1]:
            raise InvalidTourError(f"tour does not return to its start city {cities[0]}")
        n = len(cities) - 1
        if sorted(cities[:-1]) != list(range(n)):
            raise InvalidTourError(f"tour is not a permutation of cities 0..{n - 1}: {cities[:-1]}")

    @classmethod
    def from_order(cls, order: Sequence[int]) -> Tour:
        order = list(order)
        if not order:
            raise InvalidTourError("cannot build a tour over zero cities")
        return cls(tuple(order) + (order[0],))

    @property
    def n_cities(self) -> int:
        return len(self.cities) - 1

    @property
    def order(self) -> Tuple[int, ...]:
        return self.cities[:-1]

    def edges(self) -> Iterator[Tuple[int, int]]:
        return zip(self.cities[:-1], self.cities[1:])

    def rotated(self, k: int) -> Tour:
        """Same cycle started from position k of the visiting order."""
        order = self.order
        k %= len(order)
        return Tour.from_order(order[k:] + order[:k])

    def reversed(self) -> Tour:
        return Tour(self.cities[::-1])

    def __len__(self) -> int:
        return len(self.cities)

    def __iter__(self):
        return iter(self.cities)

    def __getitem__(self, k):
        return self.cities[k]

    def __str__(self) -> str:
        return " -> ".join(str(c) for c in self.cities)


def measure_tour(tour: Tour, table: DistanceTable) -> float:
    if tour.n_cities != table.size:
        raise ValueError(f"tour over {tour.n_cities} cities measured against a table of {table.size}")
    idx = np.asarray(tour.cities, dtype=np.intp)
    return float(table.matrix[idx[:-1], idx[1:]].sum())


class TourSampler:
    """Draws uniformly random closed tours from one owned random stream."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def sample(self, n: int) -> Tour:
        if n < 1:
            raise ValueError("cannot sample a tour over zero cities")
        order: List[int] = list(range(n))
        self.rng.shuffle(order)
        return Tour.from_order(order)
