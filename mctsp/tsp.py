from __future__ import annotations
import math
import operator
import random
import warnings
from dataclasses import dataclass
from typing import List, Tuple, Optional, Sequence, TYPE_CHECKING

import numpy as np

from .errors import InputSourceError

if TYPE_CHECKING:
    from .tour import Tour


def read_coordinates(path: str, delimiter: Optional[str] = None) -> np.ndarray:
    """Read one ``x y`` pair per line from a text file into an (N, 2) float array.

    Raises InputSourceError when the file cannot be opened, when a record is
    not a pair of finite numbers, or when the file holds no records.
    """
    try:
        with warnings.catch_warnings():
            # loadtxt warns on empty input; an empty file is reported below
            warnings.simplefilter("ignore", UserWarning)
            data = np.loadtxt(path, dtype=float, delimiter=delimiter, ndmin=2)
    except OSError as exc:
        raise InputSourceError(f"no such file or directory: {path}") from exc
    except ValueError as exc:
        raise InputSourceError(f"incompatible data file {path}: {exc}") from exc

    if data.size == 0:
        raise InputSourceError(f"incompatible data file {path}: no coordinates")
    if data.shape[1] != 2:
        raise InputSourceError(
            f"incompatible data file {path}: expected 2 values per line, got {data.shape[1]}")
    if not np.isfinite(data).all():
        raise InputSourceError(f"incompatible data file {path}: non-finite coordinate")
    return data


class DistanceTable:
    """Read-only N x N Euclidean distance matrix over a fixed set of cities."""

    def __init__(self, coords: np.ndarray, matrix: np.ndarray):
        n = coords.shape[0]
        if matrix.shape != (n, n):
            raise ValueError(f"distance matrix shape {matrix.shape} does not match {n} cities")
        self._coords = coords
        self._matrix = matrix
        self._coords.setflags(write=False)
        self._matrix.setflags(write=False)

    @classmethod
    def build(cls, coords: Sequence[Tuple[float, float]]) -> DistanceTable:
        xy = np.array(coords, dtype=float).reshape(-1, 2)
        if xy.shape[0] < 1:
            raise InputSourceError("at least one city is required")
        if not np.isfinite(xy).all():
            raise InputSourceError("coordinates must be finite numbers")
        with np.errstate(over="ignore", invalid="ignore"):
            diff = xy[:, None, :] - xy[None, :, :]
            D = np.hypot(diff[..., 0], diff[..., 1])
        # a tour crosses n edges, so n times the longest edge must stay finite too
        if not np.isfinite(D).all() or not math.isfinite(float(D.max()) * xy.shape[0]):
            raise InputSourceError("coordinates too far apart, distance overflows")
        return cls(xy, D)

    @property
    def size(self) -> int:
        return self._matrix.shape[0]

    def __len__(self) -> int:
        return self.size

    @property
    def coords(self) -> np.ndarray:
        return self._coords

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def _check(self, i) -> int:
        i = operator.index(i)
        if not 0 <= i < self.size:
            raise IndexError(f"city index {i} out of range for {self.size} cities")
        return i

    def distance(self, i: int, j: int) -> float:
        return float(self._matrix[self._check(i), self._check(j)])

    def __getitem__(self, key) -> float:
        i, j = key
        return self.distance(i, j)

    def coordinate(self, i: int) -> Tuple[float, float]:
        x, y = self._coords[self._check(i)]
        return float(x), float(y)


@dataclass
class TSPInstance:
    coords: List[Tuple[float, float]]
    name: str = "euclidean_tsp"

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: float = 100.0, name: str = "random_euclidean"):
        rng = random.Random(seed)
        coords = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    @staticmethod
    def from_file(path: str, name: Optional[str] = None, delimiter: Optional[str] = None):
        data = read_coordinates(path, delimiter=delimiter)
        coords = [(float(x), float(y)) for x, y in data]
        return TSPInstance(coords=coords, name=name or str(path))

    def n_cities(self) -> int:
        return len(self.coords)

    def distance(self, i: int, j: int) -> float:
        (x1, y1), (x2, y2) = self.coords[i], self.coords[j]
        return math.hypot(x1 - x2, y1 - y2)

    def distance_matrix(self) -> DistanceTable:
        return DistanceTable.build(self.coords)

    def tour_length(self, tour: Tour) -> float:
        return sum(self.distance(i, j) for i, j in tour.edges())
