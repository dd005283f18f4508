from __future__ import annotations
import sys
from typing import Optional, Protocol, TextIO

import pandas as pd

from .tour import Tour
from .tsp import DistanceTable

MODES = (0, 1, 2)


class ReportingSink(Protocol):
    """Receives trials while the search runs and the best tour once it ends."""

    def report_trial(self, index: int, tour: Tour, length: float, table: DistanceTable) -> None:
        ...

    def report_best(self, best_tour: Optional[Tour], table: DistanceTable,
                    best_length: float, n_trials: int) -> None:
        ...


class ConsoleReporter:
    """Plain-text reporter.

    mode 0 prints only the final report, mode 1 adds one line per sampled
    path, mode 2 also breaks every path down edge by edge and prints the
    cities and the distance matrix with the final report.
    """

    def __init__(self, mode: int = 0, stream: Optional[TextIO] = None, precision: int = 4):
        if mode not in MODES:
            raise ValueError(f"invalid mode {mode}, choose 0, 1 or 2")
        self.mode = mode
        self.stream = stream
        self.precision = precision
        self._trials_printed = 0

    def _print(self, *args):
        print(*args, file=self.stream if self.stream is not None else sys.stdout)

    def _fmt(self, value: float) -> str:
        return f"{value:.{self.precision}f}"

    def report_trial(self, index: int, tour: Tour, length: float, table: DistanceTable) -> None:
        if self.mode == 0:
            return
        if self._trials_printed == 0:
            self._print("POSSIBLE PATHS:")
        self._trials_printed += 1
        self._print(f"{index + 1:>6}: {tour}  length = {self._fmt(length)}")
        if self.mode == 2:
            for i, j in tour.edges():
                (xi, yi), (xj, yj) = table.coordinate(i), table.coordinate(j)
                self._print(f"        {i:>3} ({self._fmt(xi)}, {self._fmt(yi)}) -> "
                            f"{j:>3} ({self._fmt(xj)}, {self._fmt(yj)})  {self._fmt(table[i, j])}")

    def report_best(self, best_tour: Optional[Tour], table: DistanceTable,
                    best_length: float, n_trials: int) -> None:
        if self._trials_printed:
            self._print()
        if self.mode == 2:
            fmt = self._fmt
            self._print("CITIES:")
            cities = pd.DataFrame(table.coords, columns=["x", "y"])
            self._print(cities.to_string(float_format=fmt))
            self._print()
            self._print("DISTANCE MATRIX:")
            self._print(pd.DataFrame(table.matrix).to_string(float_format=fmt))
            self._print()
        self._print("BEST PATH:")
        if best_tour is None:
            self._print("  none (no paths simulated)")
        else:
            self._print(f"  {best_tour}")
            self._print(f"LENGTH: {self._fmt(best_length)}")
        self._print(f"SIMULATIONS: {n_trials}")
