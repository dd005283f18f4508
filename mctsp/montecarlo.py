from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import ConfigurationError, TrialCountOverflowError, MAX_TRIALS
from .report import MODES, ReportingSink
from .tour import Tour, TourSampler, measure_tour
from .tsp import DistanceTable

logger = logging.getLogger(__name__)


@dataclass
class MCConfig:
    n_trials: int = 1000        # number of random paths to sample
    mode: int = 0               # reporting verbosity: 0 silent, 1 per-trial, 2 per-edge
    seed: Optional[int] = None  # None seeds from OS entropy
    record_history: bool = False  # keep the running minimum per trial and every improvement

    def validate(self) -> None:
        if isinstance(self.n_trials, bool) or not isinstance(self.n_trials, int):
            raise ConfigurationError(f"number of simulations must be an integer, got {self.n_trials!r}")
        if self.n_trials < 0:
            raise ConfigurationError(f"number of simulations must not be negative, got {self.n_trials}")
        if self.n_trials > MAX_TRIALS:
            raise TrialCountOverflowError(self.n_trials)
        if self.mode not in MODES:
            raise ConfigurationError(f"invalid mode {self.mode!r}, choose 0, 1 or 2")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")
        if not isinstance(self.record_history, bool):
            raise ConfigurationError(f"record_history must be a bool, got {self.record_history!r}")


@dataclass
class Incumbent:
    """Best tour seen so far. Only a strictly shorter tour replaces it."""
    tour: Optional[Tour] = None
    length: float = math.inf
    trial: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.tour is not None

    def offer(self, tour: Tour, length: float, trial: int) -> bool:
        if length < self.length:
            self.tour, self.length, self.trial = tour, length, trial
            return True
        return False


@dataclass
class MCResult:
    best_tour: Optional[Tour]
    best_length: float
    n_trials: int
    history_best_lengths: List[float]
    improvements: List[Tuple[int, Tour, float]]
    config: MCConfig
    elapsed_sec: float

    @property
    def found(self) -> bool:
        """False when no trial ran and there is no best tour to report."""
        return self.best_tour is not None


class MonteCarloSearch:
    def __init__(self, table: DistanceTable, cfg: MCConfig, sink: Optional[ReportingSink] = None,
                 sampler: Optional[TourSampler] = None):
        cfg.validate()
        self.D = table
        self.n = table.size
        self.cfg = cfg
        self.sink = sink
        self.sampler = sampler if sampler is not None else TourSampler(cfg.seed)

        self.incumbent = Incumbent()
        # filled only when cfg.record_history is set
        self.history_best_lengths: List[float] = []
        self.improvements: List[Tuple[int, Tour, float]] = []

    def run(self) -> MCResult:
        start = time.time()
        self.incumbent = Incumbent()
        self.history_best_lengths = []
        self.improvements = []
        verbose = self.sink is not None and self.cfg.mode > 0
        record = self.cfg.record_history

        logger.info("sampling %d paths over %d cities (seed=%s)", self.cfg.n_trials, self.n, self.cfg.seed)
        for t in range(self.cfg.n_trials):
            tour = self.sampler.sample(self.n)
            L = measure_tour(tour, self.D)
            if verbose:
                self.sink.report_trial(t, tour, L, self.D)
            if self.incumbent.offer(tour, L, t):
                logger.debug("trial %d: new best length %.6f", t, L)
                if record:
                    self.improvements.append((t, tour, L))
            if record:
                self.history_best_lengths.append(self.incumbent.length)

        if self.sink is not None:
            self.sink.report_best(self.incumbent.tour, self.D, self.incumbent.length, self.cfg.n_trials)

        elapsed = time.time() - start
        if self.incumbent.found:
            logger.info("best length %.6f found at trial %d", self.incumbent.length, self.incumbent.trial)
        else:
            logger.info("no paths simulated")
        return MCResult(best_tour=self.incumbent.tour, best_length=self.incumbent.length,
                        n_trials=self.cfg.n_trials, history_best_lengths=self.history_best_lengths,
                        improvements=self.improvements, config=self.cfg, elapsed_sec=elapsed)


def search(coords: Sequence[Tuple[float, float]], cfg: MCConfig,
           sink: Optional[ReportingSink] = None) -> MCResult:
    """Build the distance table for ``coords`` and run one search session over it."""
    return MonteCarloSearch(DistanceTable.build(coords), cfg, sink=sink).run()
