"""Command line entry point: ``mctsp -n <ITER> -m <MODE> -f <FILE>``."""
from __future__ import annotations
import argparse
import logging
import re
from typing import List, Optional

from .errors import ConfigurationError, MCTSPError, TrialCountOverflowError, MAX_TRIALS
from .montecarlo import MCConfig, MonteCarloSearch
from .report import MODES, ConsoleReporter
from .tsp import TSPInstance

logger = logging.getLogger(__name__)

EPILOG = """\
Example:
  mctsp -n 5 -m 0 -f data/grid04_xy.txt   # Simulates 5 paths for 4 cities data file
"""


def parse_trial_count(text: str) -> int:
    if re.fullmatch(r"-[0-9]+", text):
        raise ConfigurationError("number of simulations must not be negative")
    if not re.fullmatch(r"[0-9]+", text):
        raise ConfigurationError("number of simulations must be an integer")
    digits = text.lstrip("0") or "0"
    # int() refuses very long digit strings, so compare lengths first
    if len(digits) > len(str(MAX_TRIALS)):
        raise TrialCountOverflowError(digits)
    n = int(digits)
    if n > MAX_TRIALS:
        raise TrialCountOverflowError(n)
    return n


def parse_mode(text: str) -> int:
    try:
        mode = int(text.strip(), 10)
    except ValueError:
        mode = None
    if mode not in MODES:
        raise ConfigurationError("invalid mode, choose 0, 1 or 2")
    return mode


def parse_seed(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        return int(text.strip(), 10)
    except ValueError:
        raise ConfigurationError("seed must be an integer") from None


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mctsp",
        description="Find best path to Traveling Salesman Problem using Monte Carlo Method",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-n", dest="iters", metavar="ITER", required=True, help="number of paths to simulate")
    p.add_argument("-m", dest="mode", metavar="MODE", required=True, help="exhibition mode 0, 1 or 2 (silent = 0)")
    p.add_argument("-f", dest="file", metavar="FILE", required=True, help="cities coordinates file")
    p.add_argument("--seed", default=None, help="seed for the random path generator (default: OS entropy)")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="diagnostics level on stderr")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        cfg = MCConfig(n_trials=parse_trial_count(args.iters), mode=parse_mode(args.mode),
                       seed=parse_seed(args.seed))
        instance = TSPInstance.from_file(args.file)
        table = instance.distance_matrix()
    except MCTSPError as exc:
        logger.debug("aborting before the search: %r", exc)
        parser.error(str(exc))

    reporter = ConsoleReporter(mode=cfg.mode)
    MonteCarloSearch(table, cfg, sink=reporter).run()
    return 0
