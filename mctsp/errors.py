from __future__ import annotations
import sys
from typing import Union

# Largest trial count the search loop will accept.
MAX_TRIALS = sys.maxsize


class MCTSPError(Exception):
    """Base class for every error raised by mctsp."""


class ConfigurationError(MCTSPError, ValueError):
    """A run option is missing or cannot be parsed."""


class TrialCountOverflowError(ConfigurationError):
    def __init__(self, n_trials: Union[int, str]):
        super().__init__(f"number of simulations must be at most {MAX_TRIALS}, got {n_trials}")
        self.n_trials = n_trials


class InputSourceError(MCTSPError, ValueError):
    """The coordinate source is unreadable or holds a record that is not an (x, y) pair."""


class InvalidTourError(MCTSPError, ValueError):
    pass
