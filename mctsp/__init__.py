from .errors import MCTSPError, ConfigurationError, InputSourceError, TrialCountOverflowError, InvalidTourError
from .tsp import TSPInstance, DistanceTable, read_coordinates
from .tour import Tour, TourSampler, measure_tour
from .report import ReportingSink, ConsoleReporter
from .montecarlo import MCConfig, MCResult, Incumbent, MonteCarloSearch, search
from .experiments import run_repeated_trials, run_trial_count_sweep
