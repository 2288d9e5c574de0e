"""Engine — random variates, trial loop and aggregation."""

from downtime_simulator.engine.random_variates import (
    NumpyUniformSource,
    RandomVariateGenerator,
    SequenceUniformSource,
    UniformSource,
)
from downtime_simulator.engine.trials import TrialRunner, compute_trial_cost
from downtime_simulator.engine.statistics import aggregate, sort_trials
from downtime_simulator.engine.orchestrator import run_simulation

__all__ = [
    "NumpyUniformSource",
    "RandomVariateGenerator",
    "SequenceUniformSource",
    "UniformSource",
    "TrialRunner",
    "compute_trial_cost",
    "aggregate",
    "sort_trials",
    "run_simulation",
]
