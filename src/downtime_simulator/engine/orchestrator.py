"""Simulation orchestrator — one full downtime-cost run.

Wires the random source, the trial runner and the aggregator:

  seed → RandomVariateGenerator → TrialRunner.run → sort → aggregate

Entry point: ``run_simulation(downtime_hours, base_params, config)``.
"""

from __future__ import annotations

import logging
import time

from downtime_simulator.config.parameters import CostParameters
from downtime_simulator.config.simulation import SimulationConfig
from downtime_simulator.engine.random_variates import (
    NumpyUniformSource,
    RandomVariateGenerator,
    UniformSource,
)
from downtime_simulator.engine.statistics import aggregate, sort_trials
from downtime_simulator.engine.trials import TrialRunner
from downtime_simulator.models.results import SimulationResult

logger = logging.getLogger(__name__)


def make_generator(
    config: SimulationConfig,
    source: UniformSource | None = None,
) -> RandomVariateGenerator:
    """Generator for a run: explicit ``source`` wins, else seeded from config."""
    if source is None:
        source = NumpyUniformSource.from_seed(config.random_seed)
    return RandomVariateGenerator(source)


def run_simulation(
    downtime_hours: float,
    base_params: CostParameters,
    config: SimulationConfig | None = None,
    *,
    source: UniformSource | None = None,
    include_trials: bool = True,
    deadline: float | None = None,
) -> SimulationResult:
    """Run a Monte-Carlo downtime-cost simulation.

    Parameters
    ----------
    downtime_hours : float
        Hours the equipment is down (≥ 0).
    base_params : CostParameters
        Mean cost inputs.
    config : SimulationConfig | None
        Iterations, variation coefficients, seed, timeout.  None = defaults.
    source : UniformSource | None
        Override the uniform source (tests).  Takes precedence over
        ``config.random_seed``.
    include_trials : bool
        Attach the sorted trial list to the result.  Statistics are computed
        either way.
    deadline : float | None
        Absolute ``time.monotonic()`` deadline shared with the caller's other
        runs.  None derives one from ``config.timeout_seconds``.

    Returns
    -------
    SimulationResult
    """
    if config is None:
        config = SimulationConfig()

    started = time.perf_counter()
    runner = TrialRunner(make_generator(config, source))
    trials = sort_trials(runner.run(downtime_hours, base_params, config, deadline))
    stats = aggregate(trials)

    logger.info(
        "Simulated %d trials for %.2fh downtime in %.3fs (mean=%.2f, stdDev=%.2f)",
        config.iterations, downtime_hours, time.perf_counter() - started,
        stats.mean, stats.std_dev,
    )

    return SimulationResult(
        trials=trials if include_trials else [],
        stats=stats,
        iterations=config.iterations,
        parameters=config,
        base_params=base_params,
        downtime_hours=downtime_hours,
    )
