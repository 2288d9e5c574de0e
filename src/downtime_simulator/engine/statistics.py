"""Statistics aggregator — summary statistics over a trial set.

Percentiles use the nearest-rank convention with no interpolation: ``pK``
is the total cost of the trial at index ``floor(n × K / 100)`` of the
ascending sort.  The index is computed in integer arithmetic so it never
drifts from that definition through float rounding.  K ≤ 99, so the index is
always < n.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from downtime_simulator.errors import EmptyDatasetError
from downtime_simulator.models.results import Percentiles, SimulationStatistics, Trial

PERCENTILE_RANKS: tuple[int, ...] = (10, 25, 50, 75, 90, 95, 99)


def sort_trials(trials: Sequence[Trial]) -> list[Trial]:
    """Trials ascending by total cost.  Ties may come out in any order."""
    return sorted(trials, key=lambda t: t.total_cost)


def nearest_rank_index(n: int, rank: int) -> int:
    """Index of the ``rank``-th percentile in a sorted sample of size ``n``."""
    return (n * rank) // 100


def percentiles_from_sorted(sorted_costs: np.ndarray) -> Percentiles:
    n = len(sorted_costs)
    return Percentiles(**{
        f"p{k}": float(sorted_costs[nearest_rank_index(n, k)])
        for k in PERCENTILE_RANKS
    })


def aggregate(trials: Sequence[Trial]) -> SimulationStatistics:
    """Summarise the total cost of ``trials``.

    ``median`` is the nearest-rank p50.  ``std_dev`` is the population
    standard deviation (divide by n).

    Raises
    ------
    EmptyDatasetError
        ``trials`` is empty.
    """
    if not trials:
        raise EmptyDatasetError("cannot aggregate an empty trial set")

    costs = np.sort(np.fromiter((t.total_cost for t in trials), dtype=np.float64, count=len(trials)))
    pct = percentiles_from_sorted(costs)

    return SimulationStatistics(
        mean=float(costs.mean()),
        median=pct.p50,
        min=float(costs[0]),
        max=float(costs[-1]),
        std_dev=float(costs.std(ddof=0)),
        percentiles=pct,
    )
