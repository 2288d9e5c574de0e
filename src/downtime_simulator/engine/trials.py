"""Trial runner — N independent perturbed cost evaluations.

Per trial, each cost input is drawn from N(mean, mean × CoV) and clamped to
≥ 0 (employee counts are also rounded half-up to whole people).  The cost
breakdown is then:

  revenue_loss = downtime_hours × revenue_per_hour
  labor_cost   = downtime_hours × affected_employees × hourly_wage
  depreciation = equipment_value × 0.001 × (downtime_hours / 8760)
  total_cost   = revenue_loss + labor_cost + depreciation

No trial reads another's output.
"""

from __future__ import annotations

import logging
import math
import numbers
import time

from downtime_simulator.config.parameters import CostParameters
from downtime_simulator.config.simulation import SimulationConfig
from downtime_simulator.engine.random_variates import RandomVariateGenerator
from downtime_simulator.errors import (
    InvalidConfigurationError,
    InvalidInputError,
    SimulationTimeoutError,
)
from downtime_simulator.models.results import Trial

logger = logging.getLogger(__name__)

ANNUAL_DEPRECIATION_RATE = 0.001
"""0.1% of equipment value per year of downtime."""

HOURS_PER_YEAR = 8760


def deadline_for(config: SimulationConfig | None) -> float | None:
    """Absolute ``time.monotonic()`` deadline for a call starting now.

    Entry points compute this once and hand it to every run they make, so
    ``timeout_seconds`` bounds the whole call rather than each run.
    """
    if config is None or config.timeout_seconds is None:
        return None
    return time.monotonic() + config.timeout_seconds


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from −∞ (2.5 → 3, −2.5 → −2)."""
    return int(math.floor(value + 0.5))


def compute_trial_cost(
    downtime_hours: float,
    revenue_per_hour: float,
    affected_employees: float,
    hourly_wage: float,
    equipment_value: float,
    iteration_index: int = 0,
) -> Trial:
    """Deterministic cost breakdown for one set of (already sampled) inputs."""
    revenue_loss = downtime_hours * revenue_per_hour
    labor_cost = downtime_hours * affected_employees * hourly_wage
    depreciation = equipment_value * ANNUAL_DEPRECIATION_RATE * (downtime_hours / HOURS_PER_YEAR)
    return Trial(
        revenue_loss=revenue_loss,
        labor_cost=labor_cost,
        depreciation=depreciation,
        total_cost=revenue_loss + labor_cost + depreciation,
        iteration_index=iteration_index,
    )


def validate_run_inputs(downtime_hours: float, config: SimulationConfig) -> None:
    """Reject inputs pydantic could not (constructed models, raw floats)."""
    if config.iterations is None or config.iterations <= 0:
        raise InvalidConfigurationError(
            f"iterations must be positive, got {config.iterations}"
        )
    if isinstance(downtime_hours, bool) or not isinstance(downtime_hours, numbers.Real):
        raise InvalidInputError(f"downtime_hours must be a number, got {downtime_hours!r}")
    if math.isnan(downtime_hours) or downtime_hours < 0:
        raise InvalidInputError(f"downtime_hours must be >= 0, got {downtime_hours}")
    if math.isinf(downtime_hours):
        raise InvalidInputError("downtime_hours must be finite")
    for name in (
        "revenue_variation", "employee_variation",
        "wage_variation", "equipment_value_variation",
    ):
        if getattr(config, name) < 0:
            raise InvalidConfigurationError(f"{name} must be >= 0")


class TrialRunner:
    """Executes the trial loop for one run.

    Parameters
    ----------
    generator : RandomVariateGenerator
        Source of normal variates.  Inject a seeded one for reproducibility.
    """

    def __init__(self, generator: RandomVariateGenerator) -> None:
        self._gen = generator

    def _draw(self, mean: float, cov: float) -> float:
        return max(0.0, self._gen.sample(mean, mean * cov))

    def run_one(
        self,
        downtime_hours: float,
        base: CostParameters,
        config: SimulationConfig,
        iteration_index: int,
    ) -> Trial:
        """Sample inputs once and return the resulting trial."""
        revenue_per_hour = self._draw(base.revenue_per_hour, config.revenue_variation)
        affected_employees = max(0, round_half_up(self._gen.sample(
            base.affected_employees,
            base.affected_employees * config.employee_variation,
        )))
        hourly_wage = self._draw(base.hourly_wage, config.wage_variation)
        equipment_value = self._draw(base.equipment_value, config.equipment_value_variation)

        return compute_trial_cost(
            downtime_hours,
            revenue_per_hour,
            affected_employees,
            hourly_wage,
            equipment_value,
            iteration_index,
        )

    def run(
        self,
        downtime_hours: float,
        base: CostParameters,
        config: SimulationConfig,
        deadline: float | None = None,
    ) -> list[Trial]:
        """Run ``config.iterations`` trials in generation order.

        ``deadline`` is a ``time.monotonic()`` value shared with the rest of
        the call; when omitted it is derived from ``config.timeout_seconds``.
        It is checked after every trial.

        Raises
        ------
        InvalidConfigurationError
            ``iterations <= 0`` or a negative variation coefficient.
        InvalidInputError
            Negative or non-finite ``downtime_hours``.
        SimulationTimeoutError
            The deadline passed before the loop finished.
        """
        validate_run_inputs(downtime_hours, config)

        if deadline is None:
            deadline = deadline_for(config)

        trials: list[Trial] = []
        for i in range(config.iterations):
            trials.append(self.run_one(downtime_hours, base, config, i))
            if deadline is not None and time.monotonic() > deadline:
                logger.warning(
                    "Simulation ran past its deadline after %d of %d trials",
                    i + 1, config.iterations,
                )
                raise SimulationTimeoutError(
                    f"simulation exceeded its time budget "
                    f"({i + 1}/{config.iterations} trials done)"
                )
        return trials
