"""Sensitivity analysis — one-at-a-time parameter sweeps.

For each cost input and each relative variation ``v`` in its list, the input's
mean is scaled by ``(1 + v)``, a reduced simulation is run, and the mean total
cost is recorded.  Only one input moves at a time; there is no factorial
design.

Default sweep set (``config.sensitivity.DEFAULT_SWEEPS``):
  - revenue_per_hour    ±25%, ±50%
  - affected_employees  ±25%, ±50%
  - hourly_wage         ±10%, ±20%
  - equipment_value     ±25%, ±50%

Parameter names may be given as field names (``revenue_per_hour``) or as
their camelCase wire aliases (``revenuePerHour``); results are keyed by the
field name.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence

from downtime_simulator.config.parameters import CostParameters
from downtime_simulator.config.simulation import SimulationConfig
from downtime_simulator.engine.orchestrator import run_simulation
from downtime_simulator.engine.random_variates import UniformSource
from downtime_simulator.engine.trials import deadline_for, validate_run_inputs
from downtime_simulator.errors import InvalidInputError
from downtime_simulator.models.results import SensitivityBar, SensitivityResult

logger = logging.getLogger(__name__)


def resolve_parameter_name(name: str) -> str:
    """Map a field name or camelCase alias to the ``CostParameters`` field name."""
    fields = CostParameters.model_fields
    if name in fields:
        return name
    for field_name, info in fields.items():
        if info.alias == name:
            return field_name
    raise InvalidInputError(
        f"unknown cost parameter {name!r}; expected one of {sorted(fields)}"
    )


def normalize_sweeps(variation_set: Mapping[str, Sequence[float]]) -> dict[str, list[float]]:
    """Resolve names and coerce variations to floats, keeping caller order."""
    sweeps: dict[str, list[float]] = {}
    for name, variations in variation_set.items():
        field_name = resolve_parameter_name(name)
        try:
            sweeps[field_name] = [float(v) for v in variations]
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(
                f"variations for {name!r} must be numbers, got {variations!r}"
            ) from exc
    return sweeps


def perturb(base: CostParameters, parameter: str, variation: float) -> CostParameters:
    """Copy of ``base`` with one field scaled by ``(1 + variation)``.

    Scaling below zero (variation < −1) is clamped to 0.
    """
    value = getattr(base, parameter) * (1 + variation)
    return base.model_copy(update={parameter: max(0.0, value)})


def tornado_bars(result: SensitivityResult) -> list[SensitivityBar]:
    """One bar per swept parameter, largest swing first."""
    bars: list[SensitivityBar] = []
    for parameter, points in result.by_parameter.items():
        if not points:
            continue
        low_v = min(points)
        high_v = max(points)
        bars.append(SensitivityBar(
            parameter=parameter,
            low_variation=low_v,
            high_variation=high_v,
            mean_at_low=points[low_v],
            mean_at_high=points[high_v],
            swing=round(abs(points[high_v] - points[low_v]), 2),
        ))
    bars.sort(key=lambda b: b.swing, reverse=True)
    return bars


def analyze(
    downtime_hours: float,
    base_params: CostParameters,
    variation_set: Mapping[str, Sequence[float]],
    config: SimulationConfig | None = None,
    *,
    source: UniformSource | None = None,
    deadline: float | None = None,
) -> SensitivityResult:
    """Run a one-at-a-time sensitivity sweep.

    Parameters
    ----------
    downtime_hours : float
        Downtime used for every sweep point.
    base_params : CostParameters
        Unperturbed mean inputs.
    variation_set : Mapping[str, Sequence[float]]
        Parameter name → relative variations.  An empty mapping yields an
        empty result.
    config : SimulationConfig | None
        Variation coefficients, seed and timeout shared by every point.  Each
        point runs ``config.sensitivity_iterations`` trials.
    source : UniformSource | None
        Shared uniform source for all points (tests).  When omitted each point
        gets its own generator; with ``config.random_seed`` set, point ``i``
        is seeded with ``random_seed + i`` so repeated calls reproduce.
    deadline : float | None
        Absolute ``time.monotonic()`` deadline for the whole sweep.  None
        derives one from ``config.timeout_seconds`` when the sweep starts.

    Returns
    -------
    SensitivityResult
    """
    if config is None:
        config = SimulationConfig()
    sweeps = normalize_sweeps(variation_set)

    point_config = config.model_copy(update={"iterations": config.sensitivity_iterations})
    validate_run_inputs(downtime_hours, point_config)
    started = time.perf_counter()
    if deadline is None:
        deadline = deadline_for(config)

    by_parameter: dict[str, dict[float, float]] = {}
    point = 0
    for parameter, variations in sweeps.items():
        by_parameter[parameter] = {}
        for variation in variations:
            run_config = point_config
            if source is None and config.random_seed is not None:
                run_config = point_config.model_copy(update={"random_seed": config.random_seed + point})
            result = run_simulation(
                downtime_hours,
                perturb(base_params, parameter, variation),
                run_config,
                source=source,
                include_trials=False,
                deadline=deadline,
            )
            mean = round(result.stats.mean, 2)
            by_parameter[parameter][variation] = mean
            logger.debug("Sensitivity %s %+.2f → mean %.2f", parameter, variation, mean)
            point += 1

    logger.info(
        "Sensitivity sweep: %d points over %d parameters in %.3fs",
        point, len(sweeps), time.perf_counter() - started,
    )
    return SensitivityResult(by_parameter)
