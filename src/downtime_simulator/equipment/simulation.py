"""Equipment-level entry points — simulation, sensitivity and risk report.

Each call fetches the equipment snapshot once, derives the mean cost inputs
from it, and hands off to the engine.  Base inputs are derived as:

  revenue_per_hour   = department_revenue_per_hour  (if > 0)
                       else value × 0.0001
  affected_employees = max(1, round_half_up(criticality × 2))
  hourly_wage        = default wage (50)
  equipment_value    = value

Simulation and sensitivity share this derivation.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from downtime_simulator.analysis.report import compose
from downtime_simulator.analysis.risk import assess
from downtime_simulator.analysis.sensitivity import analyze, normalize_sweeps, tornado_bars
from downtime_simulator.config.equipment import EquipmentSnapshot
from downtime_simulator.config.parameters import DEFAULT_HOURLY_WAGE, CostParameters
from downtime_simulator.config.sensitivity import default_sweeps
from downtime_simulator.config.simulation import SimulationConfig
from downtime_simulator.engine.orchestrator import run_simulation
from downtime_simulator.engine.random_variates import UniformSource
from downtime_simulator.engine.trials import deadline_for, round_half_up
from downtime_simulator.equipment.repository import EquipmentRepository
from downtime_simulator.errors import NotFoundError
from downtime_simulator.models.results import (
    EquipmentInfo,
    EquipmentSensitivityResult,
    EquipmentSimulationResult,
    RiskReport,
)

logger = logging.getLogger(__name__)

REVENUE_PER_VALUE_HOUR = 0.0001
"""Revenue-per-hour estimate as a fraction of equipment value."""

EMPLOYEES_PER_CRITICALITY = 2


def fetch_equipment(repository: EquipmentRepository, equipment_id: str) -> EquipmentSnapshot:
    snapshot = repository.get(str(equipment_id))
    if snapshot is None:
        raise NotFoundError(f"equipment {equipment_id!r} not found")
    return snapshot


def derive_base_params(
    equipment: EquipmentSnapshot,
    hourly_wage: float = DEFAULT_HOURLY_WAGE,
) -> CostParameters:
    """Mean cost inputs for a piece of equipment."""
    if equipment.department_revenue_per_hour:
        revenue_per_hour = equipment.department_revenue_per_hour
    else:
        revenue_per_hour = equipment.value * REVENUE_PER_VALUE_HOUR

    return CostParameters(
        revenue_per_hour=revenue_per_hour,
        affected_employees=max(1, round_half_up(equipment.criticality * EMPLOYEES_PER_CRITICALITY)),
        hourly_wage=hourly_wage,
        equipment_value=equipment.value,
    )


def _simulate_snapshot(
    equipment: EquipmentSnapshot,
    downtime_hours: float,
    config: SimulationConfig | None,
    hourly_wage: float,
    source: UniformSource | None,
    include_trials: bool,
    deadline: float | None,
) -> EquipmentSimulationResult:
    base = derive_base_params(equipment, hourly_wage)
    result = run_simulation(
        downtime_hours, base, config,
        source=source, include_trials=include_trials, deadline=deadline,
    )
    return EquipmentSimulationResult(
        **dict(result),
        equipment=EquipmentInfo.from_snapshot(equipment),
    )


def run_equipment_simulation(
    repository: EquipmentRepository,
    equipment_id: str,
    downtime_hours: float,
    config: SimulationConfig | None = None,
    *,
    hourly_wage: float = DEFAULT_HOURLY_WAGE,
    source: UniformSource | None = None,
    include_trials: bool = True,
) -> EquipmentSimulationResult:
    """Simulate downtime cost for one piece of equipment.

    Raises
    ------
    NotFoundError
        The repository has no equipment with ``equipment_id``.
    """
    deadline = deadline_for(config)
    equipment = fetch_equipment(repository, equipment_id)
    return _simulate_snapshot(
        equipment, downtime_hours, config, hourly_wage, source, include_trials, deadline,
    )


def _merged_sweeps(sensitivity_params: Mapping[str, Sequence[float]] | None) -> dict[str, list[float]]:
    sweeps = default_sweeps()
    if sensitivity_params:
        sweeps.update(normalize_sweeps(sensitivity_params))
    return sweeps


def _sensitivity_for_snapshot(
    equipment: EquipmentSnapshot,
    downtime_hours: float,
    base_case: float,
    sensitivity_params: Mapping[str, Sequence[float]] | None,
    config: SimulationConfig | None,
    hourly_wage: float,
    source: UniformSource | None,
    deadline: float | None,
) -> EquipmentSensitivityResult:
    result = analyze(
        downtime_hours,
        derive_base_params(equipment, hourly_wage),
        _merged_sweeps(sensitivity_params),
        config,
        source=source,
        deadline=deadline,
    )
    return EquipmentSensitivityResult(
        equipment_id=equipment.id,
        downtime_hours=downtime_hours,
        sensitivity_analysis=result,
        tornado=tornado_bars(result),
        base_case=round(base_case, 2),
    )


def run_sensitivity_analysis(
    repository: EquipmentRepository,
    equipment_id: str,
    downtime_hours: float,
    sensitivity_params: Mapping[str, Sequence[float]] | None = None,
    config: SimulationConfig | None = None,
    *,
    hourly_wage: float = DEFAULT_HOURLY_WAGE,
    source: UniformSource | None = None,
) -> EquipmentSensitivityResult:
    """Sensitivity sweep for one piece of equipment.

    ``sensitivity_params`` is merged over the default sweeps: a key it names
    replaces that parameter's default variations, the others keep theirs.
    ``base_case`` is the mean of a full (unperturbed) simulation.  The base
    run and every sweep point share one ``config.timeout_seconds`` budget.
    """
    deadline = deadline_for(config)
    equipment = fetch_equipment(repository, equipment_id)
    base = _simulate_snapshot(equipment, downtime_hours, config, hourly_wage, source, False, deadline)
    return _sensitivity_for_snapshot(
        equipment, downtime_hours, base.stats.mean,
        sensitivity_params, config, hourly_wage, source, deadline,
    )


def generate_risk_report(
    repository: EquipmentRepository,
    equipment_id: str,
    downtime_hours: float,
    config: SimulationConfig | None = None,
    *,
    hourly_wage: float = DEFAULT_HOURLY_WAGE,
    source: UniformSource | None = None,
) -> RiskReport:
    """Full simulation, risk assessment, sensitivity sweep and recommendations.

    ``config.timeout_seconds`` bounds the whole report, sweep included.
    """
    if config is None:
        config = SimulationConfig()
    deadline = deadline_for(config)

    equipment = fetch_equipment(repository, equipment_id)
    simulation = _simulate_snapshot(equipment, downtime_hours, config, hourly_wage, source, False, deadline)
    risk = assess(simulation.stats, config.confidence_level)
    sensitivity = _sensitivity_for_snapshot(
        equipment, downtime_hours, simulation.stats.mean,
        None, config, hourly_wage, source, deadline,
    )

    logger.info(
        "Risk report for %s: %s (score %.2f) over %.2fh downtime",
        equipment.id, risk.risk_level.value, risk.risk_score, downtime_hours,
    )
    return compose(
        simulation.stats,
        risk,
        sensitivity,
        equipment_id=equipment.id,
        downtime_hours=downtime_hours,
    )
