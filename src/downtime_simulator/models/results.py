"""Result types — the contract between engine, analysis and the API.

Statistics, risk and trial models serialise with camelCase keys
(``stdDev``, ``riskScore``, ``totalCost``) so the JSON wire format matches the
dashboard client.  Report sections and the equipment sensitivity envelope keep
the snake_case keys that client reads (``simulation_summary``,
``value_at_risk.worst_case``, ``equipment_id``, ``base_case``).  Use
``model_dump(by_alias=True)`` for wire output.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel

from downtime_simulator.config.equipment import EquipmentSnapshot
from downtime_simulator.config.parameters import CostParameters
from downtime_simulator.config.simulation import SimulationConfig


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════════════
# Trials & statistics
# ═══════════════════════════════════════════════════════════════════════════

class Trial(_CamelModel):
    """One Monte-Carlo sample. Lives only for the duration of a run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    revenue_loss: float
    """downtime_hours × sampled revenue per hour."""

    labor_cost: float
    """downtime_hours × sampled employees × sampled wage."""

    depreciation: float
    """sampled equipment value × 0.001 × (downtime_hours / 8760)."""

    total_cost: float
    """revenue_loss + labor_cost + depreciation."""

    iteration_index: int
    """Position of the trial in generation order (before sorting)."""


class Percentiles(BaseModel):
    """Nearest-rank percentile band of total cost."""

    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    p95: float
    p99: float

    def lookup(self, key: str) -> float | None:
        """Return the tabulated value for ``key`` (e.g. ``"p95"``), or None."""
        return getattr(self, key, None) if key in type(self).model_fields else None


class SimulationStatistics(_CamelModel):
    """Summary of total cost across all trials of a run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    mean: float
    median: float
    min: float
    max: float
    std_dev: float
    """Population standard deviation (divides by n)."""
    percentiles: Percentiles


class SimulationResult(_CamelModel):
    """Output of :func:`downtime_simulator.engine.run_simulation`."""

    trials: list[Trial] = Field(default_factory=list)
    """All trials, sorted ascending by total cost."""

    stats: SimulationStatistics
    iterations: int
    parameters: SimulationConfig
    """Effective configuration the run used."""

    base_params: CostParameters
    """Mean cost inputs the trials were drawn around."""

    downtime_hours: float
    timestamp: datetime = Field(default_factory=_utcnow)


class EquipmentInfo(_CamelModel):
    """Equipment metadata echoed back with an equipment-level simulation."""

    id: str
    name: str = ""
    type: str = ""
    category: str = ""
    criticality: float
    value: float

    @classmethod
    def from_snapshot(cls, snapshot: EquipmentSnapshot) -> EquipmentInfo:
        return cls(
            id=snapshot.id,
            name=snapshot.name,
            type=snapshot.type,
            category=snapshot.category,
            criticality=snapshot.criticality,
            value=snapshot.value,
        )


class EquipmentSimulationResult(SimulationResult):
    """A simulation run for one piece of equipment."""

    equipment: EquipmentInfo


# ═══════════════════════════════════════════════════════════════════════════
# Risk
# ═══════════════════════════════════════════════════════════════════════════

class RiskLevel(str, Enum):
    """Coarse risk bucket derived from relative uncertainty."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ConfidenceInterval(_CamelModel):
    """Interval read off the tabulated percentile band.

    Only p10…p99 are tabulated, so levels whose tail quantiles are not in
    that set (e.g. 95% needs p2.5/p97.5) fall back to p10/p90 and come out
    narrower than requested.  ``approximate`` flags that case.
    """

    lower: float
    upper: float
    confidence_level: float
    interval: float
    approximate: bool = False


class ValueAtRisk(BaseModel):
    worst_case: float
    expected: float
    best_case: float


class RiskAssessment(_CamelModel):
    """Risk classification derived from ``SimulationStatistics``."""

    risk_score: float = Field(ge=0, le=100)
    risk_level: RiskLevel
    uncertainty_ratio: float
    """stdDev / mean (0 when mean is 0)."""
    confidence_intervals: ConfidenceInterval
    value_at_risk: ValueAtRisk = Field(alias="value_at_risk")


# ═══════════════════════════════════════════════════════════════════════════
# Sensitivity
# ═══════════════════════════════════════════════════════════════════════════

class SensitivityBar(BaseModel):
    """One bar of a tornado view: the spread a single parameter causes."""

    parameter: str
    low_variation: float
    high_variation: float
    mean_at_low: float
    mean_at_high: float
    swing: float
    """abs(mean_at_high − mean_at_low)."""


class SensitivityResult(RootModel[dict[str, dict[float, float]]]):
    """One-at-a-time sweep: parameter → relative variation → mean total cost.

    Serialises as that plain nested mapping.  Tornado bars are derived
    separately (``analysis.sensitivity.tornado_bars``).
    """

    root: dict[str, dict[float, float]] = Field(default_factory=dict)

    @property
    def by_parameter(self) -> dict[str, dict[float, float]]:
        return self.root

    def mean_for(self, parameter: str, variation: float) -> float:
        return self.root[parameter][variation]


class EquipmentSensitivityResult(BaseModel):
    """Sensitivity sweep for one piece of equipment."""

    equipment_id: str
    downtime_hours: float
    sensitivity_analysis: SensitivityResult
    tornado: list[SensitivityBar] = Field(default_factory=list)
    """Bars of ``sensitivity_analysis`` sorted by swing (largest first)."""
    base_case: float
    """Mean total cost of the unperturbed full simulation."""
    timestamp: datetime = Field(default_factory=_utcnow)


# ═══════════════════════════════════════════════════════════════════════════
# Report
# ═══════════════════════════════════════════════════════════════════════════

class SimulationSummary(BaseModel):
    mean_cost: float
    median_cost: float
    min_cost: float
    max_cost: float
    std_deviation: float


class RiskReport(BaseModel):
    """Simulation summary, risk, sensitivity and recommendations in one place."""

    equipment_id: str | None = None
    downtime_hours: float | None = None
    simulation_summary: SimulationSummary
    risk_assessment: RiskAssessment
    sensitivity_analysis: EquipmentSensitivityResult | SensitivityResult | None = None
    recommendations: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=_utcnow)
