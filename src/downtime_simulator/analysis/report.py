"""Report composer — one bundle of statistics, risk, sensitivity and advice."""

from __future__ import annotations

from downtime_simulator.models.results import (
    EquipmentSensitivityResult,
    RiskAssessment,
    RiskLevel,
    RiskReport,
    SensitivityResult,
    SimulationStatistics,
    SimulationSummary,
)

HIGH_UNCERTAINTY_RATIO = 0.5
WORST_CASE_MULTIPLE = 3.0


def generate_recommendations(
    risk: RiskAssessment,
    stats: SimulationStatistics,
) -> list[str]:
    """Rule-based mitigation advice, most urgent first."""
    recommendations: list[str] = []

    if risk.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL):
        recommendations.append("Implement immediate mitigation measures")
        recommendations.append("Consider equipment redundancy or backup systems")
        recommendations.append("Review and update maintenance schedules")

    if risk.uncertainty_ratio > HIGH_UNCERTAINTY_RATIO:
        recommendations.append("Gather more data to reduce uncertainty in cost estimates")
        recommendations.append("Implement more frequent monitoring of this equipment")

    # worst case ≥ 3× expected
    if stats.mean > 0 and stats.max / stats.mean > WORST_CASE_MULTIPLE:
        recommendations.append("Plan for worst-case scenarios in budgeting")
        recommendations.append("Develop contingency plans for high-impact events")

    return recommendations


def summarize(stats: SimulationStatistics) -> SimulationSummary:
    return SimulationSummary(
        mean_cost=round(stats.mean, 2),
        median_cost=round(stats.median, 2),
        min_cost=round(stats.min, 2),
        max_cost=round(stats.max, 2),
        std_deviation=round(stats.std_dev, 2),
    )


def compose(
    stats: SimulationStatistics,
    risk: RiskAssessment,
    sensitivity: SensitivityResult | EquipmentSensitivityResult | None = None,
    *,
    equipment_id: str | None = None,
    downtime_hours: float | None = None,
) -> RiskReport:
    """Assemble a :class:`RiskReport`.  Pure; no I/O."""
    return RiskReport(
        equipment_id=equipment_id,
        downtime_hours=downtime_hours,
        simulation_summary=summarize(stats),
        risk_assessment=risk,
        sensitivity_analysis=sensitivity,
        recommendations=generate_recommendations(risk, stats),
    )
