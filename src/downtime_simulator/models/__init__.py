"""Result models — simulation output contracts."""

from downtime_simulator.models.results import (
    ConfidenceInterval,
    EquipmentInfo,
    EquipmentSensitivityResult,
    EquipmentSimulationResult,
    Percentiles,
    RiskAssessment,
    RiskLevel,
    RiskReport,
    SensitivityBar,
    SensitivityResult,
    SimulationResult,
    SimulationStatistics,
    SimulationSummary,
    Trial,
    ValueAtRisk,
)

__all__ = [
    "ConfidenceInterval",
    "EquipmentInfo",
    "EquipmentSensitivityResult",
    "EquipmentSimulationResult",
    "Percentiles",
    "RiskAssessment",
    "RiskLevel",
    "RiskReport",
    "SensitivityBar",
    "SensitivityResult",
    "SimulationResult",
    "SimulationStatistics",
    "SimulationSummary",
    "Trial",
    "ValueAtRisk",
]
