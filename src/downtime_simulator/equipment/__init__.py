"""Equipment collaborator and equipment-level simulation entry points."""

from downtime_simulator.equipment.repository import (
    EquipmentRepository,
    InMemoryEquipmentRepository,
    load_equipment_yaml,
)
from downtime_simulator.equipment.simulation import (
    derive_base_params,
    generate_risk_report,
    run_equipment_simulation,
    run_sensitivity_analysis,
)

__all__ = [
    "EquipmentRepository",
    "InMemoryEquipmentRepository",
    "load_equipment_yaml",
    "derive_base_params",
    "generate_risk_report",
    "run_equipment_simulation",
    "run_sensitivity_analysis",
]
