"""Configuration models — simulation inputs and service settings."""

from downtime_simulator.config.parameters import CostParameters, DEFAULT_HOURLY_WAGE
from downtime_simulator.config.simulation import SimulationConfig
from downtime_simulator.config.equipment import EquipmentSnapshot
from downtime_simulator.config.sensitivity import DEFAULT_SWEEPS, default_sweeps
from downtime_simulator.config.settings import Settings, get_settings

__all__ = [
    "CostParameters",
    "DEFAULT_HOURLY_WAGE",
    "SimulationConfig",
    "EquipmentSnapshot",
    "DEFAULT_SWEEPS",
    "default_sweeps",
    "Settings",
    "get_settings",
]
