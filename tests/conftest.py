"""Shared test fixtures — cost inputs, configs and an equipment snapshot."""

from __future__ import annotations

import time

import pytest

from downtime_simulator.config import CostParameters, EquipmentSnapshot, SimulationConfig
from downtime_simulator.engine.random_variates import NumpyUniformSource
from downtime_simulator.equipment import InMemoryEquipmentRepository
from downtime_simulator.models.results import Trial


EXPECTED_DETERMINISTIC_COST = 10 * 1000 + 10 * 5 * 50 + 100_000 * 0.001 * (10 / 8760)
"""12500.114… — the worked example with every variation at zero."""


class CountingSource:
    """Uniform source that records how many values were drawn."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value
        self.calls = 0

    def next_uniform(self) -> float:
        self.calls += 1
        return self.value


class SlowSource:
    """Seeded uniform source that sleeps before every draw."""

    def __init__(self, delay: float = 0.0005, seed: int = 0) -> None:
        self.delay = delay
        self._inner = NumpyUniformSource.from_seed(seed)

    def next_uniform(self) -> float:
        time.sleep(self.delay)
        return self._inner.next_uniform()


def make_trials(costs: list[float]) -> list[Trial]:
    return [
        Trial(
            revenue_loss=c, labor_cost=0.0, depreciation=0.0,
            total_cost=c, iteration_index=i,
        )
        for i, c in enumerate(costs)
    ]


@pytest.fixture
def base_params() -> CostParameters:
    return CostParameters(
        revenue_per_hour=1_000,
        affected_employees=5,
        hourly_wage=50,
        equipment_value=100_000,
    )


@pytest.fixture
def zero_variation_config() -> SimulationConfig:
    return SimulationConfig(
        iterations=50,
        revenue_variation=0.0,
        employee_variation=0.0,
        wage_variation=0.0,
        equipment_value_variation=0.0,
        sensitivity_iterations=10,
    )


@pytest.fixture
def seeded_config() -> SimulationConfig:
    return SimulationConfig(iterations=2_000, random_seed=42, sensitivity_iterations=200)


@pytest.fixture
def cnc_mill() -> EquipmentSnapshot:
    return EquipmentSnapshot(
        id="1",
        name="CNC Mill",
        type="Machining",
        category="Production",
        criticality=8,
        value=50_000,
    )


@pytest.fixture
def repository(cnc_mill: EquipmentSnapshot) -> InMemoryEquipmentRepository:
    return InMemoryEquipmentRepository([
        cnc_mill,
        EquipmentSnapshot(
            id="2",
            name="Packaging Line Conveyor",
            criticality=6,
            value=120_000,
            department_revenue_per_hour=850,
        ),
    ])
