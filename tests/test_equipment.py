"""Tests for the equipment collaborator and equipment-level entry points.

Covers:
  - Base-parameter derivation from a snapshot
  - NotFoundError for unknown ids
  - End-to-end simulation mean vs. the deterministic formula
  - Sensitivity sweep merge with the defaults
  - Risk report assembly
  - YAML snapshot loading
  - One timeout budget across the base run and every sweep point
"""

from __future__ import annotations

import math
import time
from pathlib import Path

import pytest

from downtime_simulator.config import EquipmentSnapshot, SimulationConfig
from downtime_simulator.equipment import (
    InMemoryEquipmentRepository,
    derive_base_params,
    generate_risk_report,
    load_equipment_yaml,
    run_equipment_simulation,
    run_sensitivity_analysis,
)
from downtime_simulator.errors import InvalidInputError, NotFoundError, SimulationTimeoutError
from downtime_simulator.models.results import EquipmentSensitivityResult

from conftest import SlowSource


class TestDeriveBaseParams:

    def test_value_and_criticality(self, cnc_mill):
        base = derive_base_params(cnc_mill)
        assert base.affected_employees == 16
        assert base.revenue_per_hour == pytest.approx(5.0)
        assert base.hourly_wage == 50
        assert base.equipment_value == 50_000

    def test_department_revenue_wins(self, repository):
        base = derive_base_params(repository.get("2"))
        assert base.revenue_per_hour == 850

    def test_at_least_one_employee(self):
        base = derive_base_params(EquipmentSnapshot(id="x", criticality=0.2, value=10))
        assert base.affected_employees == 1

    def test_half_criticality_rounds_up(self):
        base = derive_base_params(EquipmentSnapshot(id="x", criticality=2.25))
        assert base.affected_employees == 5

    def test_custom_wage(self, cnc_mill):
        assert derive_base_params(cnc_mill, hourly_wage=32.5).hourly_wage == 32.5


class TestEquipmentSimulation:

    def test_unknown_equipment(self, repository):
        with pytest.raises(NotFoundError):
            run_equipment_simulation(repository, "999", 10)

    def test_mean_near_deterministic_value(self, repository):
        config = SimulationConfig(iterations=10_000, random_seed=123)
        result = run_equipment_simulation(repository, "1", 10, config, include_trials=False)

        expected = 10 * 5 + 10 * 16 * 50 + 50_000 * 0.001 * (10 / 8760)
        standard_error = result.stats.std_dev / math.sqrt(config.iterations)
        assert abs(result.stats.mean - expected) < 5 * standard_error

    def test_equipment_metadata_attached(self, repository):
        result = run_equipment_simulation(
            repository, "1", 4, SimulationConfig(iterations=100, random_seed=1),
        )
        assert result.equipment.id == "1"
        assert result.equipment.name == "CNC Mill"
        assert result.equipment.criticality == 8
        assert result.downtime_hours == 4
        assert len(result.trials) == 100
        assert result.base_params.affected_employees == 16


class TestEquipmentSensitivity:

    def test_caller_sweeps_merge_over_defaults(self, repository):
        config = SimulationConfig(iterations=200, sensitivity_iterations=50, random_seed=5)
        result = run_sensitivity_analysis(repository, "1", 10, {"hourlyWage": [0.3]}, config)

        assert isinstance(result, EquipmentSensitivityResult)
        by_param = result.sensitivity_analysis.by_parameter
        assert set(by_param) == {
            "revenue_per_hour", "affected_employees", "hourly_wage", "equipment_value",
        }
        assert list(by_param["hourly_wage"]) == [0.3]
        assert list(by_param["revenue_per_hour"]) == [-0.5, -0.25, 0.25, 0.5]
        assert result.equipment_id == "1"
        assert result.base_case > 0
        assert [bar.parameter for bar in result.tornado][0] == "affected_employees"
        assert len(result.tornado) == 4

    def test_unknown_sweep_parameter(self, repository):
        config = SimulationConfig(iterations=50, sensitivity_iterations=10)
        with pytest.raises(InvalidInputError):
            run_sensitivity_analysis(repository, "1", 10, {"bogus": [0.1]}, config)

    def test_unknown_equipment(self, repository):
        with pytest.raises(NotFoundError):
            run_sensitivity_analysis(repository, "nope", 10)


class TestRiskReport:

    def test_report_contents(self, repository):
        config = SimulationConfig(iterations=1_000, sensitivity_iterations=100, random_seed=3)
        report = generate_risk_report(repository, "1", 10, config)

        assert report.equipment_id == "1"
        assert report.downtime_hours == 10
        assert report.simulation_summary.mean_cost > 0
        assert report.risk_assessment.confidence_intervals.confidence_level == 0.95
        assert isinstance(report.sensitivity_analysis, EquipmentSensitivityResult)
        assert len(report.sensitivity_analysis.sensitivity_analysis.by_parameter) == 4
        assert len(report.sensitivity_analysis.tornado) == 4
        assert isinstance(report.recommendations, list)

    def test_unknown_equipment(self, repository):
        with pytest.raises(NotFoundError):
            generate_risk_report(repository, "999", 10)


class TestWholeCallTimeout:
    """``timeout_seconds`` bounds a whole call, not each run inside it."""

    # 8 draws per trial at 0.5ms each: ~40ms per 10-trial run, 17 runs per call
    CONFIG = SimulationConfig(iterations=10, sensitivity_iterations=10, timeout_seconds=0.15)

    def test_risk_report_times_out(self, repository):
        started = time.monotonic()
        with pytest.raises(SimulationTimeoutError):
            generate_risk_report(repository, "1", 10, self.CONFIG, source=SlowSource())
        assert time.monotonic() - started < 0.45

    def test_sensitivity_analysis_times_out(self, repository):
        started = time.monotonic()
        with pytest.raises(SimulationTimeoutError):
            run_sensitivity_analysis(repository, "1", 10, None, self.CONFIG, source=SlowSource())
        assert time.monotonic() - started < 0.45

    def test_single_run_within_budget(self, repository):
        result = run_equipment_simulation(
            repository, "1", 10, self.CONFIG, source=SlowSource(), include_trials=False,
        )
        assert result.iterations == 10


class TestRepository:

    def test_in_memory_lookup(self, cnc_mill):
        repo = InMemoryEquipmentRepository([cnc_mill])
        assert repo.get("1") is cnc_mill
        assert repo.get("2") is None
        assert len(repo) == 1

    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "equipment.yaml"
        path.write_text(
            "equipment:\n"
            "  - id: 7\n"
            "    name: Press\n"
            "    criticality: 4\n"
            "    value: 20000\n"
            "    department_revenue_per_hour: 300\n"
        )
        repo = load_equipment_yaml(path)
        press = repo.get("7")
        assert press is not None
        assert press.name == "Press"
        assert press.department_revenue_per_hour == 300

    def test_load_bare_list(self, tmp_path: Path):
        path = tmp_path / "equipment.yaml"
        path.write_text("- id: a\n  value: 10\n")
        assert load_equipment_yaml(path).get("a").value == 10

    def test_load_rejects_scalar(self, tmp_path: Path):
        path = tmp_path / "equipment.yaml"
        path.write_text("just a string\n")
        with pytest.raises(InvalidInputError):
            load_equipment_yaml(path)

    def test_sample_snapshot_loads(self):
        path = Path(__file__).parent.parent / "data" / "equipment.yaml"
        repo = load_equipment_yaml(path)
        assert len(repo) == 3
        assert repo.get("1").criticality == 8
