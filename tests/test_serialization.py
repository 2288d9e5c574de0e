"""Wire-format tests — result models dump with the keys API clients read."""

from __future__ import annotations

from downtime_simulator.analysis import assess, compose
from downtime_simulator.config import SimulationConfig
from downtime_simulator.engine import run_simulation
from downtime_simulator.equipment import run_sensitivity_analysis
from downtime_simulator.models.results import RiskLevel


class TestWireKeys:

    def test_simulation_result_camel_case(self, base_params, seeded_config):
        result = run_simulation(10, base_params, seeded_config)
        data = result.model_dump(mode="json", by_alias=True)
        assert {"trials", "stats", "iterations", "parameters", "baseParams",
                "downtimeHours", "timestamp"} <= set(data)
        assert {"mean", "median", "min", "max", "stdDev", "percentiles"} == set(data["stats"])
        assert set(data["stats"]["percentiles"]) == {"p10", "p25", "p50", "p75", "p90", "p95", "p99"}
        assert {"revenueLoss", "laborCost", "depreciation", "totalCost",
                "iterationIndex"} == set(data["trials"][0])
        assert data["parameters"]["revenueVariation"] == 0.10

    def test_risk_assessment_camel_case(self, base_params, seeded_config):
        result = run_simulation(10, base_params, seeded_config, include_trials=False)
        risk = assess(result.stats)
        data = risk.model_dump(mode="json", by_alias=True)
        assert set(data) == {
            "riskScore", "riskLevel", "uncertaintyRatio",
            "confidenceIntervals", "value_at_risk",
        }
        assert set(data["value_at_risk"]) == {"worst_case", "expected", "best_case"}
        assert data["riskLevel"] in {level.value for level in RiskLevel}

    def test_report_sections_snake_case(self, base_params, seeded_config):
        result = run_simulation(10, base_params, seeded_config, include_trials=False)
        report = compose(result.stats, assess(result.stats))
        data = report.model_dump(mode="json", by_alias=True)
        assert {"simulation_summary", "risk_assessment", "sensitivity_analysis",
                "recommendations", "timestamp"} <= set(data)
        assert data["sensitivity_analysis"] is None

    def test_equipment_sensitivity_snake_case(self, repository):
        config = SimulationConfig(iterations=50, sensitivity_iterations=10, random_seed=2)
        result = run_sensitivity_analysis(repository, "1", 4, {"hourlyWage": [0.1]}, config)
        data = result.model_dump(mode="json", by_alias=True)
        assert set(data) == {
            "equipment_id", "downtime_hours", "sensitivity_analysis",
            "tornado", "base_case", "timestamp",
        }
        assert set(data["sensitivity_analysis"]) == {
            "revenue_per_hour", "affected_employees", "hourly_wage", "equipment_value",
        }
        assert {"parameter", "low_variation", "high_variation", "mean_at_low",
                "mean_at_high", "swing"} == set(data["tornado"][0])
