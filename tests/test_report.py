"""Tests for analysis/report.py and api/narrative.py.

Covers:
  - Recommendation rules and their order
  - Zero-mean guard on the worst-case rule
  - Report assembly and summary rounding
  - Plain-English narrative sections
"""

from __future__ import annotations

from downtime_simulator.analysis.report import compose, generate_recommendations
from downtime_simulator.analysis.risk import assess
from downtime_simulator.analysis.sensitivity import analyze
from downtime_simulator.api.narrative import generate_report_narrative
from downtime_simulator.models.results import Percentiles, SimulationStatistics


def _stats(mean: float, std_dev: float, max_: float) -> SimulationStatistics:
    return SimulationStatistics(
        mean=mean, median=mean, min=0.0, max=max_, std_dev=std_dev,
        percentiles=Percentiles(p10=1, p25=2, p50=3, p75=4, p90=5, p95=6, p99=7),
    )


class TestRecommendations:

    def test_low_risk_no_advice(self):
        stats = _stats(1_000, 50, 1_200)
        assert generate_recommendations(assess(stats), stats) == []

    def test_high_risk_mitigation(self):
        stats = _stats(1_000, 600, 2_500)
        recs = generate_recommendations(assess(stats), stats)
        assert recs == [
            "Implement immediate mitigation measures",
            "Consider equipment redundancy or backup systems",
            "Review and update maintenance schedules",
            "Gather more data to reduce uncertainty in cost estimates",
            "Implement more frequent monitoring of this equipment",
        ]

    def test_worst_case_budgeting(self):
        stats = _stats(1_000, 100, 3_500)
        recs = generate_recommendations(assess(stats), stats)
        assert recs == [
            "Plan for worst-case scenarios in budgeting",
            "Develop contingency plans for high-impact events",
        ]

    def test_all_rules(self):
        stats = _stats(1_000, 900, 5_000)
        assert len(generate_recommendations(assess(stats), stats)) == 7

    def test_zero_mean_does_not_divide(self):
        stats = _stats(0, 0, 0)
        assert generate_recommendations(assess(stats), stats) == []


class TestCompose:

    def test_summary_rounded(self):
        stats = _stats(1_234.5678, 12.3456, 1_300.001)
        report = compose(stats, assess(stats))
        s = report.simulation_summary
        assert s.mean_cost == 1_234.57
        assert s.std_deviation == 12.35
        assert s.max_cost == 1_300.0
        assert report.sensitivity_analysis is None

    def test_bundles_everything(self, base_params, zero_variation_config):
        stats = _stats(1_000, 600, 2_500)
        sens = analyze(10, base_params, {"hourly_wage": [0.1]}, zero_variation_config)
        report = compose(stats, assess(stats), sens, equipment_id="1", downtime_hours=10)
        assert report.equipment_id == "1"
        assert report.downtime_hours == 10
        assert report.sensitivity_analysis == sens
        assert report.risk_assessment.risk_level.value == "HIGH"
        assert len(report.recommendations) == 5


class TestNarrative:

    def test_sections_present(self, base_params, zero_variation_config):
        stats = _stats(1_000, 600, 2_500)
        sens = analyze(10, base_params, {"hourly_wage": [-0.1, 0.1]}, zero_variation_config)
        text = generate_report_narrative(
            compose(stats, assess(stats), sens, equipment_id="1", downtime_hours=10)
        )
        assert "DOWNTIME COST SUMMARY" in text
        assert "Risk level: HIGH" in text
        assert "SENSITIVITY" in text
        assert "Most influential input: hourly_wage" in text
        assert "1. Implement immediate mitigation measures" in text
        assert "approximated from p10/p90" in text

    def test_no_recommendations_message(self):
        stats = _stats(1_000, 50, 1_200)
        text = generate_report_narrative(compose(stats, assess(stats)))
        assert "No critical issues identified" in text
        assert "SENSITIVITY" not in text
