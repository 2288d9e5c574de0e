"""Narrative generator — plain-English rendering of a risk report.

Turns a ``RiskReport`` into a sectioned text block suitable for e-mail,
tickets or an LLM prompt:
  1. Cost summary
  2. Risk assessment
  3. Sensitivity (largest swings first)
  4. Recommendations
"""

from __future__ import annotations

from downtime_simulator.analysis.sensitivity import tornado_bars
from downtime_simulator.models.results import (
    EquipmentSensitivityResult,
    RiskReport,
    SensitivityResult,
)


def _banner(sections: list[str], title: str) -> None:
    sections.append("")
    sections.append("=" * 60)
    sections.append(title)
    sections.append("=" * 60)


def generate_report_narrative(report: RiskReport) -> str:
    """Render ``report`` as plain text."""
    s = report.simulation_summary
    r = report.risk_assessment
    ci = r.confidence_intervals

    sections: list[str] = []

    # ── 1. Cost summary ──
    _banner(sections, "DOWNTIME COST SUMMARY")
    if report.equipment_id is not None:
        sections.append(f"Equipment: {report.equipment_id}")
    if report.downtime_hours is not None:
        sections.append(f"Downtime: {report.downtime_hours:g} hours")
    sections.append(
        f"Expected cost: ${s.mean_cost:,.2f}\n"
        f"Median cost: ${s.median_cost:,.2f}\n"
        f"Range: ${s.min_cost:,.2f} – ${s.max_cost:,.2f}\n"
        f"Standard deviation: ${s.std_deviation:,.2f}"
    )

    # ── 2. Risk ──
    _banner(sections, "RISK ASSESSMENT")
    sections.append(
        f"Risk level: {r.risk_level.value} (score {r.risk_score:.2f}/100)\n"
        f"Uncertainty ratio (σ/μ): {r.uncertainty_ratio:.3f}\n"
        f"{ci.confidence_level * 100:.0f}% interval: ${ci.lower:,.2f} – ${ci.upper:,.2f}"
        + (" (approximated from p10/p90)" if ci.approximate else "")
    )

    # ── 3. Sensitivity ──
    sensitivity = report.sensitivity_analysis
    if isinstance(sensitivity, EquipmentSensitivityResult):
        bars = sensitivity.tornado
    elif isinstance(sensitivity, SensitivityResult):
        bars = tornado_bars(sensitivity)
    else:
        bars = []
    if bars:
        _banner(sections, "SENSITIVITY (largest swing first)")
        for bar in bars:
            sections.append(
                f"  {bar.parameter:22s}  {bar.low_variation:+.0%}: ${bar.mean_at_low:>12,.2f}"
                f"  {bar.high_variation:+.0%}: ${bar.mean_at_high:>12,.2f}"
                f"  swing ${bar.swing:,.2f}"
            )
        top = bars[0]
        sections.append(f"\nMost influential input: {top.parameter}")

    # ── 4. Recommendations ──
    _banner(sections, "RECOMMENDATIONS")
    recs = report.recommendations or [
        "No critical issues identified. Keep current maintenance schedule."
    ]
    for i, rec in enumerate(recs, 1):
        sections.append(f"  {i}. {rec}")

    return "\n".join(sections).lstrip("\n")
