"""Analysis — risk assessment, sensitivity sweeps and report composition."""

from downtime_simulator.analysis.risk import assess, classify_risk, confidence_interval
from downtime_simulator.analysis.sensitivity import analyze, tornado_bars
from downtime_simulator.analysis.report import compose, generate_recommendations

__all__ = [
    "assess",
    "classify_risk",
    "confidence_interval",
    "analyze",
    "tornado_bars",
    "compose",
    "generate_recommendations",
]
