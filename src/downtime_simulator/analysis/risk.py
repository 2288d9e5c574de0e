"""Risk assessor — uncertainty ratio, risk bucket and confidence interval.

  uncertainty_ratio = std_dev / mean          (0 when mean == 0)
  risk_score        = clamp(ratio × 100, 0, 100)
  risk_level        = LOW < 20 ≤ MEDIUM < 50 ≤ HIGH < 80 ≤ CRITICAL

Confidence intervals are read from the tabulated percentile band
{p10, p25, p50, p75, p90, p95, p99}.  The tail quantiles of most confidence
levels are not in that set (95% needs p2.5 and p97.5), so a missing bound
falls back to p10 (lower) or p90 (upper).  This narrows the interval and is
reported through ``ConfidenceInterval.approximate``; untabulated percentiles
are never synthesised.
"""

from __future__ import annotations

import logging
import math

from downtime_simulator.errors import InvalidConfigurationError
from downtime_simulator.models.results import (
    ConfidenceInterval,
    RiskAssessment,
    RiskLevel,
    SimulationStatistics,
    ValueAtRisk,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_LEVEL = 0.95

# (exclusive upper bound on risk score, level), checked in order
RISK_THRESHOLDS: list[tuple[float, RiskLevel]] = [
    (20.0, RiskLevel.LOW),
    (50.0, RiskLevel.MEDIUM),
    (80.0, RiskLevel.HIGH),
]


def uncertainty_ratio(stats: SimulationStatistics) -> float:
    """Coefficient of variation of total cost; 0 for a zero-mean run."""
    if stats.mean == 0:
        return 0.0
    return stats.std_dev / stats.mean


def risk_score(ratio: float) -> float:
    return min(100.0, max(0.0, ratio * 100.0))


def classify_risk(score: float) -> RiskLevel:
    for upper, level in RISK_THRESHOLDS:
        if score < upper:
            return level
    return RiskLevel.CRITICAL


def _percentile_key(fraction: float) -> str:
    # round first: for 80%, α/2 × 100 evaluates to 9.999…, which must map to p10
    return f"p{math.floor(round(fraction * 100, 9))}"


def confidence_interval(
    stats: SimulationStatistics,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> ConfidenceInterval:
    """Interval at ``confidence_level`` from the percentile table.

    Bounds are looked up as ``p{floor(q × 100)}`` for q = α/2 and 1 − α/2,
    falling back to p10 / p90 when that key is not tabulated.
    """
    if not 0 < confidence_level < 1:
        raise InvalidConfigurationError(
            f"confidence_level must be in (0, 1), got {confidence_level}"
        )

    alpha = 1 - confidence_level
    lower_key = _percentile_key(alpha / 2)
    upper_key = _percentile_key(1 - alpha / 2)

    pct = stats.percentiles
    lower = pct.lookup(lower_key)
    upper = pct.lookup(upper_key)
    approximate = lower is None or upper is None

    if lower is None:
        lower = pct.p10
    if upper is None:
        upper = pct.p90
    if approximate:
        logger.warning(
            "%.0f%% interval needs %s/%s, which are not tabulated; "
            "falling back to p10/p90 for the missing bound",
            confidence_level * 100, lower_key, upper_key,
        )

    return ConfidenceInterval(
        lower=round(lower, 2),
        upper=round(upper, 2),
        confidence_level=confidence_level,
        interval=round(upper - lower, 2),
        approximate=approximate,
    )


def assess(
    stats: SimulationStatistics,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> RiskAssessment:
    """Derive a :class:`RiskAssessment` from aggregated statistics.

    The level is bucketed from the unrounded score; the wire values are
    rounded (score to 2 dp, ratio to 3 dp).
    """
    ratio = uncertainty_ratio(stats)
    score = risk_score(ratio)

    return RiskAssessment(
        risk_score=round(score, 2),
        risk_level=classify_risk(score),
        uncertainty_ratio=round(ratio, 3),
        confidence_intervals=confidence_interval(stats, confidence_level),
        value_at_risk=ValueAtRisk(
            worst_case=stats.max,
            expected=stats.mean,
            best_case=stats.min,
        ),
    )
