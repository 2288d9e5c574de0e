"""Default one-at-a-time sensitivity sweeps.

Each entry maps a ``CostParameters`` field to the relative variations applied
to it.  ``-0.25`` means "run with the mean scaled to 75%".
"""

from __future__ import annotations

from copy import deepcopy

DEFAULT_SWEEPS: dict[str, list[float]] = {
    "revenue_per_hour": [-0.5, -0.25, 0.25, 0.5],
    "affected_employees": [-0.5, -0.25, 0.25, 0.5],
    "hourly_wage": [-0.2, -0.1, 0.1, 0.2],
    "equipment_value": [-0.5, -0.25, 0.25, 0.5],
}


def default_sweeps() -> dict[str, list[float]]:
    """Fresh copy of :data:`DEFAULT_SWEEPS` that callers may mutate."""
    return deepcopy(DEFAULT_SWEEPS)
