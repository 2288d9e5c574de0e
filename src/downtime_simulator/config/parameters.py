"""Cost parameters — the mean of each uncertain downtime-cost input."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_HOURLY_WAGE = 50.0
"""Hourly wage assumed when the caller does not supply one."""


class CostParameters(BaseModel):
    """Base cost inputs for one simulation run.

    Every field is the *mean* of an assumed normal distribution.  The spread
    around each mean comes from the variation coefficients on
    ``SimulationConfig``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    revenue_per_hour: float = Field(
        default=0.0, ge=0,
        description="Revenue lost per hour of downtime.",
    )
    affected_employees: float = Field(
        default=0, ge=0,
        description="Employees idled by the outage. Sampled values are rounded "
                    "to whole people; the mean itself may be fractional "
                    "(sensitivity sweeps scale it).",
    )
    hourly_wage: float = Field(
        default=DEFAULT_HOURLY_WAGE, ge=0,
        description="Wage paid per idle employee-hour.",
    )
    equipment_value: float = Field(
        default=0.0, ge=0,
        description="Book value of the equipment (drives depreciation).",
    )
