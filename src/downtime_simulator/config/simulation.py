"""Simulation-level settings — iteration count, uncertainty and run controls."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SimulationConfig(BaseModel):
    """Monte-Carlo settings for one downtime-cost run.

    Variation fields are coefficients of variation, not absolute standard
    deviations: the sampled stddev of a parameter is ``mean × variation``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    iterations: int = Field(
        default=10_000, gt=0,
        description="Number of independent trials. 10,000 is the reporting "
                    "default; sensitivity sweeps use ``sensitivity_iterations``.",
    )
    revenue_variation: float = Field(
        default=0.10, ge=0,
        description="CoV of revenue per hour (0.10 = 10% stddev).",
    )
    employee_variation: float = Field(
        default=0.15, ge=0,
        description="CoV of affected employee count.",
    )
    wage_variation: float = Field(
        default=0.05, ge=0,
        description="CoV of hourly wage.",
    )
    equipment_value_variation: float = Field(
        default=0.20, ge=0,
        description="CoV of equipment value.",
    )

    # --- Run controls -------------------------------------------------------
    random_seed: int | None = Field(
        default=None,
        description="Optional RNG seed for reproducible runs. None = non-deterministic.",
    )
    confidence_level: float = Field(
        default=0.95, gt=0, lt=1,
        description="Confidence level used for the risk assessment interval.",
    )
    sensitivity_iterations: int = Field(
        default=1_000, gt=0,
        description="Reduced trial count for each sensitivity-sweep point.",
    )
    timeout_seconds: float | None = Field(
        default=None, gt=0,
        description="Wall-clock budget for one run. None = unbounded.",
    )
