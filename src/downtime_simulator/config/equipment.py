"""Equipment snapshot — the read-only view of one asset the engine consumes."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EquipmentSnapshot(BaseModel):
    """Equipment attributes fetched once, before a simulation starts.

    Owned by the storage collaborator; the engine only reads it.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(description="Equipment identifier")
    name: str = Field(default="", description="Display name")
    type: str = Field(default="", description="Equipment type, e.g. 'CNC mill'")
    category: str = Field(default="", description="Asset category")
    criticality: float = Field(
        default=1.0, ge=0,
        description="Operational criticality score. Drives the estimated "
                    "number of affected employees (criticality × 2).",
    )
    value: float = Field(default=0.0, ge=0, description="Book value of the asset")
    department_revenue_per_hour: float | None = Field(
        default=None, ge=0,
        description="Estimated hourly revenue of the owning department. "
                    "When absent, revenue per hour is estimated as value × 0.0001.",
    )
