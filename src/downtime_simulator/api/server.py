"""FastAPI server — HTTP surface for the downtime-cost simulator.

Run with:
    uvicorn downtime_simulator.api.server:app --reload --port 8000

Or:
    python -m downtime_simulator.api.server

Endpoints:
    GET  /health                                — liveness probe
    POST /simulate-downtime                     — Monte-Carlo run from explicit cost inputs
    POST /simulate-equipment/{equipment_id}     — run for one piece of equipment
    POST /risk-report/{equipment_id}            — simulation + risk + sensitivity + advice
    POST /risk-report/{equipment_id}/narrative  — same report as plain text
    POST /sensitivity/{equipment_id}            — one-at-a-time parameter sweep

Request bodies and simulation results use camelCase keys (``downtimeHours``,
``stdDev``, ``riskScore``); snake_case is accepted on input as well.  Report
and sensitivity envelopes keep snake_case keys (``simulation_summary``,
``base_case``).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from downtime_simulator.api.narrative import generate_report_narrative
from downtime_simulator.config.parameters import CostParameters
from downtime_simulator.config.settings import Settings, get_settings
from downtime_simulator.config.simulation import SimulationConfig
from downtime_simulator.engine.orchestrator import run_simulation
from downtime_simulator.equipment.repository import (
    EquipmentRepository,
    InMemoryEquipmentRepository,
    load_equipment_yaml,
)
from downtime_simulator.equipment.simulation import (
    generate_risk_report,
    run_equipment_simulation,
    run_sensitivity_analysis,
)
from downtime_simulator.errors import (
    EmptyDatasetError,
    InvalidConfigurationError,
    InvalidInputError,
    NotFoundError,
    SimulationError,
    SimulationTimeoutError,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class _CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SimulateDowntimeRequest(_CamelRequest):
    """Body for /simulate-downtime."""
    downtime_hours: float = Field(description="Hours of downtime (>= 0)")
    base_params: CostParameters
    custom_params: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial SimulationConfig overrides, e.g. "
                    "{'iterations': 5000, 'revenueVariation': 0.2}",
    )


class EquipmentRequest(_CamelRequest):
    """Body for the equipment-scoped endpoints."""
    downtime_hours: float = Field(description="Hours of downtime (>= 0)")
    custom_params: dict[str, Any] = Field(default_factory=dict)


class SensitivityRequest(EquipmentRequest):
    """Body for /sensitivity/{equipment_id}."""
    sensitivity_params: dict[str, list[float]] | None = Field(
        default=None,
        description="Parameter → relative variations, merged over the defaults. "
                    "Example: {'hourlyWage': [-0.3, 0.3]}",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

_ERROR_STATUS: list[tuple[type[SimulationError], int]] = [
    (InvalidInputError, 400),
    (InvalidConfigurationError, 400),
    (NotFoundError, 404),
    (EmptyDatasetError, 422),
    (SimulationTimeoutError, 504),
]


def _build_config(overrides: dict[str, Any], settings: Settings) -> SimulationConfig:
    """SimulationConfig from partial overrides; the service timeout is the default."""
    data: dict[str, Any] = {}
    if settings.simulation_timeout_seconds is not None:
        data["timeout_seconds"] = settings.simulation_timeout_seconds
    data.update(overrides)
    try:
        return SimulationConfig.model_validate(data)
    except ValueError as exc:
        raise InvalidConfigurationError(str(exc)) from exc


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _default_repository(settings: Settings) -> EquipmentRepository:
    if settings.equipment_file is not None:
        return load_equipment_yaml(settings.equipment_file)
    logger.warning("No equipment file configured; equipment endpoints will return 404")
    return InMemoryEquipmentRepository()


# ═══════════════════════════════════════════════════════════════════════════
# App factory
# ═══════════════════════════════════════════════════════════════════════════

def create_app(
    repository: EquipmentRepository | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the API around an equipment repository."""
    settings = settings or get_settings()
    repo = repository if repository is not None else _default_repository(settings)
    wage = settings.default_hourly_wage

    app = FastAPI(
        title="Downtime Cost Simulator API",
        version="1.0",
        description=(
            "Monte-Carlo estimation of equipment downtime cost with risk "
            "classification, sensitivity sweeps and recommendations."
        ),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_type, status_code in _ERROR_STATUS:
        def _handler(request: Request, exc: SimulationError, _status: int = status_code) -> JSONResponse:
            logger.info("%s %s → %d: %s", request.method, request.url.path, _status, exc)
            return JSONResponse(status_code=_status, content={"error": str(exc)})
        app.add_exception_handler(exc_type, _handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.post("/simulate-downtime")
    def simulate_downtime(
        req: SimulateDowntimeRequest,
        include_trials: bool = Query(default=True, alias="includeTrials"),
    ):
        """Run a simulation from explicit mean cost inputs."""
        config = _build_config(req.custom_params, settings)
        result = run_simulation(
            req.downtime_hours, req.base_params, config, include_trials=include_trials,
        )
        return _dump(result)

    @app.post("/simulate-equipment/{equipment_id}")
    def simulate_equipment(
        equipment_id: str,
        req: EquipmentRequest,
        include_trials: bool = Query(default=True, alias="includeTrials"),
    ):
        """Run a simulation with inputs derived from an equipment snapshot."""
        config = _build_config(req.custom_params, settings)
        result = run_equipment_simulation(
            repo, equipment_id, req.downtime_hours, config,
            hourly_wage=wage, include_trials=include_trials,
        )
        return _dump(result)

    @app.post("/risk-report/{equipment_id}")
    def risk_report(equipment_id: str, req: EquipmentRequest):
        """Simulation summary, risk assessment, sensitivity and recommendations."""
        config = _build_config(req.custom_params, settings)
        report = generate_risk_report(
            repo, equipment_id, req.downtime_hours, config, hourly_wage=wage,
        )
        return _dump(report)

    @app.post("/risk-report/{equipment_id}/narrative")
    def risk_report_narrative(equipment_id: str, req: EquipmentRequest):
        """The risk report as plain English text."""
        config = _build_config(req.custom_params, settings)
        report = generate_risk_report(
            repo, equipment_id, req.downtime_hours, config, hourly_wage=wage,
        )
        return {
            "narrative": generate_report_narrative(report),
            "riskLevel": report.risk_assessment.risk_level.value,
            "meanCost": report.simulation_summary.mean_cost,
        }

    @app.post("/sensitivity/{equipment_id}")
    def sensitivity(equipment_id: str, req: SensitivityRequest):
        """One-at-a-time sensitivity sweep for one piece of equipment."""
        config = _build_config(req.custom_params, settings)
        result = run_sensitivity_analysis(
            repo, equipment_id, req.downtime_hours, req.sensitivity_params, config,
            hourly_wage=wage,
        )
        return _dump(result)

    return app


app = create_app()


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "downtime_simulator.api.server:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
