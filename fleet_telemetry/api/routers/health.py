"""Health endpoint reporting store readiness and telemetry run state."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from fleet_telemetry.db import DatabaseHealthPort
from fleet_telemetry.jobs import TelemetryRunTriggerPort


def api_create_health_router(
    db_health_service: DatabaseHealthPort,
    telemetry_runner: TelemetryRunTriggerPort,
) -> APIRouter:
    """Create the `/health` router.

    The endpoint answers 503 only when the store is unreachable; a missing
    installation identifier keeps 200 with `database` set to `degraded`.

    Args:
        db_health_service: Store readiness service.
        telemetry_runner: Runner queried for its active state.

    Returns:
        APIRouter: Router exposing `/health`.

    Raises:
        ValueError: Raised when a dependency is missing.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")
    if telemetry_runner is None:
        raise ValueError("telemetry_runner must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        target = db_health_service.db_connection_label()
        telemetry_state = "running" if telemetry_runner.job_is_active() else "idle"
        try:
            store_health = db_health_service.db_check_health()
        except ConnectionError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "database": "down",
                "detail": str(error),
                "target": target,
                "telemetry": telemetry_state,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {
            "status": "ok" if store_health.status == "ok" else "degraded",
            "app": "up",
            "database": store_health.status,
            "detail": store_health.detail,
            "target": target,
            "telemetry": telemetry_state,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
