"""FastAPI application factory for the telemetry service."""

from fastapi import FastAPI

from fleet_telemetry.config import AppSettings
from fleet_telemetry.db import DatabaseHealthPort
from fleet_telemetry.jobs import LatestTelemetryReportRecorder, TelemetryRunTriggerPort

from .routers import api_create_health_router, api_create_telemetry_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    telemetry_runner: TelemetryRunTriggerPort,
    report_recorder: LatestTelemetryReportRecorder,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Store health service used by health endpoints.
        telemetry_runner: Runner fired by the trigger endpoint.
        report_recorder: Transmission hook read by the latest-report endpoint.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    application = FastAPI(title="Fleet Telemetry")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service metadata.

        Returns:
            dict[str, str]: Service name, version and environment.
        """

        return {
            "service": "fleet-telemetry",
            "status": "ready",
            "environment": settings.environment_name,
            "version": settings.application_version,
        }

    application.include_router(
        api_create_health_router(db_health_service=db_health_service, telemetry_runner=telemetry_runner)
    )
    application.include_router(
        api_create_telemetry_router(
            telemetry_runner=telemetry_runner,
            report_recorder=report_recorder,
        )
    )

    return application
