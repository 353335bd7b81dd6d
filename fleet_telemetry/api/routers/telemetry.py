"""Telemetry API router composition for run trigger and latest report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from fleet_telemetry.jobs import LatestTelemetryReportRecorder, TelemetryRunFailure, TelemetryRunTriggerPort


def api_create_telemetry_router(
    telemetry_runner: TelemetryRunTriggerPort,
    report_recorder: LatestTelemetryReportRecorder,
) -> APIRouter:
    """Create telemetry router with trigger and latest-report endpoints.

    Args:
        telemetry_runner: Runner used to fire background runs.
        report_recorder: Transmission hook holding the latest outcome.

    Returns:
        APIRouter: Router exposing telemetry APIs.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if telemetry_runner is None:
        raise ValueError("telemetry_runner must not be None")
    if report_recorder is None:
        raise ValueError("report_recorder must not be None")

    router = APIRouter(prefix="/telemetry", tags=["telemetry"])

    @router.post("/run")
    def api_telemetry_run_trigger() -> JSONResponse:
        """Trigger one background telemetry run.

        Returns:
            JSONResponse: 202 when accepted, 409 when a run is already active.
        """

        if telemetry_runner.job_is_active():
            payload = {
                "status": "error",
                "message": "run already active",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_409_CONFLICT)

        telemetry_runner.run()
        payload = {
            "job_name": "telemetry_run",
            "status": "accepted",
        }
        return JSONResponse(content=payload, status_code=status.HTTP_202_ACCEPTED)

    @router.get("/report/latest")
    def api_telemetry_report_latest() -> JSONResponse:
        """Return the latest completed report document.

        Returns:
            JSONResponse: Report payload or 404 when no run has succeeded yet.
        """

        latest_failure = report_recorder.transmission_latest_failure()
        latest_document = report_recorder.transmission_latest_document()
        if latest_document is None:
            payload = {
                "status": "error",
                "message": "telemetry report not available",
                "latest_failure": api_serialize_telemetry_failure(latest_failure),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)

        payload = {
            "report": latest_document,
            "timeline": report_recorder.transmission_latest_timeline(),
            "latest_failure": api_serialize_telemetry_failure(latest_failure),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_telemetry_failure(failure: TelemetryRunFailure | None) -> dict[str, object] | None:
    """Serialize one failure summary without its timeline.

    Args:
        failure: Latest failure summary, or None.

    Returns:
        dict[str, object] | None: JSON-serializable failure payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if failure is None:
        return None
    return {
        "job_name": failure.job_name,
        "category": failure.category,
        "error_type": failure.error_type,
        "error_message": failure.error_message,
    }
