"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

from dataclasses import dataclass

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from sqlalchemy import Engine

from fleet_telemetry.api import create_api_application
from fleet_telemetry.config import AppSettings, config_load_settings
from fleet_telemetry.db import SQLAlchemyDatabaseHealthService, SQLAlchemyTelemetryStore, db_create_engine
from fleet_telemetry.jobs import (
    LatestTelemetryReportRecorder,
    TelemetryJobConfig,
    TelemetryJobRunner,
    job_telemetry_create_scheduler,
)


@dataclass(frozen=True)
class TelemetryRuntime:
    """Assembled runtime components for one process.

    Attributes:
        settings: Validated runtime settings.
        runner: Telemetry job runner.
        report_recorder: Transmission hook holding the latest outcome.
        application: FastAPI application.
        scheduler: Unstarted recurring scheduler, None when disabled.
    """

    settings: AppSettings
    runner: TelemetryJobRunner
    report_recorder: LatestTelemetryReportRecorder
    application: FastAPI
    scheduler: BackgroundScheduler | None


def bootstrap_create_telemetry_runner(
    settings: AppSettings | None = None,
    engine: Engine | None = None,
) -> tuple[TelemetryJobRunner, LatestTelemetryReportRecorder]:
    """Build the telemetry runner and its in-process transmission hook.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.
        engine: Optional shared engine; created from settings when omitted.

    Returns:
        tuple[TelemetryJobRunner, LatestTelemetryReportRecorder]: Wired runner and recorder.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    resolved_engine = engine or db_create_engine(database_url=resolved_settings.database_url)
    report_recorder = LatestTelemetryReportRecorder()
    runner = TelemetryJobRunner(
        store=SQLAlchemyTelemetryStore(engine=resolved_engine),
        transmission=report_recorder,
        config=TelemetryJobConfig(
            application_version=resolved_settings.application_version,
            serialize_runs=resolved_settings.telemetry_serialize_runs,
        ),
    )
    return runner, report_recorder


def bootstrap_create_runtime() -> TelemetryRuntime:
    """Assemble API application, runner and scheduler after validating configuration.

    Returns:
        TelemetryRuntime: Fully initialized runtime components.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    engine = db_create_engine(database_url=settings.database_url)
    runner, report_recorder = bootstrap_create_telemetry_runner(settings=settings, engine=engine)
    application = create_api_application(
        settings=settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        telemetry_runner=runner,
        report_recorder=report_recorder,
    )
    scheduler = None
    if settings.telemetry_scheduler_enabled:
        scheduler = job_telemetry_create_scheduler(
            runner=runner,
            interval_seconds=settings.telemetry_interval_seconds,
        )
    return TelemetryRuntime(
        settings=settings,
        runner=runner,
        report_recorder=report_recorder,
        application=application,
        scheduler=scheduler,
    )
