"""Recurring schedule for background telemetry runs."""

from __future__ import annotations

from apscheduler.schedulers.background import BackgroundScheduler

from .telemetry_runner import TelemetryJobRunner

TELEMETRY_SCHEDULER_JOB_ID = "telemetry_job"


def job_telemetry_create_scheduler(runner: TelemetryJobRunner, interval_seconds: float) -> BackgroundScheduler:
    """Create a background scheduler that triggers one telemetry run per interval.

    The scheduler is returned unstarted; the caller owns `start()` and `shutdown()`.

    Args:
        runner: Telemetry runner whose `run()` is fired on each tick.
        interval_seconds: Delay between two ticks.

    Returns:
        BackgroundScheduler: Configured scheduler with one interval job.

    Raises:
        ValueError: Raised when interval is not positive.
    """

    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be > 0")

    scheduler = BackgroundScheduler()
    scheduler.add_job(
        runner.run,
        "interval",
        seconds=interval_seconds,
        id=TELEMETRY_SCHEDULER_JOB_ID,
        coalesce=True,
        max_instances=1,
        replace_existing=True,
    )
    return scheduler
