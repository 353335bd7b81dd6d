"""Job layer package for telemetry aggregation and scheduling."""

from .interfaces import (
	JobExecutionResult,
	JobOrchestratorPort,
	TelemetryRunAlreadyActiveError,
	TelemetryRunFailure,
	TelemetryRunTriggerPort,
	TelemetryTransmissionPort,
)
from .scheduler import TELEMETRY_SCHEDULER_JOB_ID, job_telemetry_create_scheduler
from .telemetry_report import TelemetryReport
from .telemetry_runner import TelemetryComputeStep, TelemetryJobConfig, TelemetryJobRunner
from .transmission import LatestTelemetryReportRecorder

__all__ = [
	"JobExecutionResult",
	"JobOrchestratorPort",
	"LatestTelemetryReportRecorder",
	"TELEMETRY_SCHEDULER_JOB_ID",
	"TelemetryComputeStep",
	"TelemetryJobConfig",
	"TelemetryJobRunner",
	"TelemetryReport",
	"TelemetryRunAlreadyActiveError",
	"TelemetryRunFailure",
	"TelemetryRunTriggerPort",
	"TelemetryTransmissionPort",
	"job_telemetry_create_scheduler",
]
