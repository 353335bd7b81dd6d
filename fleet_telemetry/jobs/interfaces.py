"""Typed interfaces for job-layer orchestration responsibilities."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .telemetry_report import TelemetryReport


class TelemetryRunAlreadyActiveError(RuntimeError):
    """Raised when a telemetry trigger is rejected because one run is already active."""


@dataclass(frozen=True)
class JobExecutionResult:
    """Result contract for job execution.

    Attributes:
        job_name: Job identifier.
        status: Final execution state.
    """

    job_name: str
    status: str


@dataclass(frozen=True)
class TelemetryRunFailure:
    """Failure payload handed to the transmission hook when a run aborts.

    Attributes:
        job_name: Job identifier.
        category: Category whose computer failed.
        error_type: Underlying exception type name.
        error_message: Underlying failure message.
        timeline: Stage timeline recorded until the failure.
    """

    job_name: str
    category: str
    error_type: str
    error_message: str
    timeline: list[dict[str, Any]] = field(default_factory=list)


class JobOrchestratorPort(Protocol):
    """Port definition for orchestrating named jobs."""

    def job_supported_names(self) -> tuple[str, ...]:
        """Return the set of workflow names this orchestrator can execute.

        Returns:
            tuple[str, ...]: Deterministic list of supported job names.

        Raises:
            RuntimeError: Raised when supported job metadata is unavailable.
        """

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute one named workflow in the job layer.

        Args:
            job_name: Workflow name.

        Returns:
            JobExecutionResult: Final execution status payload.

        Raises:
            RuntimeError: Raised when job execution fails.
        """


class TelemetryRunTriggerPort(Protocol):
    """Port definition for surfaces that fire background telemetry runs."""

    def run(self) -> Future:
        """Trigger one background run without waiting for it.

        Returns:
            Future: Completion handle of the background run.
        """

    def job_is_active(self) -> bool:
        """Return whether a run is currently executing."""


class TelemetryTransmissionPort(Protocol):
    """Port definition for the boundary that receives finished telemetry runs."""

    def transmission_report_ready(self, report: TelemetryReport, timeline: list[dict[str, Any]]) -> None:
        """Receive one complete report.

        Args:
            report: Fully populated report, never mutated afterwards.
            timeline: Stage timeline of the successful run.
        """

    def transmission_report_failed(self, failure: TelemetryRunFailure) -> None:
        """Receive the failure summary of one aborted run.

        Args:
            failure: Failing category, cause and timeline.
        """
