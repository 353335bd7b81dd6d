"""Job-layer telemetry runner with fixed category order and first-failure abort."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
import logging
import threading
from typing import Callable

from fleet_telemetry.db import TelemetryStorePort
from fleet_telemetry.domain import domain_build_error_details, domain_build_stage_event

from .interfaces import (
    JobExecutionResult,
    JobOrchestratorPort,
    TelemetryRunAlreadyActiveError,
    TelemetryRunFailure,
    TelemetryRunTriggerPort,
    TelemetryTransmissionPort,
)
from .telemetry_computers import (
    job_telemetry_compute_dockerhub,
    job_telemetry_compute_edge_compute,
    job_telemetry_compute_endpoint,
    job_telemetry_compute_endpoint_group,
    job_telemetry_compute_registry,
    job_telemetry_compute_resource_control,
    job_telemetry_compute_runtime,
    job_telemetry_compute_settings,
    job_telemetry_compute_stack,
    job_telemetry_compute_tag,
    job_telemetry_compute_team,
    job_telemetry_init_report,
)
from .telemetry_report import TelemetryReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelemetryJobConfig:
    """Configuration values for telemetry job execution.

    Attributes:
        application_version: Version reported in the runtime section.
        serialize_runs: Whether a trigger is rejected while another run is active.
    """

    application_version: str
    serialize_runs: bool = True


@dataclass(frozen=True)
class TelemetryComputeStep:
    """One ordered category computer bound to its dependencies.

    Attributes:
        category: Stage name used in timelines and failure payloads.
        label: Human-readable category label used in log lines.
        compute: Callable writing one section into the report.
    """

    category: str
    label: str
    compute: Callable[[TelemetryReport], None]


class TelemetryJobRunner(JobOrchestratorPort, TelemetryRunTriggerPort):
    """Concrete job orchestrator for the telemetry aggregation run.

    `job_execute` runs synchronously; `run` submits the same work to a
    single background worker and returns without waiting.
    """

    _TELEMETRY_JOB_NAME = "telemetry_run"
    _INIT_CATEGORY = "init"

    def __init__(
        self,
        store: TelemetryStorePort,
        transmission: TelemetryTransmissionPort,
        config: TelemetryJobConfig,
        executor: ThreadPoolExecutor | None = None,
    ):
        """Initialize telemetry runner dependencies.

        Args:
            store: Store read port used by every category computer.
            transmission: Hook receiving finished reports and failures.
            config: Telemetry execution configuration.
            executor: Optional executor for background runs.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if store is None:
            raise ValueError("store must not be None")
        if transmission is None:
            raise ValueError("transmission must not be None")
        if not config.application_version.strip():
            raise ValueError("config.application_version must not be blank")

        self._store = store
        self._transmission = transmission
        self._config = config
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="telemetry")
        self._run_lock = threading.Lock()

    def job_supported_names(self) -> tuple[str, ...]:
        """Return supported job names.

        Returns:
            tuple[str, ...]: Supported job names.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return (self._TELEMETRY_JOB_NAME,)

    def job_compute_steps(self) -> tuple[TelemetryComputeStep, ...]:
        """Return the ordered category computers that follow report initialization.

        Returns:
            tuple[TelemetryComputeStep, ...]: Steps in canonical execution order.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        store = self._store
        return (
            TelemetryComputeStep("dockerhub", "dockerhub", partial(job_telemetry_compute_dockerhub, store=store)),
            TelemetryComputeStep(
                "edge_compute", "Edge compute", partial(job_telemetry_compute_edge_compute, store=store)
            ),
            TelemetryComputeStep("endpoint", "endpoint", partial(job_telemetry_compute_endpoint, store=store)),
            TelemetryComputeStep(
                "endpoint_group", "endpoint group", partial(job_telemetry_compute_endpoint_group, store=store)
            ),
            TelemetryComputeStep("registry", "registry", partial(job_telemetry_compute_registry, store=store)),
            TelemetryComputeStep(
                "resource_control", "resource control", partial(job_telemetry_compute_resource_control, store=store)
            ),
            TelemetryComputeStep(
                "runtime",
                "runtime",
                partial(job_telemetry_compute_runtime, application_version=self._config.application_version),
            ),
            TelemetryComputeStep("settings", "settings", partial(job_telemetry_compute_settings, store=store)),
            TelemetryComputeStep("stack", "stack", partial(job_telemetry_compute_stack, store=store)),
            TelemetryComputeStep("tag", "tag", partial(job_telemetry_compute_tag, store=store)),
            TelemetryComputeStep("team", "team", partial(job_telemetry_compute_team, store=store)),
        )

    def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute the telemetry run synchronously.

        Args:
            job_name: Name of job to execute.

        Returns:
            JobExecutionResult: `success` when a report was published, `failed` otherwise.

        Raises:
            ValueError: Raised when job name is unsupported.
            TelemetryRunAlreadyActiveError: Raised when runs are serialized and one is active.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name != self._TELEMETRY_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")

        if not self._config.serialize_runs:
            return self._job_execute_steps(normalized_job_name)

        if not self._run_lock.acquire(blocking=False):
            raise TelemetryRunAlreadyActiveError("telemetry run already active")
        try:
            return self._job_execute_steps(normalized_job_name)
        finally:
            self._run_lock.release()

    def run(self) -> Future:
        """Trigger one background telemetry run without waiting for it.

        Returns:
            Future: Completion handle resolving to the execution result, or to
                None when the trigger was skipped because a run is active.

        Raises:
            RuntimeError: Raised when the executor has been shut down.
        """

        return self._executor.submit(self._job_run_background)

    def job_is_active(self) -> bool:
        """Return whether a serialized run currently holds the run lock."""

        return self._run_lock.locked()

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background worker.

        Args:
            wait: Whether to wait for an in-flight run to finish.
        """

        self._executor.shutdown(wait=wait)

    def _job_run_background(self) -> JobExecutionResult | None:
        """Run the telemetry job on the background worker.

        Nobody waits on the returned future, so anything escaping the run,
        such as a failing transmission hook, is logged here before it is
        re-raised into the future.

        Returns:
            JobExecutionResult | None: Execution result, None when skipped.

        Raises:
            Exception: Re-raised after logging when the run fails outside category computers.
        """

        try:
            return self.job_execute(job_name=self._TELEMETRY_JOB_NAME)
        except TelemetryRunAlreadyActiveError:
            logger.warning("background schedule warning (telemetry). Previous run still active, trigger skipped")
            return None
        except Exception:
            logger.exception("background schedule error (telemetry). Telemetry run aborted unexpectedly")
            raise

    def _job_execute_steps(self, normalized_job_name: str) -> JobExecutionResult:
        """Initialize the report and run every category computer in order.

        Args:
            normalized_job_name: Validated job name.

        Returns:
            JobExecutionResult: Final execution status payload.

        Raises:
            Exception: Propagated unchanged from the transmission hook.
        """

        timeline: list[dict[str, object]] = [domain_build_stage_event(stage="run", status="started")]
        logger.info("telemetry run started")

        timeline.append(domain_build_stage_event(stage=self._INIT_CATEGORY, status="started"))
        try:
            report = job_telemetry_init_report(self._store)
        except Exception as error:
            logger.error(
                "background schedule error (telemetry). Unable to init telemetry data (err=%s)",
                error,
            )
            return self._job_handle_category_failure(
                normalized_job_name=normalized_job_name,
                category=self._INIT_CATEGORY,
                error=error,
                timeline=timeline,
            )
        timeline.append(domain_build_stage_event(stage=self._INIT_CATEGORY, status="completed"))

        for step in self.job_compute_steps():
            timeline.append(domain_build_stage_event(stage=step.category, status="started"))
            try:
                step.compute(report)
            except Exception as error:
                logger.error(
                    "background schedule error (telemetry). Unable to compute %s telemetry (err=%s)",
                    step.label,
                    error,
                )
                return self._job_handle_category_failure(
                    normalized_job_name=normalized_job_name,
                    category=step.category,
                    error=error,
                    timeline=timeline,
                )
            timeline.append(domain_build_stage_event(stage=step.category, status="completed"))

        timeline.append(domain_build_stage_event(stage="run", status="success"))
        logger.info("telemetry run completed for identifier=%s", report.identifier)
        self._transmission.transmission_report_ready(report, timeline)
        return JobExecutionResult(job_name=normalized_job_name, status="success")

    def _job_handle_category_failure(
        self,
        normalized_job_name: str,
        category: str,
        error: Exception,
        timeline: list[dict[str, object]],
    ) -> JobExecutionResult:
        """Record one category failure and notify the transmission hook.

        Must be called from inside the `except` block handling `error`.

        Args:
            normalized_job_name: Validated job name.
            category: Failing category name.
            error: Caught computer exception.
            timeline: Mutable stage timeline events.

        Returns:
            JobExecutionResult: Failed execution result.

        Raises:
            Exception: Propagated unchanged from the transmission hook.
        """

        timeline.append(
            domain_build_stage_event(stage=category, status="failed", details=domain_build_error_details(error))
        )
        timeline.append(domain_build_stage_event(stage="run", status="failed"))
        self._transmission.transmission_report_failed(
            TelemetryRunFailure(
                job_name=normalized_job_name,
                category=category,
                error_type=type(error).__name__,
                error_message=str(error),
                timeline=timeline,
            )
        )
        return JobExecutionResult(job_name=normalized_job_name, status="failed")
