"""In-process transmission hook that keeps the latest telemetry outcome."""

from __future__ import annotations

import logging
import threading
from typing import Any

from .interfaces import TelemetryRunFailure, TelemetryTransmissionPort
from .telemetry_report import TelemetryReport

logger = logging.getLogger(__name__)


class LatestTelemetryReportRecorder(TelemetryTransmissionPort):
    """Transmission hook that records the latest report document and failure.

    The recorder renders the report document at handoff time and never sends
    it anywhere; API and CLI surfaces read it back.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest_document: dict[str, Any] | None = None
        self._latest_timeline: list[dict[str, Any]] = []
        self._latest_failure: TelemetryRunFailure | None = None

    def transmission_report_ready(self, report: TelemetryReport, timeline: list[dict[str, Any]]) -> None:
        """Record one complete report document.

        Args:
            report: Completed report.
            timeline: Stage timeline of the successful run.
        """

        document = report.report_document()
        with self._lock:
            self._latest_document = document
            self._latest_timeline = list(timeline)
        logger.info("telemetry report ready for identifier=%s", document["Identifier"])

    def transmission_report_failed(self, failure: TelemetryRunFailure) -> None:
        """Record the latest failure summary.

        Args:
            failure: Failed run summary.
        """

        with self._lock:
            self._latest_failure = failure
        logger.warning(
            "telemetry report failed in category=%s (%s: %s)",
            failure.category,
            failure.error_type,
            failure.error_message,
        )

    def transmission_latest_document(self) -> dict[str, Any] | None:
        """Return the latest report document, None before the first success."""

        with self._lock:
            return self._latest_document

    def transmission_latest_timeline(self) -> list[dict[str, Any]]:
        """Return the stage timeline of the latest successful run."""

        with self._lock:
            return list(self._latest_timeline)

    def transmission_latest_failure(self) -> TelemetryRunFailure | None:
        """Return the latest failure summary, None when no run has failed."""

        with self._lock:
            return self._latest_failure
