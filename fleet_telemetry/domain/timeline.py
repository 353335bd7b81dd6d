"""Shared timeline event helper utilities for telemetry runs."""

from __future__ import annotations

from datetime import datetime, timezone
import traceback
from typing import Any


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured timeline event payload.

    Args:
        stage: Stage name, usually a telemetry category.
        status: Stage status marker (`started`, `completed`, `failed`, `success`).
        details: Optional structured details object.

    Returns:
        dict[str, object]: Structured timeline event.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        event_payload["details"] = details
    return event_payload


def domain_build_error_details(error: BaseException) -> dict[str, Any]:
    """Build failure details for one caught exception.

    Must be called from inside the `except` block so the traceback is current.

    Args:
        error: Caught exception.

    Returns:
        dict[str, Any]: Error type, message and formatted traceback.
    """

    return {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "traceback": traceback.format_exc(),
    }
