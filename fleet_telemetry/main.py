"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service
with its telemetry schedule, or runs one telemetry aggregation in the foreground.
"""

import argparse
import json
import logging

import uvicorn

from fleet_telemetry.bootstrap import bootstrap_create_runtime, bootstrap_create_telemetry_runner


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

    argument_parser = argparse.ArgumentParser(description="Fleet telemetry runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "telemetry-run"),
        help="Runtime command: `api` starts server and schedule, `telemetry-run` runs one aggregation "
        "and prints the report document",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    if parsed_arguments.command == "telemetry-run":
        runner, report_recorder = bootstrap_create_telemetry_runner()
        try:
            execution_result = runner.job_execute(job_name="telemetry_run")
        finally:
            runner.shutdown()
        if execution_result.status != "success":
            raise SystemExit(1)
        print(json.dumps(report_recorder.transmission_latest_document(), indent=2))
        return

    runtime = bootstrap_create_runtime()
    if runtime.scheduler is not None:
        runtime.scheduler.start()
    try:
        uvicorn.run(
            runtime.application,
            host=runtime.settings.application_host,
            port=runtime.settings.application_port,
        )
    finally:
        if runtime.scheduler is not None:
            runtime.scheduler.shutdown(wait=False)
        runtime.runner.shutdown(wait=False)


if __name__ == "__main__":
    main()
