"""Shared in-memory test doubles for telemetry job tests."""

from __future__ import annotations

from typing import Any

from fleet_telemetry.db import StoreReadError
from fleet_telemetry.domain import (
    DockerHubConfiguration,
    EdgeSchedule,
    Endpoint,
    EndpointGroup,
    Registry,
    ResourceControl,
    Settings,
    Stack,
    Tag,
    Team,
    TeamMembership,
    TelemetryConfiguration,
)


class TelemetryStoreStub:
    """In-memory store that records read calls and can fail selected reads.

    Attributes:
        calls: Ordered names of the read methods invoked.
        failing_methods: Read method names that raise `StoreReadError`.
    """

    def __init__(self):
        """Initialize an empty store with default singletons.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.telemetry_configuration = TelemetryConfiguration(telemetry_id="installation-1")
        self.dockerhub = DockerHubConfiguration(authentication=False)
        self.schedules: list[EdgeSchedule] = []
        self.endpoints: list[Endpoint] = []
        self.endpoint_groups: list[EndpointGroup] = []
        self.registries: list[Registry] = []
        self.resource_controls: list[ResourceControl] = []
        self.settings = Settings()
        self.stacks: list[Stack] = []
        self.tags: list[Tag] = []
        self.teams: list[Team] = []
        self.team_memberships: list[TeamMembership] = []
        self.calls: list[str] = []
        self.failing_methods: set[str] = set()

    def db_telemetry_configuration_get(self) -> TelemetryConfiguration:
        """Return telemetry configuration."""

        return self._stub_read("db_telemetry_configuration_get", self.telemetry_configuration)

    def db_dockerhub_get(self) -> DockerHubConfiguration:
        """Return DockerHub configuration."""

        return self._stub_read("db_dockerhub_get", self.dockerhub)

    def db_schedule_list(self) -> list[EdgeSchedule]:
        """Return schedules."""

        return self._stub_read("db_schedule_list", list(self.schedules))

    def db_endpoint_list(self) -> list[Endpoint]:
        """Return endpoints."""

        return self._stub_read("db_endpoint_list", list(self.endpoints))

    def db_endpoint_group_list(self) -> list[EndpointGroup]:
        """Return endpoint groups."""

        return self._stub_read("db_endpoint_group_list", list(self.endpoint_groups))

    def db_registry_list(self) -> list[Registry]:
        """Return registries."""

        return self._stub_read("db_registry_list", list(self.registries))

    def db_resource_control_list(self) -> list[ResourceControl]:
        """Return resource controls."""

        return self._stub_read("db_resource_control_list", list(self.resource_controls))

    def db_settings_get(self) -> Settings:
        """Return settings."""

        return self._stub_read("db_settings_get", self.settings)

    def db_stack_list(self) -> list[Stack]:
        """Return stacks."""

        return self._stub_read("db_stack_list", list(self.stacks))

    def db_tag_list(self) -> list[Tag]:
        """Return tags."""

        return self._stub_read("db_tag_list", list(self.tags))

    def db_team_list(self) -> list[Team]:
        """Return teams."""

        return self._stub_read("db_team_list", list(self.teams))

    def db_team_membership_list(self) -> list[TeamMembership]:
        """Return team memberships."""

        return self._stub_read("db_team_membership_list", list(self.team_memberships))

    def _stub_read(self, method_name: str, value: Any) -> Any:
        """Record one read and return its value or raise the injected failure.

        Args:
            method_name: Invoked read method name.
            value: Value returned when the read succeeds.

        Returns:
            Any: Configured value.

        Raises:
            StoreReadError: Raised when the method is configured to fail.
        """

        self.calls.append(method_name)
        if method_name in self.failing_methods:
            raise StoreReadError(f"{method_name} unavailable")
        return value


class TransmissionSpy:
    """Transmission hook that captures every handoff."""

    def __init__(self):
        self.ready_reports: list[Any] = []
        self.ready_timelines: list[list[dict[str, Any]]] = []
        self.failures: list[Any] = []

    def transmission_report_ready(self, report, timeline) -> None:
        """Capture one ready report."""

        self.ready_reports.append(report)
        self.ready_timelines.append(timeline)

    def transmission_report_failed(self, failure) -> None:
        """Capture one failure."""

        self.failures.append(failure)
