"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
"""

from typing import Protocol

from fleet_telemetry.domain import (
    DockerHubConfiguration,
    EdgeSchedule,
    Endpoint,
    EndpointGroup,
    HealthStatus,
    Registry,
    ResourceControl,
    Settings,
    Stack,
    Tag,
    Team,
    TeamMembership,
    TelemetryConfiguration,
)


class StoreReadError(RuntimeError):
    """Raised when one store read operation fails or its record is missing."""


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class TelemetryStorePort(Protocol):
    """Port definition for the per-entity reads used by telemetry computation.

    Every method raises `StoreReadError` when the underlying read fails.
    Singleton getters also raise it when the record does not exist.
    """

    def db_telemetry_configuration_get(self) -> TelemetryConfiguration:
        """Return the telemetry configuration singleton."""

    def db_dockerhub_get(self) -> DockerHubConfiguration:
        """Return the DockerHub configuration singleton."""

    def db_schedule_list(self) -> list[EdgeSchedule]:
        """Return all edge compute schedules."""

    def db_endpoint_list(self) -> list[Endpoint]:
        """Return all endpoints with their snapshots ordered most recent first."""

    def db_endpoint_group_list(self) -> list[EndpointGroup]:
        """Return all endpoint groups."""

    def db_registry_list(self) -> list[Registry]:
        """Return all registries."""

    def db_resource_control_list(self) -> list[ResourceControl]:
        """Return all resource controls."""

    def db_settings_get(self) -> Settings:
        """Return the application settings singleton."""

    def db_stack_list(self) -> list[Stack]:
        """Return all stacks."""

    def db_tag_list(self) -> list[Tag]:
        """Return all tags."""

    def db_team_list(self) -> list[Team]:
        """Return all teams."""

    def db_team_membership_list(self) -> list[TeamMembership]:
        """Return all team memberships."""
