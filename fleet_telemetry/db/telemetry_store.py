"""Database service for the per-entity reads used by telemetry computation."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from fleet_telemetry.domain import (
    DockerHubConfiguration,
    DockerSnapshot,
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

from .interfaces import StoreReadError, TelemetryStorePort


class SQLAlchemyTelemetryStore(TelemetryStorePort):
    """SQLAlchemy-backed read service over the application store tables.

    Every public read runs in its own connection and wraps driver failures
    into `StoreReadError`.
    """

    def __init__(self, engine: Engine):
        """Initialize telemetry store read service.

        Args:
            engine: SQLAlchemy engine used for all read operations.

        Returns:
            None: This initializer does not return a value.

        Raises:
            ValueError: Raised when engine is None.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_telemetry_configuration_get(self) -> TelemetryConfiguration:
        """Fetch the telemetry configuration singleton.

        Returns:
            TelemetryConfiguration: Installation telemetry configuration.

        Raises:
            StoreReadError: Raised when the read fails or the row is missing.
        """

        row = self._db_fetch_singleton(
            query="SELECT telemetry_id FROM telemetry_configuration ORDER BY telemetry_configuration_id LIMIT 1",
            entity_name="telemetry configuration",
        )
        return TelemetryConfiguration(telemetry_id=row["telemetry_id"])

    def db_dockerhub_get(self) -> DockerHubConfiguration:
        """Fetch the DockerHub configuration singleton.

        Returns:
            DockerHubConfiguration: DockerHub credentials summary.

        Raises:
            StoreReadError: Raised when the read fails or the row is missing.
        """

        row = self._db_fetch_singleton(
            query="SELECT authentication FROM dockerhub_configuration ORDER BY dockerhub_configuration_id LIMIT 1",
            entity_name="dockerhub configuration",
        )
        return DockerHubConfiguration(authentication=bool(row["authentication"]))

    def db_schedule_list(self) -> list[EdgeSchedule]:
        """List edge compute schedules.

        Returns:
            list[EdgeSchedule]: Schedules ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(
            query="SELECT schedule_id, name, job_type, recurring FROM edge_schedule ORDER BY schedule_id",
            entity_name="schedules",
        )
        return [
            EdgeSchedule(
                schedule_id=row["schedule_id"],
                name=row["name"],
                job_type=row["job_type"],
                recurring=bool(row["recurring"]),
            )
            for row in rows
        ]

    def db_endpoint_list(self) -> list[Endpoint]:
        """List endpoints with their Docker snapshots.

        Endpoints and snapshots are read inside one connection so both
        result sets describe the same store state.

        Returns:
            list[Endpoint]: Endpoints ordered by id, snapshots most recent first.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        try:
            with self._engine.connect() as connection:
                endpoint_rows = connection.execute(
                    text("SELECT endpoint_id, name, endpoint_type FROM endpoint ORDER BY endpoint_id")
                ).mappings().all()
                snapshot_rows = connection.execute(
                    text(
                        "SELECT "
                        "endpoint_id, taken_at_utc, docker_version, swarm, "
                        "healthy_container_count, running_container_count, stopped_container_count, "
                        "unhealthy_container_count, image_count, volume_count, service_count, "
                        "stack_count, node_count "
                        "FROM endpoint_docker_snapshot "
                        "ORDER BY endpoint_id, taken_at_utc DESC, endpoint_docker_snapshot_id DESC"
                    )
                ).mappings().all()
        except SQLAlchemyError as error:
            raise StoreReadError("failed to list endpoints") from error

        snapshots_by_endpoint: dict[int, list[DockerSnapshot]] = {}
        for snapshot_row in snapshot_rows:
            snapshots_by_endpoint.setdefault(snapshot_row["endpoint_id"], []).append(
                self._map_docker_snapshot(snapshot_row)
            )

        return [
            Endpoint(
                endpoint_id=row["endpoint_id"],
                name=row["name"],
                endpoint_type=row["endpoint_type"],
                snapshots=tuple(snapshots_by_endpoint.get(row["endpoint_id"], ())),
            )
            for row in endpoint_rows
        ]

    def db_endpoint_group_list(self) -> list[EndpointGroup]:
        """List endpoint groups.

        Returns:
            list[EndpointGroup]: Endpoint groups ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(
            query="SELECT endpoint_group_id, name FROM endpoint_group ORDER BY endpoint_group_id",
            entity_name="endpoint groups",
        )
        return [EndpointGroup(endpoint_group_id=row["endpoint_group_id"], name=row["name"]) for row in rows]

    def db_registry_list(self) -> list[Registry]:
        """List registries.

        Returns:
            list[Registry]: Registries ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(
            query="SELECT registry_id, name, registry_type FROM registry ORDER BY registry_id",
            entity_name="registries",
        )
        return [
            Registry(registry_id=row["registry_id"], name=row["name"], registry_type=row["registry_type"])
            for row in rows
        ]

    def db_resource_control_list(self) -> list[ResourceControl]:
        """List resource controls.

        Returns:
            list[ResourceControl]: Resource controls ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(
            query=(
                "SELECT resource_control_id, resource_id, resource_control_type "
                "FROM resource_control ORDER BY resource_control_id"
            ),
            entity_name="resource controls",
        )
        return [
            ResourceControl(
                resource_control_id=row["resource_control_id"],
                resource_id=row["resource_id"],
                resource_control_type=row["resource_control_type"],
            )
            for row in rows
        ]

    def db_settings_get(self) -> Settings:
        """Fetch the application settings singleton.

        Returns:
            Settings: Application settings.

        Raises:
            StoreReadError: Raised when the read fails, the row is missing or
                `black_listed_labels` is not a JSON array.
        """

        row = self._db_fetch_singleton(
            query=(
                "SELECT "
                "authentication_method, logo_url, black_listed_labels, "
                "allow_bind_mounts_for_regular_users, allow_privileged_mode_for_regular_users, "
                "allow_volume_browser_for_regular_users, enable_host_management_features, snapshot_interval "
                "FROM app_settings ORDER BY app_settings_id LIMIT 1"
            ),
            entity_name="settings",
        )

        black_listed_labels = row["black_listed_labels"]
        if black_listed_labels is None:
            black_listed_labels = []
        if not isinstance(black_listed_labels, list):
            raise StoreReadError("app_settings.black_listed_labels must be a JSON array when present")

        return Settings(
            authentication_method=row["authentication_method"],
            logo_url=row["logo_url"] or "",
            black_listed_labels=tuple(black_listed_labels),
            allow_bind_mounts_for_regular_users=bool(row["allow_bind_mounts_for_regular_users"]),
            allow_privileged_mode_for_regular_users=bool(row["allow_privileged_mode_for_regular_users"]),
            allow_volume_browser_for_regular_users=bool(row["allow_volume_browser_for_regular_users"]),
            enable_host_management_features=bool(row["enable_host_management_features"]),
            snapshot_interval=row["snapshot_interval"] or "",
        )

    def db_stack_list(self) -> list[Stack]:
        """List stacks.

        Returns:
            list[Stack]: Stacks ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(
            query="SELECT stack_id, name, stack_type FROM stack ORDER BY stack_id",
            entity_name="stacks",
        )
        return [Stack(stack_id=row["stack_id"], name=row["name"], stack_type=row["stack_type"]) for row in rows]

    def db_tag_list(self) -> list[Tag]:
        """List tags.

        Returns:
            list[Tag]: Tags ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(query="SELECT tag_id, name FROM tag ORDER BY tag_id", entity_name="tags")
        return [Tag(tag_id=row["tag_id"], name=row["name"]) for row in rows]

    def db_team_list(self) -> list[Team]:
        """List teams.

        Returns:
            list[Team]: Teams ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(query="SELECT team_id, name FROM team ORDER BY team_id", entity_name="teams")
        return [Team(team_id=row["team_id"], name=row["name"]) for row in rows]

    def db_team_membership_list(self) -> list[TeamMembership]:
        """List team memberships.

        Returns:
            list[TeamMembership]: Memberships ordered by id.

        Raises:
            StoreReadError: Raised when the read fails.
        """

        rows = self._db_fetch_all(
            query="SELECT team_membership_id, user_id, team_id, role FROM team_membership ORDER BY team_membership_id",
            entity_name="team memberships",
        )
        return [
            TeamMembership(
                team_membership_id=row["team_membership_id"],
                user_id=row["user_id"],
                team_id=row["team_id"],
                role=row["role"],
            )
            for row in rows
        ]

    def _db_fetch_all(self, query: str, entity_name: str) -> list[Any]:
        """Run one fixed list query and return its row mappings.

        Args:
            query: Fixed SQL template without parameters.
            entity_name: Entity label for error reporting.

        Returns:
            list[Any]: SQLAlchemy row mappings.

        Raises:
            StoreReadError: Raised when the query fails.
        """

        try:
            with self._engine.connect() as connection:
                return list(connection.execute(text(query)).mappings().all())
        except SQLAlchemyError as error:
            raise StoreReadError(f"failed to list {entity_name}") from error

    def _db_fetch_singleton(self, query: str, entity_name: str) -> Any:
        """Run one fixed singleton query and return its row mapping.

        Args:
            query: Fixed SQL template without parameters.
            entity_name: Entity label for error reporting.

        Returns:
            Any: SQLAlchemy row mapping.

        Raises:
            StoreReadError: Raised when the query fails or no row exists.
        """

        try:
            with self._engine.connect() as connection:
                row = connection.execute(text(query)).mappings().first()
        except SQLAlchemyError as error:
            raise StoreReadError(f"failed to fetch {entity_name}") from error
        if row is None:
            raise StoreReadError(f"{entity_name} not found")
        return row

    def _map_docker_snapshot(self, row: Any) -> DockerSnapshot:
        """Map SQLAlchemy row mapping to typed Docker snapshot.

        Args:
            row: SQLAlchemy mapping row.

        Returns:
            DockerSnapshot: Typed snapshot record.

        Raises:
            TypeError: Raised when row structure is incompatible.
        """

        return DockerSnapshot(
            taken_at_utc=row["taken_at_utc"],
            docker_version=row["docker_version"] or "",
            swarm=bool(row["swarm"]),
            healthy_container_count=int(row["healthy_container_count"]),
            running_container_count=int(row["running_container_count"]),
            stopped_container_count=int(row["stopped_container_count"]),
            unhealthy_container_count=int(row["unhealthy_container_count"]),
            image_count=int(row["image_count"]),
            volume_count=int(row["volume_count"]),
            service_count=int(row["service_count"]),
            stack_count=int(row["stack_count"]),
            node_count=int(row["node_count"]),
        )
