"""Category computers that derive one telemetry report section each.

Every computer reads what it needs through the store port, builds the section
in local variables and assigns it to the report in one statement, so a failed
read never leaves a half-written section behind.
"""

from __future__ import annotations

import logging
import platform
from typing import Final

from fleet_telemetry.db import TelemetryStorePort
from fleet_telemetry.domain import (
    AuthenticationMethod,
    DurationParseError,
    Endpoint,
    EndpointType,
    MembershipRole,
    RegistryType,
    ResourceControlType,
    ScheduleJobType,
    StackType,
    domain_parse_duration_seconds,
)

from .telemetry_report import (
    AUTHENTICATION_MODE_INTERNAL,
    AUTHENTICATION_MODE_LDAP,
    AUTHENTICATION_MODE_OAUTH,
    ENDPOINT_ENVIRONMENT_DOCKER,
    REGISTRY_TYPE_AZURE,
    REGISTRY_TYPE_CUSTOM,
    REGISTRY_TYPE_GITLAB,
    REGISTRY_TYPE_QUAY,
    DockerHubTelemetry,
    EdgeComputeScheduleTelemetry,
    EdgeComputeTelemetry,
    EndpointDockerTelemetry,
    EndpointEnvironmentTelemetry,
    EndpointGroupTelemetry,
    EndpointTelemetry,
    RegistryConfigurationTelemetry,
    RegistryTelemetry,
    ResourceControlTelemetry,
    RuntimeTelemetry,
    SettingsDockerTelemetry,
    SettingsTelemetry,
    StackTelemetry,
    TagTelemetry,
    TeamTelemetry,
    TelemetryReport,
)

logger = logging.getLogger(__name__)

# endpoint type -> (environment, agent, edge)
_ENDPOINT_ENVIRONMENTS: Final[dict[int, tuple[str, bool, bool]]] = {
    EndpointType.DOCKER.value: (ENDPOINT_ENVIRONMENT_DOCKER, False, False),
    EndpointType.AGENT_ON_DOCKER.value: (ENDPOINT_ENVIRONMENT_DOCKER, True, False),
    EndpointType.EDGE_AGENT.value: (ENDPOINT_ENVIRONMENT_DOCKER, True, True),
}

_REGISTRY_TYPE_TAGS: Final[dict[int, str]] = {
    RegistryType.AZURE.value: REGISTRY_TYPE_AZURE,
    RegistryType.QUAY.value: REGISTRY_TYPE_QUAY,
    RegistryType.GITLAB.value: REGISTRY_TYPE_GITLAB,
}

_RESOURCE_CONTROL_BUCKETS: Final[dict[int, str]] = {
    ResourceControlType.CONTAINER.value: "containers",
    ResourceControlType.SERVICE.value: "services",
    ResourceControlType.VOLUME.value: "volumes",
    ResourceControlType.NETWORK.value: "networks",
    ResourceControlType.SECRET.value: "secrets",
    ResourceControlType.CONFIG.value: "configs",
    ResourceControlType.STACK.value: "stacks",
}

_AUTHENTICATION_MODES: Final[dict[int, str]] = {
    AuthenticationMethod.LDAP.value: AUTHENTICATION_MODE_LDAP,
    AuthenticationMethod.OAUTH.value: AUTHENTICATION_MODE_OAUTH,
}

_RUNTIME_ARCH_ALIASES: Final[dict[str, str]] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
}


def job_telemetry_init_report(store: TelemetryStorePort) -> TelemetryReport:
    """Create a fresh report stamped with the installation identifier.

    Args:
        store: Store read port.

    Returns:
        TelemetryReport: Report with default sections.

    Raises:
        StoreReadError: Raised when the telemetry configuration cannot be read.
    """

    telemetry_configuration = store.db_telemetry_configuration_get()
    return TelemetryReport(identifier=telemetry_configuration.telemetry_id)


def job_telemetry_compute_dockerhub(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the DockerHub section."""

    dockerhub = store.db_dockerhub_get()
    report.dockerhub = DockerHubTelemetry(authentication=dockerhub.authentication)


def job_telemetry_compute_edge_compute(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the edge compute section.

    Only script execution schedules that repeat count as recurring.
    """

    schedules = store.db_schedule_list()
    recurring_count = sum(
        1
        for schedule in schedules
        if schedule.job_type == ScheduleJobType.SCRIPT_EXECUTION.value and schedule.recurring
    )
    report.edge_compute = EdgeComputeTelemetry(
        schedule=EdgeComputeScheduleTelemetry(count=len(schedules), recurring=recurring_count)
    )


def job_telemetry_compute_endpoint(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the endpoint section.

    Args:
        report: Report being built.
        store: Store read port.

    Returns:
        None: The section is assigned on the report.

    Raises:
        StoreReadError: Raised when endpoints cannot be read.
    """

    endpoints = store.db_endpoint_list()
    report.endpoint = EndpointTelemetry(
        count=len(endpoints),
        endpoints=tuple(job_telemetry_build_endpoint_entry(endpoint) for endpoint in endpoints),
    )


def job_telemetry_build_endpoint_entry(endpoint: Endpoint) -> EndpointEnvironmentTelemetry:
    """Classify one endpoint into its report entry.

    Unknown endpoint types keep an entry with an empty environment and zeroed
    sub-records so the entry list still matches the endpoint count.

    Args:
        endpoint: Store endpoint record.

    Returns:
        EndpointEnvironmentTelemetry: Endpoint entry.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    environment = _ENDPOINT_ENVIRONMENTS.get(endpoint.endpoint_type)
    if environment is None:
        return EndpointEnvironmentTelemetry()

    environment_name, agent, edge = environment
    return EndpointEnvironmentTelemetry(
        environment=environment_name,
        agent=agent,
        edge=edge,
        docker=job_telemetry_build_endpoint_docker(endpoint),
    )


def job_telemetry_build_endpoint_docker(endpoint: Endpoint) -> EndpointDockerTelemetry:
    """Summarize the most recent Docker snapshot of one endpoint.

    Args:
        endpoint: Store endpoint record with snapshots ordered most recent first.

    Returns:
        EndpointDockerTelemetry: Snapshot summary, all zero when no snapshot exists.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not endpoint.snapshots:
        return EndpointDockerTelemetry()

    snapshot = endpoint.snapshots[0]
    return EndpointDockerTelemetry(
        version=snapshot.docker_version,
        swarm=snapshot.swarm,
        containers=(
            snapshot.healthy_container_count
            + snapshot.running_container_count
            + snapshot.stopped_container_count
            + snapshot.unhealthy_container_count
        ),
        images=snapshot.image_count,
        volumes=snapshot.volume_count,
        services=snapshot.service_count,
        stacks=snapshot.stack_count,
        nodes=snapshot.node_count,
    )


def job_telemetry_compute_endpoint_group(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the endpoint group section."""

    endpoint_groups = store.db_endpoint_group_list()
    report.endpoint_group = EndpointGroupTelemetry(count=len(endpoint_groups))


def job_telemetry_compute_registry(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the registry section. Unlisted registry types report as `custom`."""

    registries = store.db_registry_list()
    report.registry = RegistryTelemetry(
        count=len(registries),
        registries=tuple(
            RegistryConfigurationTelemetry(type=_REGISTRY_TYPE_TAGS.get(registry.registry_type, REGISTRY_TYPE_CUSTOM))
            for registry in registries
        ),
    )


def job_telemetry_compute_resource_control(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the resource control section.

    Controls of an unknown kind count toward the total only.

    Args:
        report: Report being built.
        store: Store read port.

    Returns:
        None: The section is assigned on the report.

    Raises:
        StoreReadError: Raised when resource controls cannot be read.
    """

    resource_controls = store.db_resource_control_list()
    bucket_counts = {bucket: 0 for bucket in _RESOURCE_CONTROL_BUCKETS.values()}
    for resource_control in resource_controls:
        bucket = _RESOURCE_CONTROL_BUCKETS.get(resource_control.resource_control_type)
        if bucket is not None:
            bucket_counts[bucket] += 1

    report.resource_control = ResourceControlTelemetry(count=len(resource_controls), **bucket_counts)


def job_telemetry_compute_runtime(report: TelemetryReport, application_version: str) -> None:
    """Write the runtime section from the running process environment."""

    report.runtime = RuntimeTelemetry(
        portainer_version=application_version,
        platform=job_telemetry_runtime_platform(),
        arch=job_telemetry_runtime_arch(),
    )


def job_telemetry_runtime_platform() -> str:
    """Return the lowercase operating system name (`linux`, `darwin`, `windows`)."""

    return platform.system().lower()


def job_telemetry_runtime_arch() -> str:
    """Return the CPU architecture name normalized to `amd64`/`arm64` style tags."""

    machine = platform.machine().lower()
    return _RUNTIME_ARCH_ALIASES.get(machine, machine)


def job_telemetry_compute_settings(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the settings section.

    A malformed snapshot interval is logged and reported as zero seconds; it
    does not fail the computer.

    Args:
        report: Report being built.
        store: Store read port.

    Returns:
        None: The section is assigned on the report.

    Raises:
        StoreReadError: Raised when settings cannot be read.
    """

    settings = store.db_settings_get()

    snapshot_interval = 0.0
    if settings.snapshot_interval != "":
        try:
            snapshot_interval = domain_parse_duration_seconds(settings.snapshot_interval)
        except DurationParseError as error:
            logger.warning(
                "background schedule warning (telemetry). Unable to parse snapshot interval duration (err=%s)",
                error,
            )

    report.settings = SettingsTelemetry(
        authentication_mode=_AUTHENTICATION_MODES.get(settings.authentication_method, AUTHENTICATION_MODE_INTERNAL),
        use_logo_url=settings.logo_url != "",
        use_black_listed_labels=len(settings.black_listed_labels) > 0,
        docker=SettingsDockerTelemetry(
            restrict_bind_mounts=not settings.allow_bind_mounts_for_regular_users,
            restrict_privileged_mode=not settings.allow_privileged_mode_for_regular_users,
            restrict_volume_browser=not settings.allow_volume_browser_for_regular_users,
        ),
        host_management=settings.enable_host_management_features,
        snapshot_interval=snapshot_interval,
    )


def job_telemetry_compute_stack(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the stack section. Anything other than compose counts as swarm."""

    stacks = store.db_stack_list()
    standalone_count = sum(1 for stack in stacks if stack.stack_type == StackType.COMPOSE.value)
    report.stack = StackTelemetry(
        count=len(stacks),
        standalone=standalone_count,
        swarm=len(stacks) - standalone_count,
    )


def job_telemetry_compute_tag(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the tag section."""

    tags = store.db_tag_list()
    report.tag = TagTelemetry(count=len(tags))


def job_telemetry_compute_team(report: TelemetryReport, store: TelemetryStorePort) -> None:
    """Write the team section from teams and memberships.

    Both reads complete before the section is assigned.
    """

    teams = store.db_team_list()
    team_memberships = store.db_team_membership_list()
    team_leader_count = sum(
        1 for membership in team_memberships if membership.role == MembershipRole.TEAM_LEADER.value
    )
    report.team = TeamTelemetry(count=len(teams), team_leader_count=team_leader_count)
