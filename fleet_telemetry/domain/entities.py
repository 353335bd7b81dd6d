"""Store entity contracts read by the telemetry job.

Enum-typed attributes are kept as raw integer codes on the records so values
written by newer application versions never fail to load. Classification code
compares them against the enums below and falls back to a default bucket.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EndpointType(int, Enum):
    """Known endpoint environment type codes."""

    DOCKER = 1
    AGENT_ON_DOCKER = 2
    AZURE = 3
    EDGE_AGENT = 4


class RegistryType(int, Enum):
    """Known registry provider type codes."""

    QUAY = 1
    AZURE = 2
    CUSTOM = 3
    GITLAB = 4


class ResourceControlType(int, Enum):
    """Known resource-control resource kind codes."""

    CONTAINER = 1
    SERVICE = 2
    VOLUME = 3
    NETWORK = 4
    SECRET = 5
    STACK = 6
    CONFIG = 7


class StackType(int, Enum):
    """Known stack deployment type codes."""

    SWARM = 1
    COMPOSE = 2


class ScheduleJobType(int, Enum):
    """Known edge schedule job type codes."""

    SNAPSHOT = 1
    ENDPOINT_SYNC = 2
    SCRIPT_EXECUTION = 3


class MembershipRole(int, Enum):
    """Known team membership role codes."""

    TEAM_LEADER = 1
    TEAM_MEMBER = 2


class AuthenticationMethod(int, Enum):
    """Known authentication method codes."""

    INTERNAL = 1
    LDAP = 2
    OAUTH = 3


@dataclass(frozen=True)
class TelemetryConfiguration:
    """Persistent telemetry configuration singleton.

    Attributes:
        telemetry_id: Stable anonymous installation identifier.
    """

    telemetry_id: str


@dataclass(frozen=True)
class DockerHubConfiguration:
    """DockerHub credentials singleton.

    Attributes:
        authentication: Whether authenticated credentials are configured.
    """

    authentication: bool


@dataclass(frozen=True)
class EdgeSchedule:
    """Edge compute schedule record.

    Attributes:
        schedule_id: Schedule identifier.
        name: Schedule display name.
        job_type: Raw `ScheduleJobType` code.
        recurring: Whether the schedule repeats.
    """

    schedule_id: int
    name: str
    job_type: int
    recurring: bool


@dataclass(frozen=True)
class DockerSnapshot:
    """Point-in-time Docker environment snapshot attached to one endpoint.

    Attributes:
        taken_at_utc: Snapshot timestamp.
        docker_version: Docker engine version string.
        swarm: Whether the engine runs in swarm mode.
        healthy_container_count: Healthy containers.
        running_container_count: Running containers.
        stopped_container_count: Stopped containers.
        unhealthy_container_count: Unhealthy containers.
        image_count: Images.
        volume_count: Volumes.
        service_count: Swarm services.
        stack_count: Stacks.
        node_count: Swarm nodes.
    """

    taken_at_utc: datetime | None
    docker_version: str = ""
    swarm: bool = False
    healthy_container_count: int = 0
    running_container_count: int = 0
    stopped_container_count: int = 0
    unhealthy_container_count: int = 0
    image_count: int = 0
    volume_count: int = 0
    service_count: int = 0
    stack_count: int = 0
    node_count: int = 0


@dataclass(frozen=True)
class Endpoint:
    """Managed endpoint record.

    Attributes:
        endpoint_id: Endpoint identifier.
        name: Endpoint display name.
        endpoint_type: Raw `EndpointType` code.
        snapshots: Snapshots ordered most recent first.
    """

    endpoint_id: int
    name: str
    endpoint_type: int
    snapshots: tuple[DockerSnapshot, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EndpointGroup:
    """Endpoint group record."""

    endpoint_group_id: int
    name: str


@dataclass(frozen=True)
class Registry:
    """Registry record.

    Attributes:
        registry_id: Registry identifier.
        name: Registry display name.
        registry_type: Raw `RegistryType` code.
    """

    registry_id: int
    name: str
    registry_type: int


@dataclass(frozen=True)
class ResourceControl:
    """Resource access control record.

    Attributes:
        resource_control_id: Resource control identifier.
        resource_id: Identifier of the controlled resource.
        resource_control_type: Raw `ResourceControlType` code.
    """

    resource_control_id: int
    resource_id: str
    resource_control_type: int


@dataclass(frozen=True)
class Settings:
    """Application settings singleton.

    Attributes:
        authentication_method: Raw `AuthenticationMethod` code.
        logo_url: Custom logo URL, blank when unset.
        black_listed_labels: Configured hidden container labels.
        allow_bind_mounts_for_regular_users: Bind mount permission for regular users.
        allow_privileged_mode_for_regular_users: Privileged mode permission for regular users.
        allow_volume_browser_for_regular_users: Volume browser permission for regular users.
        enable_host_management_features: Host management feature switch.
        snapshot_interval: Duration string between endpoint snapshots.
    """

    authentication_method: int = AuthenticationMethod.INTERNAL.value
    logo_url: str = ""
    black_listed_labels: tuple[dict[str, str], ...] = field(default_factory=tuple)
    allow_bind_mounts_for_regular_users: bool = False
    allow_privileged_mode_for_regular_users: bool = False
    allow_volume_browser_for_regular_users: bool = False
    enable_host_management_features: bool = False
    snapshot_interval: str = ""


@dataclass(frozen=True)
class Stack:
    """Stack record.

    Attributes:
        stack_id: Stack identifier.
        name: Stack name.
        stack_type: Raw `StackType` code.
    """

    stack_id: int
    name: str
    stack_type: int


@dataclass(frozen=True)
class Tag:
    """Tag record."""

    tag_id: int
    name: str


@dataclass(frozen=True)
class Team:
    """Team record."""

    team_id: int
    name: str


@dataclass(frozen=True)
class TeamMembership:
    """Team membership record.

    Attributes:
        team_membership_id: Membership identifier.
        user_id: Member user identifier.
        team_id: Team identifier.
        role: Raw `MembershipRole` code.
    """

    team_membership_id: int
    user_id: int
    team_id: int
    role: int
