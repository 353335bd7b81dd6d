"""Telemetry report model and its document rendering.

Section records are immutable and always replaced whole; the root report is
the only mutable object and is written by one run at a time. Document keys are
the contract consumed by the transmission layer and must not change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

AUTHENTICATION_MODE_INTERNAL: Final[str] = "internal"
AUTHENTICATION_MODE_LDAP: Final[str] = "ldap"
AUTHENTICATION_MODE_OAUTH: Final[str] = "oauth"
ENDPOINT_ENVIRONMENT_DOCKER: Final[str] = "docker"
ENDPOINT_ENVIRONMENT_KUBERNETES: Final[str] = "kubernetes"
REGISTRY_TYPE_CUSTOM: Final[str] = "custom"
REGISTRY_TYPE_QUAY: Final[str] = "quay"
REGISTRY_TYPE_AZURE: Final[str] = "azure"
REGISTRY_TYPE_GITLAB: Final[str] = "gitlab"


@dataclass(frozen=True)
class DockerHubTelemetry:
    """DockerHub section.

    Attributes:
        authentication: Whether authenticated credentials are configured.
    """

    authentication: bool = False

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Authentication": self.authentication}


@dataclass(frozen=True)
class EdgeComputeScheduleTelemetry:
    """Edge compute schedule counters.

    Attributes:
        count: Total schedules.
        recurring: Recurring script execution schedules.
    """

    count: int = 0
    recurring: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Count": self.count, "Recurring": self.recurring}


@dataclass(frozen=True)
class EdgeComputeTelemetry:
    """Edge compute section."""

    schedule: EdgeComputeScheduleTelemetry = field(default_factory=EdgeComputeScheduleTelemetry)

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Schedule": self.schedule.report_document()}


@dataclass(frozen=True)
class EndpointDockerTelemetry:
    """Docker details of one endpoint, taken from its most recent snapshot.

    Attributes:
        version: Docker engine version.
        swarm: Swarm mode flag.
        containers: Healthy, running, stopped and unhealthy containers summed.
        images: Images.
        volumes: Volumes.
        services: Services.
        stacks: Stacks.
        nodes: Nodes.
    """

    version: str = ""
    swarm: bool = False
    containers: int = 0
    images: int = 0
    volumes: int = 0
    services: int = 0
    stacks: int = 0
    nodes: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {
            "Version": self.version,
            "Swarm": self.swarm,
            "Containers": self.containers,
            "Images": self.images,
            "Volumes": self.volumes,
            "Services": self.services,
            "Stacks": self.stacks,
            "Nodes": self.nodes,
        }


@dataclass(frozen=True)
class EndpointKubernetesTelemetry:
    """Kubernetes details of one endpoint. Not collected yet, always empty."""

    version: str = ""
    nodes: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Version": self.version, "Nodes": self.nodes}


@dataclass(frozen=True)
class EndpointEnvironmentTelemetry:
    """One endpoint entry.

    Attributes:
        environment: Environment family tag, empty for unclassified types.
        agent: Whether the endpoint is agent-managed.
        edge: Whether the endpoint is edge-managed.
        docker: Docker snapshot summary.
        kubernetes: Kubernetes summary.
    """

    environment: str = ""
    agent: bool = False
    edge: bool = False
    docker: EndpointDockerTelemetry = field(default_factory=EndpointDockerTelemetry)
    kubernetes: EndpointKubernetesTelemetry = field(default_factory=EndpointKubernetesTelemetry)

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {
            "Environment": self.environment,
            "Agent": self.agent,
            "Edge": self.edge,
            "Docker": self.docker.report_document(),
            "Kubernetes": self.kubernetes.report_document(),
        }


@dataclass(frozen=True)
class EndpointTelemetry:
    """Endpoint section."""

    count: int = 0
    endpoints: tuple[EndpointEnvironmentTelemetry, ...] = ()

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {
            "Count": self.count,
            "Endpoints": [endpoint.report_document() for endpoint in self.endpoints],
        }


@dataclass(frozen=True)
class EndpointGroupTelemetry:
    """Endpoint group section."""

    count: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Count": self.count}


@dataclass(frozen=True)
class RegistryConfigurationTelemetry:
    """One registry entry."""

    type: str = REGISTRY_TYPE_CUSTOM

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Type": self.type}


@dataclass(frozen=True)
class RegistryTelemetry:
    """Registry section."""

    count: int = 0
    registries: tuple[RegistryConfigurationTelemetry, ...] = ()

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {
            "Count": self.count,
            "Registries": [registry.report_document() for registry in self.registries],
        }


@dataclass(frozen=True)
class ResourceControlTelemetry:
    """Resource control section.

    Attributes:
        count: Total resource controls, including unclassified kinds.
        containers: Container controls.
        services: Service controls.
        volumes: Volume controls.
        networks: Network controls.
        secrets: Secret controls.
        configs: Config controls, rendered under the `Config` key.
        stacks: Stack controls.
    """

    count: int = 0
    containers: int = 0
    services: int = 0
    volumes: int = 0
    networks: int = 0
    secrets: int = 0
    configs: int = 0
    stacks: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {
            "Count": self.count,
            "Containers": self.containers,
            "Services": self.services,
            "Volumes": self.volumes,
            "Networks": self.networks,
            "Secrets": self.secrets,
            "Config": self.configs,
            "Stacks": self.stacks,
        }


@dataclass(frozen=True)
class RuntimeTelemetry:
    """Runtime section.

    Attributes:
        portainer_version: Running application version.
        platform: Operating system identifier, for example `linux`.
        arch: CPU architecture identifier, for example `amd64`.
    """

    portainer_version: str = ""
    platform: str = ""
    arch: str = ""

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"PortainerVersion": self.portainer_version, "Platform": self.platform, "Arch": self.arch}


@dataclass(frozen=True)
class SettingsDockerTelemetry:
    """Docker restrictions applied to regular users."""

    restrict_bind_mounts: bool = False
    restrict_privileged_mode: bool = False
    restrict_volume_browser: bool = False

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {
            "RestrictBindMounts": self.restrict_bind_mounts,
            "RestrictPrivilegedMode": self.restrict_privileged_mode,
            "RestrictVolumeBrowser": self.restrict_volume_browser,
        }


@dataclass(frozen=True)
class SettingsTelemetry:
    """Settings section.

    Attributes:
        authentication_mode: `internal`, `ldap` or `oauth`.
        use_logo_url: Whether a custom logo URL is configured.
        use_black_listed_labels: Whether at least one label is hidden.
        docker: Docker restrictions for regular users.
        host_management: Host management feature switch.
        snapshot_interval: Endpoint snapshot interval in seconds.
    """

    authentication_mode: str = AUTHENTICATION_MODE_INTERNAL
    use_logo_url: bool = False
    use_black_listed_labels: bool = False
    docker: SettingsDockerTelemetry = field(default_factory=SettingsDockerTelemetry)
    host_management: bool = False
    snapshot_interval: float = 0.0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {
            "AuthenticationMode": self.authentication_mode,
            "UseLogoURL": self.use_logo_url,
            "UseBlackListedLabels": self.use_black_listed_labels,
            "Docker": self.docker.report_document(),
            "HostManagement": self.host_management,
            "SnapshotInterval": self.snapshot_interval,
        }


@dataclass(frozen=True)
class StackTelemetry:
    """Stack section."""

    count: int = 0
    standalone: int = 0
    swarm: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Count": self.count, "Standalone": self.standalone, "Swarm": self.swarm}


@dataclass(frozen=True)
class TagTelemetry:
    """Tag section."""

    count: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Count": self.count}


@dataclass(frozen=True)
class TeamTelemetry:
    """Team section."""

    count: int = 0
    team_leader_count: int = 0

    def report_document(self) -> dict[str, Any]:
        """Render section document."""

        return {"Count": self.count, "TeamLeaderCount": self.team_leader_count}


@dataclass
class TelemetryReport:
    """Root telemetry report built by one run.

    Attributes:
        identifier: Persistent installation identifier.
        dockerhub: DockerHub section.
        edge_compute: Edge compute section.
        endpoint: Endpoint section.
        endpoint_group: Endpoint group section.
        registry: Registry section.
        resource_control: Resource control section.
        runtime: Runtime section.
        settings: Settings section.
        stack: Stack section.
        tag: Tag section.
        team: Team section.
    """

    identifier: str
    dockerhub: DockerHubTelemetry = field(default_factory=DockerHubTelemetry)
    edge_compute: EdgeComputeTelemetry = field(default_factory=EdgeComputeTelemetry)
    endpoint: EndpointTelemetry = field(default_factory=EndpointTelemetry)
    endpoint_group: EndpointGroupTelemetry = field(default_factory=EndpointGroupTelemetry)
    registry: RegistryTelemetry = field(default_factory=RegistryTelemetry)
    resource_control: ResourceControlTelemetry = field(default_factory=ResourceControlTelemetry)
    runtime: RuntimeTelemetry = field(default_factory=RuntimeTelemetry)
    settings: SettingsTelemetry = field(default_factory=SettingsTelemetry)
    stack: StackTelemetry = field(default_factory=StackTelemetry)
    tag: TagTelemetry = field(default_factory=TagTelemetry)
    team: TeamTelemetry = field(default_factory=TeamTelemetry)

    def report_document(self) -> dict[str, Any]:
        """Render the full nested report document.

        Returns:
            dict[str, Any]: JSON-serializable document keyed as the transmission layer expects.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "Identifier": self.identifier,
            "DockerHub": self.dockerhub.report_document(),
            "EdgeCompute": self.edge_compute.report_document(),
            "Endpoint": self.endpoint.report_document(),
            "EndpointGroup": self.endpoint_group.report_document(),
            "Registry": self.registry.report_document(),
            "ResourceControl": self.resource_control.report_document(),
            "Runtime": self.runtime.report_document(),
            "Settings": self.settings.report_document(),
            "Stack": self.stack.report_document(),
            "Tag": self.tag.report_document(),
            "Team": self.team.report_document(),
        }
