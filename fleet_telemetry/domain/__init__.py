"""Domain models used across application layer boundaries."""

from .durations import DurationParseError, domain_parse_duration_seconds
from .entities import (
	AuthenticationMethod,
	DockerHubConfiguration,
	DockerSnapshot,
	EdgeSchedule,
	Endpoint,
	EndpointGroup,
	EndpointType,
	MembershipRole,
	Registry,
	RegistryType,
	ResourceControl,
	ResourceControlType,
	ScheduleJobType,
	Settings,
	Stack,
	StackType,
	Tag,
	Team,
	TeamMembership,
	TelemetryConfiguration,
)
from .models import HealthStatus
from .timeline import domain_build_error_details, domain_build_stage_event

__all__ = [
	"AuthenticationMethod",
	"DockerHubConfiguration",
	"DockerSnapshot",
	"DurationParseError",
	"EdgeSchedule",
	"Endpoint",
	"EndpointGroup",
	"EndpointType",
	"HealthStatus",
	"MembershipRole",
	"Registry",
	"RegistryType",
	"ResourceControl",
	"ResourceControlType",
	"ScheduleJobType",
	"Settings",
	"Stack",
	"StackType",
	"Tag",
	"Team",
	"TeamMembership",
	"TelemetryConfiguration",
	"domain_build_error_details",
	"domain_build_stage_event",
	"domain_parse_duration_seconds",
]
