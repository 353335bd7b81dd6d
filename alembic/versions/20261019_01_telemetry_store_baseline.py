"""Telemetry store schema baseline

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "telemetry_configuration",
        sa.Column("telemetry_configuration_id", sa.Integer(), primary_key=True),
        sa.Column("telemetry_id", sa.Text(), nullable=False),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )

    op.create_table(
        "dockerhub_configuration",
        sa.Column("dockerhub_configuration_id", sa.Integer(), primary_key=True),
        sa.Column("authentication", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )

    op.create_table(
        "edge_schedule",
        sa.Column("schedule_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("job_type", sa.SmallInteger(), nullable=False),
        sa.Column("recurring", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )

    op.create_table(
        "endpoint",
        sa.Column("endpoint_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("endpoint_type", sa.SmallInteger(), nullable=False),
    )

    op.create_table(
        "endpoint_docker_snapshot",
        sa.Column("endpoint_docker_snapshot_id", sa.BigInteger(), primary_key=True),
        sa.Column(
            "endpoint_id",
            sa.Integer(),
            sa.ForeignKey("endpoint.endpoint_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("taken_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("docker_version", sa.Text(), nullable=True),
        sa.Column("swarm", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("healthy_container_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("running_container_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("stopped_container_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("unhealthy_container_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("image_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("volume_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("service_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("stack_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("node_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )
    op.create_index(
        "ix_endpoint_docker_snapshot_endpoint_taken",
        "endpoint_docker_snapshot",
        ["endpoint_id", "taken_at_utc"],
    )

    op.create_table(
        "endpoint_group",
        sa.Column("endpoint_group_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
    )

    op.create_table(
        "registry",
        sa.Column("registry_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("registry_type", sa.SmallInteger(), nullable=False),
    )

    op.create_table(
        "resource_control",
        sa.Column("resource_control_id", sa.Integer(), primary_key=True),
        sa.Column("resource_id", sa.Text(), nullable=False),
        sa.Column("resource_control_type", sa.SmallInteger(), nullable=False),
    )

    op.create_table(
        "app_settings",
        sa.Column("app_settings_id", sa.Integer(), primary_key=True),
        sa.Column("authentication_method", sa.SmallInteger(), nullable=False, server_default=sa.text("1")),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("black_listed_labels", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("allow_bind_mounts_for_regular_users", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "allow_privileged_mode_for_regular_users", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column(
            "allow_volume_browser_for_regular_users", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("enable_host_management_features", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("snapshot_interval", sa.Text(), nullable=True),
    )

    op.create_table(
        "stack",
        sa.Column("stack_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("stack_type", sa.SmallInteger(), nullable=False),
    )

    op.create_table(
        "tag",
        sa.Column("tag_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.UniqueConstraint("name", name="uq_tag_name"),
    )

    op.create_table(
        "team",
        sa.Column("team_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.UniqueConstraint("name", name="uq_team_name"),
    )

    op.create_table(
        "team_membership",
        sa.Column("team_membership_id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), sa.ForeignKey("team.team_id", ondelete="CASCADE"), nullable=False),
        sa.Column("role", sa.SmallInteger(), nullable=False),
        sa.UniqueConstraint("user_id", "team_id", name="uq_team_membership_user_team"),
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("team_membership")
    op.drop_table("team")
    op.drop_table("tag")
    op.drop_table("stack")
    op.drop_table("app_settings")
    op.drop_table("resource_control")
    op.drop_table("registry")
    op.drop_table("endpoint_group")
    op.drop_index("ix_endpoint_docker_snapshot_endpoint_taken", table_name="endpoint_docker_snapshot")
    op.drop_table("endpoint_docker_snapshot")
    op.drop_table("endpoint")
    op.drop_table("edge_schedule")
    op.drop_table("dockerhub_configuration")
    op.drop_table("telemetry_configuration")
