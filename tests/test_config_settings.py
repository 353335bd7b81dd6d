"""Tests for runtime settings loading and validation."""

from __future__ import annotations

import pytest

from fleet_telemetry import __version__
from fleet_telemetry.config import SettingsLoadError, config_load_database_url, config_load_settings


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run each test without dotenv files or inherited setting variables.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Temporary working directory.

    Returns:
        None: Environment is isolated as a side effect.
    """

    monkeypatch.chdir(tmp_path)
    for variable_name in (
        "ENVIRONMENT_NAME",
        "DATABASE_URL",
        "APPLICATION_VERSION",
        "TELEMETRY_INTERVAL_SECONDS",
        "TELEMETRY_SCHEDULER_ENABLED",
        "TELEMETRY_SERIALIZE_RUNS",
    ):
        monkeypatch.delenv(variable_name, raising=False)


def test_config_load_settings_applies_defaults() -> None:
    """Load defaults when no overrides are present.

    Returns:
        None: Assertions validate defaults.

    Raises:
        AssertionError: Raised when defaults differ.
    """

    settings = config_load_settings()

    assert settings.application_version == __version__
    assert settings.telemetry_interval_seconds == 86400.0
    assert settings.telemetry_scheduler_enabled is True
    assert settings.telemetry_serialize_runs is True


def test_config_load_settings_reads_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Read telemetry overrides from environment variables.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate overrides.

    Raises:
        AssertionError: Raised when overrides are ignored.
    """

    monkeypatch.setenv("APPLICATION_VERSION", " 2.1.0 ")
    monkeypatch.setenv("TELEMETRY_INTERVAL_SECONDS", "60")
    monkeypatch.setenv("TELEMETRY_SCHEDULER_ENABLED", "false")

    settings = config_load_settings()

    assert settings.application_version == "2.1.0"
    assert settings.telemetry_interval_seconds == 60.0
    assert settings.telemetry_scheduler_enabled is False


@pytest.mark.parametrize(
    ("variable_name", "variable_value"),
    [
        ("TELEMETRY_INTERVAL_SECONDS", "0"),
        ("TELEMETRY_INTERVAL_SECONDS", "-1"),
        ("APPLICATION_VERSION", "   "),
    ],
)
def test_config_load_settings_wraps_validation_errors(
    monkeypatch: pytest.MonkeyPatch,
    variable_name: str,
    variable_value: str,
) -> None:
    """Wrap invalid values into the settings load error.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        variable_name: Overridden variable.
        variable_value: Invalid value.

    Returns:
        None: Assertions validate error wrapping.

    Raises:
        AssertionError: Raised when invalid values are accepted.
    """

    monkeypatch.setenv(variable_name, variable_value)

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()


def test_config_load_database_url_rejects_blank_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reject a blank database URL for migration tooling.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate guard clause.

    Raises:
        AssertionError: Raised when blank URLs are accepted.
    """

    monkeypatch.setenv("DATABASE_URL", "   ")

    with pytest.raises(SettingsLoadError, match="DATABASE_URL must not be blank"):
        config_load_database_url()
