"""Store readiness checks used by the health surface."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from fleet_telemetry.domain import HealthStatus

from .interfaces import DatabaseHealthPort

_TELEMETRY_IDENTIFIER_PROBE = "SELECT COUNT(*) FROM telemetry_configuration"


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Checks that the store answers and holds an installation identifier.

    A reachable store without a telemetry configuration row is reported as
    `degraded`: every telemetry run would fail at initialization.
    """

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the store URL with the password masked."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Probe the store and the telemetry configuration table.

        Returns:
            HealthStatus: `ok` when an identifier exists, `degraded` when the
                table is empty.

        Raises:
            ConnectionError: Raised when the store or the table cannot be read.
        """

        try:
            with self._engine.connect() as connection:
                configuration_count = connection.execute(text(_TELEMETRY_IDENTIFIER_PROBE)).scalar_one()
        except SQLAlchemyError as error:
            raise ConnectionError("store connectivity check failed") from error

        if configuration_count == 0:
            return HealthStatus(status="degraded", detail="telemetry configuration missing")
        return HealthStatus(status="ok", detail="store connectivity verified")
