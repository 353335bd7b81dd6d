"""Database layer package for all SQL and store read boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import DatabaseHealthPort, StoreReadError, TelemetryStorePort
from .session import db_create_engine
from .telemetry_store import SQLAlchemyTelemetryStore

__all__ = [
	"DatabaseHealthPort",
	"StoreReadError",
	"TelemetryStorePort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyTelemetryStore",
	"db_create_engine",
]
