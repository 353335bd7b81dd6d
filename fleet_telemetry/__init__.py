"""Fleet telemetry aggregation service package."""

__version__ = "2.0.0"
