"""Environmental monitoring: reading ingestion and forest-health dashboards."""

__version__ = "0.1.0"
