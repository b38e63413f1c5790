"""Ingestion server - keeps the latest sensor reading in memory."""

__version__ = "0.1.0"

from .app import create_app, run_server


def main():
    """Entry point for the ingestion server."""
    from .config import load_config
    from ecowatch.shared.logging import setup_logging

    config = load_config()
    setup_logging(config.log_level)

    run_server(config)


__all__ = ["create_app", "run_server", "main"]
