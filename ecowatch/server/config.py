"""Configuration for the ingestion server."""

import os
from dataclasses import dataclass
from typing import Optional

from ecowatch.shared.config import get_log_level, load_section


@dataclass
class ServerConfig:
    """Configuration for the ingestion/query endpoint."""

    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "ServerConfig":
        """Create config from dictionary."""
        return cls(
            host=data.get("host", "0.0.0.0"),
            port=int(data.get("port", 3000)),
            log_level=get_log_level(data),
        )


def load_config(config_path: Optional[str] = None) -> ServerConfig:
    """Load server configuration from YAML, then apply environment overrides.

    Args:
        config_path: Path to YAML config file. If not provided, uses
                    ECOWATCH_CONFIG, then config/config-{env}.yaml.

    Returns:
        ServerConfig instance.
    """
    if config_path is None:
        config_path = os.environ.get("ECOWATCH_CONFIG")

    config = ServerConfig.from_dict(load_section("server", config_path))

    if host := os.environ.get("ECOWATCH_HOST"):
        config.host = host
    if port := os.environ.get("ECOWATCH_PORT"):
        config.port = int(port)
    if log_level := os.environ.get("LOG_LEVEL"):
        config.log_level = log_level.upper()

    return config
