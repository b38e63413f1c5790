"""Configuration for the terminal dashboards."""

import os
from dataclasses import dataclass
from typing import Optional

from ecowatch.shared.config import get_log_level, load_section


@dataclass
class DisplayConfig:
    """Configuration for the live and forest dashboards."""

    # Live dashboard
    server_url: str = "http://localhost:3000/api/data"
    poll_interval: float = 5.0  # seconds, 0 fetches once
    request_timeout: float = 5.0  # seconds

    # Forest dashboard
    refresh_interval: float = 10.0  # seconds between automatic regenerations
    auto_refresh: bool = False
    seed: Optional[int] = None

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "DisplayConfig":
        """Create config from dictionary."""
        return cls(
            server_url=data.get("server_url", "http://localhost:3000/api/data"),
            poll_interval=float(data.get("poll_interval", 5.0)),
            request_timeout=float(data.get("request_timeout", 5.0)),
            refresh_interval=float(data.get("refresh_interval", 10.0)),
            auto_refresh=bool(data.get("auto_refresh", False)),
            seed=data.get("seed"),
            log_level=get_log_level(data),
        )


def load_config(config_path: Optional[str] = None) -> DisplayConfig:
    """Load dashboard configuration from YAML, then apply environment overrides.

    Args:
        config_path: Path to YAML config file. If not provided, uses
                    ECOWATCH_CONFIG, then config/config-{env}.yaml.

    Returns:
        DisplayConfig instance.
    """
    if config_path is None:
        config_path = os.environ.get("ECOWATCH_CONFIG")

    config = DisplayConfig.from_dict(load_section("display", config_path))

    if server_url := os.environ.get("ECOWATCH_SERVER_URL"):
        config.server_url = server_url
    if log_level := os.environ.get("LOG_LEVEL"):
        config.log_level = log_level.upper()

    return config
