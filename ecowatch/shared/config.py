"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv


def get_environment() -> str:
    """Get the current environment name.

    Returns:
        Environment name from ECOWATCH_ENV, defaults to 'ecowatch'.
    """
    return os.getenv("ECOWATCH_ENV", "ecowatch")


def get_config_path(
    config_name: Optional[str] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """Get path to a configuration file.

    Args:
        config_name: Name of config file (without path). If None, uses
            config-{environment}.yaml based on ECOWATCH_ENV.
        config_dir: Directory containing config files. If None, uses
            the 'config' directory at the repo root.

    Returns:
        Path to the configuration file.
    """
    if config_dir is None:
        # Default to repo_root/config/
        package_dir = Path(__file__).parent.parent.parent
        config_dir = package_dir / "config"

    config_dir = Path(config_dir)

    if config_name is None:
        env = get_environment()
        config_name = f"config-{env}.yaml"

    return config_dir / config_name


def load_yaml_config(
    config_path: Optional[Union[str, Path]] = None,
    load_env: bool = True,
    missing_ok: bool = False,
) -> dict:
    """Load YAML configuration file.

    Args:
        config_path: Path to config file. If None, uses get_config_path().
        load_env: Whether to load .env file first.
        missing_ok: Return an empty config instead of raising when the
            file doesn't exist.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist and missing_ok is False.
        yaml.YAMLError: If config file is invalid YAML.
    """
    if load_env:
        load_dotenv()

    if config_path is None:
        config_path = get_config_path()
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        if missing_ok:
            return {}
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def load_section(
    section: str,
    config_path: Optional[Union[str, Path]] = None,
) -> dict:
    """Load one service's section from the YAML config.

    An explicitly given path must exist. Without one, a missing default
    config file simply yields an empty section.

    Args:
        section: Top-level key of the service (e.g. 'server').
        config_path: Path to config file.

    Returns:
        The section merged with the top-level log_level, if any.
    """
    data = load_yaml_config(config_path, missing_ok=config_path is None)
    section_data = dict(data.get(section) or {})
    if "log_level" in data:
        section_data.setdefault("log_level", data["log_level"])
    return section_data


def get_log_level(config: dict) -> str:
    """Extract log level from config, with sensible default.

    Args:
        config: Configuration dictionary.

    Returns:
        Log level string (e.g., 'INFO', 'DEBUG').
    """
    return config.get("log_level", "INFO").upper()
