"""Shared utilities for ecowatch services."""

from .models import Reading, Series, DerivedMetrics, SampleData, Metric, Degradation
from .store import LatestReadingStore
from .config import load_yaml_config, load_section, get_config_path
from .logging import setup_logging

__all__ = [
    "Reading",
    "Series",
    "DerivedMetrics",
    "SampleData",
    "Metric",
    "Degradation",
    "LatestReadingStore",
    "load_yaml_config",
    "load_section",
    "get_config_path",
    "setup_logging",
]
