"""Mock environmental series and forest health metrics."""

from .generator import (
    PAST_HOURS,
    SampleGenerator,
    generate_sample_data,
    generate_timestamps,
    generate_trending_values,
)
from .forest import (
    assess_environment_health,
    calculate_degradation,
    calculate_tree_count,
    format_tree_count,
)

__all__ = [
    "PAST_HOURS",
    "SampleGenerator",
    "generate_sample_data",
    "generate_timestamps",
    "generate_trending_values",
    "assess_environment_health",
    "calculate_degradation",
    "calculate_tree_count",
    "format_tree_count",
]
