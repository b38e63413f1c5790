"""Forest health indicators derived from environmental series.

A deliberately simple model: hotter, drier air with a worse air quality
index means fewer trees.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence

from ecowatch.shared.models import Degradation, Metric, SampleData

BASELINE_TREES = 10000

# Degradation tiers, checked top down: tree count must exceed the threshold
DEGRADATION_THRESHOLDS = [
    (8000, Degradation.LOW),
    (5000, Degradation.MEDIUM),
    (2000, Degradation.HIGH),
]

DEGRADATION_MESSAGES = {
    Degradation.LOW: "Healthy forest ecosystem",
    Degradation.MEDIUM: "Some forest degradation",
    Degradation.HIGH: "Significant forest loss",
    Degradation.CRITICAL: "Critical deforestation",
}

TREE_ICON_COUNT = {
    Degradation.LOW: 5,
    Degradation.MEDIUM: 3,
    Degradation.HIGH: 2,
    Degradation.CRITICAL: 1,
}

FOREST_COVER_LABELS = {
    Degradation.LOW: "Healthy",
    Degradation.MEDIUM: "Declining",
    Degradation.HIGH: "At Risk",
    Degradation.CRITICAL: "Critical",
}

BIODIVERSITY_HEAT_LIMIT = 30.0
WATER_HUMIDITY_FLOOR = 40.0


def _mean(values: Sequence[float], name: str) -> float:
    if not values:
        raise ValueError(f"Cannot average an empty {name} series")
    return sum(values) / len(values)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_tree_count(
    temperature: Sequence[float],
    humidity: Sequence[float],
    air_quality: Sequence[float],
) -> int:
    """Estimate the surviving tree population from series averages.

    Starts from BASELINE_TREES and subtracts one linear penalty per metric.
    Halves round up; the result is never negative.

    Raises:
        ValueError: If any series is empty.
    """
    avg_temp = _mean(temperature, "temperature")
    avg_humidity = _mean(humidity, "humidity")
    avg_air_quality = _mean(air_quality, "air quality")

    tree_count = BASELINE_TREES
    tree_count -= (avg_temp - 15) * 100
    tree_count -= (60 - avg_humidity) * 50
    tree_count -= avg_air_quality * 20

    return max(0, _round_half_up(tree_count))


def calculate_degradation(tree_count: float) -> Degradation:
    """Map a tree count onto its degradation tier."""
    for threshold, level in DEGRADATION_THRESHOLDS:
        if tree_count > threshold:
            return level
    return Degradation.CRITICAL


def format_tree_count(tree_count: int) -> str:
    return f"{tree_count:,}"


@dataclass(frozen=True)
class HealthIndicator:
    """One row of the environment health panel."""
    name: str
    label: str
    percent: float
    warning: bool


def assess_environment_health(sample: SampleData, index: int) -> List[HealthIndicator]:
    """Forest cover, biodiversity and water resources at a sample index."""
    temperature = sample.series.value_at(Metric.TEMPERATURE, index)
    humidity = sample.series.value_at(Metric.HUMIDITY, index)

    forest_cover = HealthIndicator(
        name="Forest Cover",
        label=FOREST_COVER_LABELS[sample.degradation],
        percent=sample.tree_count / BASELINE_TREES * 100,
        warning=sample.degradation is not Degradation.LOW,
    )

    too_hot = temperature > BIODIVERSITY_HEAT_LIMIT
    biodiversity = HealthIndicator(
        name="Biodiversity",
        label="Declining" if too_hot else "Stable",
        percent=max(0.0, 100 - (temperature - 15) * 3),
        warning=too_hot,
    )

    too_dry = humidity < WATER_HUMIDITY_FLOOR
    water = HealthIndicator(
        name="Water Resources",
        label="Low" if too_dry else "Adequate",
        percent=humidity,
        warning=too_dry,
    )

    return [forest_cover, biodiversity, water]
