"""Synthetic environmental series for the forest dashboard."""

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from ecowatch.shared.models import SampleData, Series, DerivedMetrics
from .forest import calculate_tree_count, calculate_degradation

logger = logging.getLogger(__name__)

# Hours before "now" for each generated sample, oldest first
PAST_HOURS = (24, 22, 20, 18, 16, 14, 12, 10, 8, 6, 4, 2, 0)

TRENDS = ("up", "down", "stable")

# Drift applied per step, as a fraction of the value range
TREND_STEP = 0.05


def generate_timestamps(
    now: Optional[datetime] = None,
    offsets: Sequence[int] = PAST_HOURS,
) -> List[datetime]:
    """One timestamp per offset, each `offset` hours before now."""
    if now is None:
        now = datetime.now(timezone.utc)
    return [now - timedelta(hours=hours) for hours in offsets]


def generate_trending_values(
    min_value: float,
    max_value: float,
    count: int,
    trend: str = "stable",
    volatility: float = 0.2,
    rng: Optional[random.Random] = None,
) -> List[float]:
    """Random walk between bounds with an optional directional drift.

    Starts at the midpoint. Each step adds the drift, then uniform noise
    of width `volatility * range` centred on zero, then clamps to the
    bounds. Values can sit at a bound for several steps.

    Args:
        min_value: Lower bound (inclusive).
        max_value: Upper bound (inclusive).
        count: Number of values to produce.
        trend: 'up', 'down' or 'stable'.
        volatility: Noise width as a fraction of the range.
        rng: Random source; an unseeded one is used if omitted.

    Returns:
        `count` values rounded to one decimal.

    Raises:
        ValueError: If trend is not one of TRENDS.
    """
    if trend not in TRENDS:
        raise ValueError(f"Unknown trend: {trend!r} (expected one of {', '.join(TRENDS)})")
    if rng is None:
        rng = random.Random()

    value_range = max_value - min_value
    current = min_value + value_range / 2
    values = []

    for _ in range(count):
        if trend == "up":
            current += value_range * TREND_STEP
        elif trend == "down":
            current -= value_range * TREND_STEP

        current += (rng.random() - 0.5) * value_range * volatility
        current = max(min_value, min(max_value, current))

        values.append(round(current, 1))

    return values


def generate_sample_data(
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    offsets: Sequence[int] = PAST_HOURS,
) -> SampleData:
    """Generate a full series and the forest indicators derived from it."""
    if rng is None:
        rng = random.Random()

    timestamps = generate_timestamps(now, offsets)
    count = len(timestamps)
    temperature = generate_trending_values(15, 35, count, "up", 0.1, rng=rng)
    humidity = generate_trending_values(30, 70, count, "down", 0.15, rng=rng)
    air_quality = generate_trending_values(10, 100, count, "up", 0.3, rng=rng)

    series = Series(
        timestamps=timestamps,
        temperature=temperature,
        humidity=humidity,
        air_quality=air_quality,
    )

    tree_count = calculate_tree_count(temperature, humidity, air_quality)
    derived = DerivedMetrics(
        tree_count=tree_count,
        degradation=calculate_degradation(tree_count),
    )
    logger.debug(f"Generated {count} samples: {tree_count} trees, {derived.degradation.value} degradation")

    return SampleData(series=series, derived=derived)


class SampleGenerator:
    """Repeatable source of sample data for a dashboard.

    With a seed, the sequence of generated samples is reproducible.
    """

    def __init__(self, seed: Optional[int] = None, offsets: Sequence[int] = PAST_HOURS):
        self.rng = random.Random(seed)
        self.offsets = tuple(offsets)
        if not self.offsets:
            raise ValueError("At least one sample offset is required")

    def generate(self, now: Optional[datetime] = None) -> SampleData:
        return generate_sample_data(rng=self.rng, now=now, offsets=self.offsets)
