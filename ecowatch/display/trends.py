"""Trend classification between two adjacent samples."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ecowatch.shared.models import Metric

# Changes smaller than this (in percent) count as stable
STABLE_THRESHOLD = 0.5


class Trend(Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"

    @property
    def arrow(self) -> str:
        return _ARROWS[self]


_ARROWS = {Trend.UP: "↑", Trend.DOWN: "↓", Trend.STABLE: "–"}

# Direction that is bad news for each metric
_UNFAVORABLE = {
    Metric.TEMPERATURE: Trend.UP,
    Metric.HUMIDITY: Trend.DOWN,
    Metric.AIR_QUALITY: Trend.UP,
}


def percent_change(current: float, previous: Optional[float]) -> Optional[float]:
    """Relative change from previous to current, in percent.

    Returns 0.0 when there is no previous sample and None when the
    previous value is zero, where a relative change is undefined.
    """
    if previous is None:
        return 0.0
    if previous == 0:
        return None
    return (current - previous) / previous * 100


def classify_trend(current: float, previous: Optional[float]) -> Trend:
    change = percent_change(current, previous)
    if change is None:
        # Zero baseline: only the direction is meaningful
        change = current - previous
        if change == 0:
            return Trend.STABLE
    elif abs(change) < STABLE_THRESHOLD:
        return Trend.STABLE
    return Trend.UP if change > 0 else Trend.DOWN


def is_bad_trend(metric: Metric, trend: Trend) -> bool:
    """Whether a trend is unfavorable for the environment."""
    return _UNFAVORABLE[metric] is trend


@dataclass(frozen=True)
class MetricTrend:
    """Current value of a metric compared with the previous sample."""
    metric: Metric
    current: float
    previous: Optional[float]
    percent: Optional[float]
    trend: Trend

    @property
    def is_bad(self) -> bool:
        return is_bad_trend(self.metric, self.trend)

    @property
    def percent_text(self) -> str:
        if self.percent is None:
            return "n/a"
        return f"{abs(self.percent):.1f}%"


def compare(metric: Metric, current: float, previous: Optional[float]) -> MetricTrend:
    return MetricTrend(
        metric=metric,
        current=current,
        previous=previous,
        percent=percent_change(current, previous),
        trend=classify_trend(current, previous),
    )
