"""State of the forest dashboard: current sample, selection and toggles."""

import logging
import time
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from ecowatch.shared.models import Metric, SampleData
from ecowatch.simulator.generator import SampleGenerator
from .trends import MetricTrend, compare

logger = logging.getLogger(__name__)

# Timeline shows a label on every Nth point, plus the last one
TIMELINE_LABEL_EVERY = 4


def format_timestamp(timestamp: datetime) -> str:
    """Hour and minute in local time."""
    return timestamp.astimezone().strftime("%H:%M")


def timeline_labels(timestamps: Sequence[datetime]) -> List[Tuple[int, Optional[str]]]:
    """Pair each timeline point with its label, or None for unlabelled points."""
    last = len(timestamps) - 1
    return [
        (i, format_timestamp(ts) if i % TIMELINE_LABEL_EVERY == 0 or i == last else None)
        for i, ts in enumerate(timestamps)
    ]


class ForestDashboard:
    """Interactive state behind the forest dashboard.

    Holds one generated sample at a time. Refreshing replaces it
    wholesale and moves the selection back to the most recent point.
    """

    def __init__(
        self,
        generator: SampleGenerator,
        auto_refresh: bool = False,
        refresh_interval: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.generator = generator
        self.refresh_interval = refresh_interval
        self.clock = clock
        self.active_metrics: List[Metric] = list(Metric)
        self.data: SampleData = generator.generate()
        self.current_index = self.data.last_index
        self.auto_refresh = auto_refresh
        self._last_refresh = clock()

    def refresh(self) -> SampleData:
        """Regenerate the sample and select its most recent point"""
        self.data = self.generator.generate()
        self.current_index = self.data.last_index
        self._last_refresh = self.clock()
        logger.info(
            f"Refreshed data: {self.data.tree_count} trees, "
            f"{self.data.degradation.value} degradation"
        )
        return self.data

    def select_point(self, index: int):
        if not 0 <= index <= self.data.last_index:
            raise IndexError(f"Sample index {index} out of range 0..{self.data.last_index}")
        self.current_index = index

    def toggle_metric(self, metric: Metric) -> bool:
        """Show or hide a metric in the series view.

        The last visible metric can't be hidden.

        Returns:
            Whether the metric is active afterwards.
        """
        if metric in self.active_metrics:
            if len(self.active_metrics) > 1:
                self.active_metrics.remove(metric)
                return False
            return True
        self.active_metrics.append(metric)
        return True

    def set_auto_refresh(self, enabled: bool):
        """Turn timed refresh on or off; turning it on restarts the timer"""
        if enabled and not self.auto_refresh:
            self._last_refresh = self.clock()
        self.auto_refresh = enabled

    def tick(self) -> bool:
        """Refresh if auto refresh is on and the interval has elapsed.

        Returns:
            True if the data was regenerated.
        """
        if not self.auto_refresh:
            return False
        if self.clock() - self._last_refresh < self.refresh_interval:
            return False
        self.refresh()
        return True

    def metric_trends(self) -> List[MetricTrend]:
        """Each metric at the selected point compared with the point before it"""
        series = self.data.series
        return [
            compare(
                metric,
                series.value_at(metric, self.current_index),
                series.previous_value(metric, self.current_index),
            )
            for metric in Metric
        ]

    @property
    def current_timestamp(self) -> datetime:
        return self.data.series.timestamps[self.current_index]
