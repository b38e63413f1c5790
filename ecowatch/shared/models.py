"""Core data models for readings and generated series."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Metric(Enum):
    """Environmental metrics tracked by the dashboards."""
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    AIR_QUALITY = "air_quality"

    @property
    def title(self) -> str:
        return _METRIC_TITLES[self]

    @property
    def unit(self) -> str:
        return _METRIC_UNITS[self]

    @property
    def color(self) -> str:
        return _METRIC_COLORS[self]


_METRIC_TITLES = {
    Metric.TEMPERATURE: "Temperature",
    Metric.HUMIDITY: "Humidity",
    Metric.AIR_QUALITY: "Air Quality",
}

_METRIC_UNITS = {
    Metric.TEMPERATURE: "°C",
    Metric.HUMIDITY: "%",
    Metric.AIR_QUALITY: "AQI",
}

_METRIC_COLORS = {
    Metric.TEMPERATURE: "#ef4444",  # red
    Metric.HUMIDITY: "#0ea5e9",     # blue
    Metric.AIR_QUALITY: "#a3a3a3",  # gray
}


class Degradation(Enum):
    """Forest degradation tier, ordered from healthiest to worst."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class _Missing:
    """Marker for a reading field the client never sent."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass(frozen=True)
class Reading:
    """Latest sample pushed by a sensor node.

    Fields hold whatever the client sent, explicit nulls included. A field
    the client left out is MISSING and is omitted again when the reading
    is serialized.
    """
    temperature: Any = MISSING
    humidity: Any = MISSING
    air_quality: Any = MISSING

    @classmethod
    def from_dict(cls, data: Any) -> "Reading":
        """Build a reading from a decoded request body.

        Anything that is not a JSON object counts as an empty body.
        `airQuality` is used only when the body has no `air_quality` key.
        """
        if not isinstance(data, dict):
            return cls()
        if "air_quality" in data:
            air_quality = data["air_quality"]
        else:
            air_quality = data.get("airQuality", MISSING)
        return cls(
            temperature=data.get("temperature", MISSING),
            humidity=data.get("humidity", MISSING),
            air_quality=air_quality,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation with snake_case keys, missing fields dropped."""
        data = {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "air_quality": self.air_quality,
        }
        return {key: value for key, value in data.items() if value is not MISSING}

    def get(self, metric: Metric) -> Any:
        return getattr(self, metric.value)

    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass(frozen=True)
class Series:
    """Time-ordered samples for all three metrics.

    Index i of every sequence refers to the same instant.
    """
    timestamps: Tuple[datetime, ...]
    temperature: Tuple[float, ...]
    humidity: Tuple[float, ...]
    air_quality: Tuple[float, ...]

    def __post_init__(self):
        # Freeze whatever sequence type the caller handed in
        for name in ("timestamps", "temperature", "humidity", "air_quality"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

        lengths = {
            len(self.timestamps),
            len(self.temperature),
            len(self.humidity),
            len(self.air_quality),
        }
        if len(lengths) != 1:
            raise ValueError(
                f"Series sequences must share one length, got "
                f"timestamps={len(self.timestamps)}, temperature={len(self.temperature)}, "
                f"humidity={len(self.humidity)}, air_quality={len(self.air_quality)}"
            )

    def __len__(self) -> int:
        return len(self.timestamps)

    def values(self, metric: Metric) -> Tuple[float, ...]:
        """Return the value sequence for a metric."""
        return getattr(self, metric.value)

    def value_at(self, metric: Metric, index: int) -> float:
        return self.values(metric)[index]

    def previous_value(self, metric: Metric, index: int) -> Optional[float]:
        """Value one step before index, or None when index is the first sample."""
        if index <= 0:
            return None
        return self.values(metric)[index - 1]


@dataclass(frozen=True)
class DerivedMetrics:
    """Aggregate forest indicators computed from a series."""
    tree_count: int
    degradation: Degradation


@dataclass(frozen=True)
class SampleData:
    """One generated series together with its derived indicators."""
    series: Series
    derived: DerivedMetrics

    @property
    def tree_count(self) -> int:
        return self.derived.tree_count

    @property
    def degradation(self) -> Degradation:
        return self.derived.degradation

    @property
    def last_index(self) -> int:
        return len(self.series) - 1
