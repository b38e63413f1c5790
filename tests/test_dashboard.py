from datetime import datetime, timedelta, timezone

import pytest

from ecowatch.display.dashboard import ForestDashboard, timeline_labels
from ecowatch.display.trends import Trend
from ecowatch.shared.models import Metric
from ecowatch.simulator.generator import SampleGenerator


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dashboard(clock: FakeClock) -> ForestDashboard:
    return ForestDashboard(SampleGenerator(seed=5), refresh_interval=10.0, clock=clock)


def test_starts_on_most_recent_sample(dashboard: ForestDashboard) -> None:
    assert dashboard.current_index == 12
    assert dashboard.active_metrics == [Metric.TEMPERATURE, Metric.HUMIDITY, Metric.AIR_QUALITY]
    assert not dashboard.auto_refresh


def test_select_point(dashboard: ForestDashboard) -> None:
    dashboard.select_point(3)
    assert dashboard.current_index == 3
    assert dashboard.current_timestamp == dashboard.data.series.timestamps[3]

    with pytest.raises(IndexError):
        dashboard.select_point(13)
    with pytest.raises(IndexError):
        dashboard.select_point(-1)


def test_trends_compare_with_previous_sample(dashboard: ForestDashboard) -> None:
    dashboard.select_point(5)
    trends = dashboard.metric_trends()
    series = dashboard.data.series

    assert [t.metric for t in trends] == list(Metric)
    assert trends[0].current == series.temperature[5]
    assert trends[0].previous == series.temperature[4]


def test_first_sample_has_no_previous(dashboard: ForestDashboard) -> None:
    dashboard.select_point(0)
    for trend in dashboard.metric_trends():
        assert trend.previous is None
        assert trend.trend is Trend.STABLE


def test_refresh_regenerates_and_resets_selection(dashboard: ForestDashboard) -> None:
    before = dashboard.data
    dashboard.select_point(2)

    after = dashboard.refresh()

    assert after is dashboard.data
    assert after != before
    assert dashboard.current_index == 12


def test_last_metric_cannot_be_hidden(dashboard: ForestDashboard) -> None:
    assert dashboard.toggle_metric(Metric.TEMPERATURE) is False
    assert dashboard.toggle_metric(Metric.HUMIDITY) is False
    assert dashboard.toggle_metric(Metric.AIR_QUALITY) is True
    assert dashboard.active_metrics == [Metric.AIR_QUALITY]

    assert dashboard.toggle_metric(Metric.TEMPERATURE) is True
    assert dashboard.active_metrics == [Metric.AIR_QUALITY, Metric.TEMPERATURE]


def test_auto_refresh_waits_for_interval(dashboard: ForestDashboard, clock: FakeClock) -> None:
    clock.now = 50.0
    assert dashboard.tick() is False  # auto refresh is off

    dashboard.set_auto_refresh(True)
    first = dashboard.data

    clock.now = 59.9
    assert dashboard.tick() is False
    assert dashboard.data is first

    clock.now = 60.0
    assert dashboard.tick() is True
    assert dashboard.data is not first

    clock.now = 65.0
    assert dashboard.tick() is False


def test_disabling_auto_refresh_stops_ticks(dashboard: ForestDashboard, clock: FakeClock) -> None:
    dashboard.set_auto_refresh(True)
    dashboard.set_auto_refresh(False)
    clock.now = 100.0
    assert dashboard.tick() is False


def test_timeline_labels_every_fourth_and_last() -> None:
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    timestamps = [now + timedelta(hours=i) for i in range(14)]

    labelled = [i for i, label in timeline_labels(timestamps) if label is not None]

    assert labelled == [0, 4, 8, 12, 13]
    assert timeline_labels(timestamps)[0][1] == now.astimezone().strftime("%H:%M")
