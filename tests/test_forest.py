from datetime import datetime, timedelta, timezone

import pytest

from ecowatch.shared.models import DerivedMetrics, Degradation, SampleData, Series
from ecowatch.simulator.forest import (
    assess_environment_health,
    calculate_degradation,
    calculate_tree_count,
    format_tree_count,
)


def _sample(temperature: float, humidity: float, tree_count: int) -> SampleData:
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    series = Series(
        timestamps=[now - timedelta(hours=2), now],
        temperature=[temperature, temperature],
        humidity=[humidity, humidity],
        air_quality=[50.0, 50.0],
    )
    return SampleData(series, DerivedMetrics(tree_count, calculate_degradation(tree_count)))


def test_baseline_conditions_keep_all_trees() -> None:
    assert calculate_tree_count([15.0], [60.0], [0.0]) == 10000


def test_tree_count_penalties() -> None:
    # 10000 - 10*100 - 20*50 - 50*20
    assert calculate_tree_count([25.0, 25.0], [40.0, 40.0], [50.0, 50.0]) == 7000


def test_tree_count_rounds_halves_up() -> None:
    # 10000 - 12.5 - 5 = 9982.5; banker's rounding would give 9982
    assert calculate_tree_count([15.125], [60.0], [0.25]) == 9983


def test_tree_count_never_negative() -> None:
    assert calculate_tree_count([200.0], [0.0], [500.0]) == 0


def test_tree_count_rejects_empty_series() -> None:
    with pytest.raises(ValueError):
        calculate_tree_count([], [50.0], [20.0])


def test_tree_count_monotonic() -> None:
    temps = [calculate_tree_count([t], [50.0], [40.0]) for t in range(15, 36)]
    assert temps == sorted(temps, reverse=True)

    humidities = [calculate_tree_count([25.0], [h], [40.0]) for h in range(30, 71)]
    assert humidities == sorted(humidities)

    aqis = [calculate_tree_count([25.0], [50.0], [a]) for a in range(10, 101)]
    assert aqis == sorted(aqis, reverse=True)


@pytest.mark.parametrize(
    "tree_count,expected",
    [
        (10000, Degradation.LOW),
        (8001, Degradation.LOW),
        (8000, Degradation.MEDIUM),
        (5001, Degradation.MEDIUM),
        (5000, Degradation.HIGH),
        (2001, Degradation.HIGH),
        (2000, Degradation.CRITICAL),
        (0, Degradation.CRITICAL),
    ],
)
def test_degradation_tiers(tree_count: int, expected: Degradation) -> None:
    assert calculate_degradation(tree_count) is expected


def test_format_tree_count() -> None:
    assert format_tree_count(7543) == "7,543"
    assert format_tree_count(0) == "0"


def test_environment_health_in_good_conditions() -> None:
    forest, biodiversity, water = assess_environment_health(_sample(20.0, 55.0, 9000), 1)

    assert (forest.name, forest.label, forest.percent) == ("Forest Cover", "Healthy", 90.0)
    assert not forest.warning
    assert biodiversity.label == "Stable"
    assert biodiversity.percent == 85.0
    assert water.label == "Adequate"
    assert water.percent == 55.0


def test_environment_health_in_hot_dry_conditions() -> None:
    forest, biodiversity, water = assess_environment_health(_sample(31.0, 35.0, 1500), 0)

    assert forest.label == "Critical"
    assert forest.warning
    assert biodiversity.label == "Declining"
    assert biodiversity.percent == 52.0
    assert water.label == "Low"
    assert water.warning


def test_biodiversity_percent_floors_at_zero() -> None:
    _, biodiversity, _ = assess_environment_health(_sample(60.0, 50.0, 5000), 0)
    assert biodiversity.percent == 0.0
