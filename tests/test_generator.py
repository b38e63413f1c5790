import random
from datetime import datetime, timedelta, timezone

import pytest

from ecowatch.shared.models import Degradation
from ecowatch.simulator.forest import calculate_degradation, calculate_tree_count
from ecowatch.simulator.generator import (
    PAST_HOURS,
    SampleGenerator,
    generate_sample_data,
    generate_timestamps,
    generate_trending_values,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("trend", ["up", "down", "stable"])
def test_values_stay_within_bounds(seed: int, trend: str) -> None:
    values = generate_trending_values(10, 100, 50, trend, 0.3, rng=random.Random(seed))

    assert len(values) == 50
    assert all(10 <= v <= 100 for v in values)


def test_values_are_rounded_to_one_decimal() -> None:
    values = generate_trending_values(15, 35, 30, "up", 0.1, rng=random.Random(7))
    assert all(round(v, 1) == v for v in values)


def test_drift_without_noise_is_deterministic() -> None:
    # 5% of a 100 range per step, starting from the midpoint
    assert generate_trending_values(0, 100, 3, "up", 0.0) == [55.0, 60.0, 65.0]
    assert generate_trending_values(0, 100, 3, "stable", 0.0) == [50.0, 50.0, 50.0]


def test_values_stick_at_bound() -> None:
    values = generate_trending_values(0, 10, 14, "down", 0.0)

    assert values[:3] == [4.5, 4.0, 3.5]
    # Clamped rather than reflected: once at the floor it stays there
    assert values[-5:] == [0.0] * 5


def test_zero_count_yields_empty_list() -> None:
    assert generate_trending_values(0, 10, 0) == []


def test_unknown_trend_is_rejected() -> None:
    with pytest.raises(ValueError):
        generate_trending_values(0, 10, 5, "sideways")


def test_same_seed_gives_same_values() -> None:
    a = generate_trending_values(30, 70, 13, "down", 0.15, rng=random.Random(42))
    b = generate_trending_values(30, 70, 13, "down", 0.15, rng=random.Random(42))
    assert a == b


def test_timestamps_step_back_from_now() -> None:
    timestamps = generate_timestamps(NOW)

    assert len(timestamps) == len(PAST_HOURS) == 13
    assert timestamps[0] == NOW - timedelta(hours=24)
    assert timestamps[-1] == NOW
    assert timestamps == sorted(timestamps)


def test_timestamps_with_custom_offsets() -> None:
    timestamps = generate_timestamps(NOW, offsets=[3, 2, 1, 0])
    assert [NOW - ts for ts in timestamps] == [timedelta(hours=h) for h in (3, 2, 1, 0)]


def test_sample_data_sequences_share_length() -> None:
    sample = generate_sample_data(rng=random.Random(1), now=NOW)
    series = sample.series

    assert len(series.timestamps) == len(series.temperature) == len(series.humidity) == len(series.air_quality) == 13
    assert all(15 <= v <= 35 for v in series.temperature)
    assert all(30 <= v <= 70 for v in series.humidity)
    assert all(10 <= v <= 100 for v in series.air_quality)


def test_sample_data_derives_forest_metrics() -> None:
    sample = generate_sample_data(rng=random.Random(3), now=NOW)
    series = sample.series

    expected = calculate_tree_count(series.temperature, series.humidity, series.air_quality)
    assert sample.tree_count == expected
    assert sample.degradation is calculate_degradation(expected)
    assert isinstance(sample.degradation, Degradation)


def test_generator_is_reproducible_with_seed() -> None:
    first = [SampleGenerator(seed=99).generate(now=NOW) for _ in range(2)]
    assert first[0] == first[1]

    generator = SampleGenerator(seed=99)
    a = generator.generate(now=NOW)
    b = generator.generate(now=NOW)
    # Successive calls keep drawing from the same random stream
    assert a.series.temperature != b.series.temperature


def test_generator_requires_offsets() -> None:
    with pytest.raises(ValueError):
        SampleGenerator(offsets=[])
