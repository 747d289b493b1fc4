import random

import pytest

from tripalbum.common.exceptions import InvalidOrderError
from tripalbum.domain.clusterers.trip_clusterer import TripSplitClusterer
from tests.helpers import make_photo


def _photos(timestamps):
    return [make_photo(f"p{i}", ts) for i, ts in enumerate(timestamps)]


def _timestamps(trips):
    return [[p.timestamp for p in trip] for trip in trips]


def test_small_gaps_stay_in_one_trip_with_default_threshold():
    trips = TripSplitClusterer().split(_photos([0, 60, 200000]))
    assert _timestamps(trips) == [[0, 60, 200000]]


def test_short_threshold_splits_on_large_gap():
    trips = TripSplitClusterer(separation_sec=90).split(_photos([0, 60, 200000]))
    assert _timestamps(trips) == [[0, 60], [200000]]


def test_gap_equal_to_threshold_starts_new_trip():
    trips = TripSplitClusterer(separation_sec=100).split(_photos([0, 99, 199]))
    assert _timestamps(trips) == [[0, 99], [199]]


def test_empty_input():
    assert TripSplitClusterer().split([]) == []


def test_unsorted_input_raises():
    with pytest.raises(InvalidOrderError) as exc_info:
        TripSplitClusterer().split(_photos([0, 500, 100]))
    assert exc_info.value.index == 2


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_trips_partition_input_and_respect_threshold(seed):
    rng = random.Random(seed)
    threshold = 1000.0
    timestamps = sorted(rng.uniform(0, 20000) for _ in range(60))
    photos = _photos(timestamps)

    trips = TripSplitClusterer(separation_sec=threshold).split(photos)

    assert [p for trip in trips for p in trip] == photos
    assert all(trips)
    for trip in trips:
        for prev, cur in zip(trip, trip[1:]):
            assert cur.timestamp - prev.timestamp < threshold
    for prev_trip, next_trip in zip(trips, trips[1:]):
        assert next_trip[0].timestamp - prev_trip[-1].timestamp >= threshold


@pytest.mark.asyncio
async def test_cluster_returns_trips():
    trips = await TripSplitClusterer(separation_sec=90).cluster(_photos([0, 60, 200000]))
    assert len(trips) == 2
