import json

import pytest

from tests.helpers import BASE_LAT, BASE_LON, T0, north_of
from tripalbum.core.config import Config
from tripalbum.local import load_label_vectors, load_photos, run


@pytest.fixture
def local_config(tmp_path):
    photos = [
        {"id": "p1", "timestamp": T0, "lat": BASE_LAT, "lon": BASE_LON, "embedding": [1.0, 0.0]},
        {"id": "p2", "timestamp": T0 + 60, "lat": BASE_LAT, "lon": BASE_LON, "embedding": [1.0, 0.02]},
        {"id": "p3", "timestamp": T0 + 120},
    ]
    places = {
        "results": [
            {
                "place_id": "m1",
                "name": "City Museum",
                "types": ["museum"],
                "geometry": {"location": {"lat": north_of(30), "lng": BASE_LON}},
            }
        ]
    }
    labels = {"museum": [1.0, 0.0]}

    (tmp_path / "photos.json").write_text(json.dumps(photos))
    (tmp_path / "places.json").write_text(json.dumps(places))
    (tmp_path / "labels.json").write_text(json.dumps(labels))

    return Config(
        _env_file=None,
        LOCAL_PHOTOS_PATH=str(tmp_path / "photos.json"),
        LOCAL_PLACES_PATH=str(tmp_path / "places.json"),
        LOCAL_LABELS_PATH=str(tmp_path / "labels.json"),
        LOCAL_OUTPUT_PATH=str(tmp_path / "out" / "albums.json"),
    )


def test_load_photos(local_config):
    photos = load_photos(local_config.LOCAL_PHOTOS_PATH)

    assert [p.id for p in photos] == ["p1", "p2", "p3"]
    assert photos[0].has_embedding and photos[0].has_location
    assert not photos[2].has_embedding and not photos[2].has_location


def test_load_label_vectors_without_path():
    assert load_label_vectors(None) == {}


@pytest.mark.asyncio
async def test_run_writes_albums(local_config, tmp_path):
    albums = await run(local_config)

    written = json.loads((tmp_path / "out" / "albums.json").read_text())
    assert len(albums) == len(written) == 1
    moment = written[0]["days"][0]["moments"][0]
    assert moment["name"] == "City Museum"
    assert moment["highlights"][0]["asset_ids"] == ["p1", "p2"]
    assert moment["optional_asset_ids"] == ["p3"]
    assert moment["poi_candidates"][0]["categories"] == ["Attractions", "Sightseeing", "Activity"]
