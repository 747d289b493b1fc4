import pytest

from tests.helpers import T0, angle_vector, make_photo
from tripalbum.domain.clusterers.highlight_clusterer import HighlightClusterer


@pytest.fixture
def clusterer():
    return HighlightClusterer(similarity_threshold=0.85)


def test_near_duplicates_become_highlight_and_rest_optional(clusterer):
    photos = [
        make_photo("dup1", T0, embedding=angle_vector(0)),
        make_photo("other", T0 + 10, embedding=angle_vector(90)),
        make_photo("dup2", T0 + 20, embedding=angle_vector(5)),
    ]

    highlights, optionals = clusterer.create_highlights(photos)

    assert len(highlights) == 1
    assert highlights[0].representative_asset_id == "dup1"
    assert highlights[0].asset_ids == ["dup1", "dup2"]
    assert optionals == ["other"]


def test_photo_joins_most_similar_group(clusterer):
    photos = [
        make_photo("g0", T0, embedding=angle_vector(0)),
        make_photo("g40", T0 + 1, embedding=angle_vector(40)),
        make_photo("p25", T0 + 2, embedding=angle_vector(25)),
    ]

    groups = clusterer.group(photos)

    assert [[p.id for p in g] for g in groups] == [["g0"], ["g40", "p25"]]


def test_similarity_is_measured_against_first_member(clusterer):
    photos = [
        make_photo("p0", T0, embedding=angle_vector(0)),
        make_photo("p30", T0 + 1, embedding=angle_vector(30)),
        make_photo("p60", T0 + 2, embedding=angle_vector(60)),
    ]

    groups = clusterer.group(photos)

    assert [[p.id for p in g] for g in groups] == [["p0", "p30"], ["p60"]]


def test_unembedded_photos_become_optionals_sorted_by_time(clusterer):
    photos = [
        make_photo("late", T0 + 100, embedding=angle_vector(0)),
        make_photo("bare", T0 + 50),
        make_photo("early", T0, embedding=angle_vector(90)),
    ]

    highlights, optionals = clusterer.create_highlights(photos)

    assert highlights == []
    assert optionals == ["early", "bare", "late"]


def test_every_photo_lands_in_exactly_one_place(clusterer):
    photos = [make_photo(f"p{i}", T0 + i, embedding=angle_vector(i * 7)) for i in range(12)]
    photos.append(make_photo("bare", T0 + 99))

    highlights, optionals = clusterer.create_highlights(photos)

    placed = [pid for h in highlights for pid in h.asset_ids] + optionals
    assert sorted(placed) == sorted(p.id for p in photos)
    assert all(len(h.asset_ids) >= 2 for h in highlights)


def test_empty_input(clusterer):
    assert clusterer.create_highlights([]) == ([], [])
