import math

import numpy as np
import pytest

from tests.helpers import BASE_LAT, BASE_LON, RecordingEmbeddingSpace, make_photo, north_of
from tripalbum.common.exceptions import EmbeddingDimensionError
from tripalbum.domain.embedding import cosine_distance, cosine_similarity
from tripalbum.domain.geo import distance_m, distance_matrix_m


def test_cosine_similarity_basics():
    assert cosine_similarity([1.0, 0.0], [2.0, 0.0]) == pytest.approx(1.0)
    assert cosine_similarity([1.0, 0.0], [0.0, 3.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)
    assert cosine_distance([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(2.0)


def test_zero_vector_scores_zero():
    assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0


@pytest.mark.parametrize("a, b", [([1.0, 0.0], [1.0, 0.0, 0.0]), ([], [])])
def test_mismatched_or_empty_vectors_raise(a, b):
    with pytest.raises(EmbeddingDimensionError):
        cosine_similarity(a, b)


@pytest.mark.asyncio
async def test_embed_texts_preserves_order_and_tolerates_missing_labels():
    space = RecordingEmbeddingSpace({"beach": [1.0, 0.0], "temple": [0.0, 1.0]})

    embeddings = await space.embed_texts(["temple", "unknown", "beach"])

    assert np.allclose(embeddings[0], [0.0, 1.0])
    assert embeddings[1] is None
    assert np.allclose(embeddings[2], [1.0, 0.0])


@pytest.mark.asyncio
async def test_precomputed_image_embedding_comes_from_record():
    space = RecordingEmbeddingSpace()
    photo = make_photo("p1", 0.0, embedding=[0.5, 0.5])

    assert np.allclose(await space.embed_image(photo), [0.5, 0.5])


def test_distance_m_one_kilometer_north():
    assert distance_m(BASE_LAT, BASE_LON, north_of(1000), BASE_LON) == pytest.approx(1000, rel=0.01)


def test_distance_matrix_marks_missing_coordinates_infinite():
    matrix = distance_matrix_m([BASE_LAT, north_of(100), None], [BASE_LON, BASE_LON, None])

    assert matrix[0][1] == pytest.approx(100, rel=0.01)
    assert matrix[0][1] == matrix[1][0]
    assert math.isinf(matrix[0][2]) and math.isinf(matrix[2][1])
    assert matrix[2][2] == 0.0
