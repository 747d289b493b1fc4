from unittest.mock import AsyncMock

import pytest

from tests.helpers import RecordingEmbeddingSpace
from tripalbum.domain.places.base import PlaceSearchService


@pytest.fixture
def embedding_space():
    return RecordingEmbeddingSpace()


@pytest.fixture
def place_search():
    search = AsyncMock(spec=PlaceSearchService)
    search.find_nearby = AsyncMock(return_value=[])
    return search
