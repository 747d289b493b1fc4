import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter

from tripalbum.core.config import Config, configs
from tripalbum.core.logger import setup_logging
from tripalbum.domain.embedding import PrecomputedEmbeddingSpace
from tripalbum.domain.pipeline import PhotoClusteringPipeline
from tripalbum.domain.places.hybrid import HybridPlaceSearch
from tripalbum.domain.places.local import LocalPlaceSearch
from tripalbum.models.photo import PhotoRecord
from tripalbum.schemas.album import TripAlbum
from tripalbum.schemas.photo import PhotoInput

logger = logging.getLogger(__name__)


def load_photos(path: str) -> List[PhotoRecord]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return [p.to_record() for p in TypeAdapter(List[PhotoInput]).validate_python(raw)]


def load_label_vectors(path: Optional[str]) -> dict:
    if not path:
        return {}
    return json.loads(Path(path).read_text(encoding="utf-8"))


def build_pipeline(config: Config) -> PhotoClusteringPipeline:
    embedding_space = PrecomputedEmbeddingSpace(load_label_vectors(config.LOCAL_LABELS_PATH))
    place_search = HybridPlaceSearch(LocalPlaceSearch.from_file(config.LOCAL_PLACES_PATH))
    return PhotoClusteringPipeline(embedding_space, place_search)


async def run(config: Config) -> List[TripAlbum]:
    logger.info(f"Starting {config.APP_NAME} local run...")
    photos = load_photos(config.LOCAL_PHOTOS_PATH)
    logger.info(f"Loaded {len(photos)} photos from {config.LOCAL_PHOTOS_PATH}")

    albums = await build_pipeline(config).run(photos)

    output = Path(config.LOCAL_OUTPUT_PATH)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(TypeAdapter(List[TripAlbum]).dump_json(albums, indent=2))
    logger.info(f"Wrote {len(albums)} albums to {output}")
    return albums


def main():
    setup_logging()
    asyncio.run(run(configs))


if __name__ == "__main__":
    main()
