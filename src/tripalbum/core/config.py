import logging
from typing import Dict, Optional, Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    APP_NAME: str = "Trip Album Builder"

    # Logging configuration
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "DEBUG"
    # Per-component overrides, e.g. {"domain.ranking": "WARNING"}
    LOG_COMPONENT_LEVELS: Dict[str, str] = {}

    # Dates and time labels are rendered in this zone
    TIMEZONE: str = "UTC"

    # Trip segmentation
    TRIP_SEPARATION_SEC: float = 48 * 60 * 60

    # Moment clustering
    MOMENT_MAX_DIST_M: float = 175.0
    MOMENT_MAX_TIME_GAP_SEC: float = 3 * 60 * 60

    # Density clustering (visual + geo)
    DBSCAN_EPS: float = 0.3
    DBSCAN_MIN_PTS: int = 3
    DBSCAN_VISUAL_WEIGHT: float = 0.7
    DBSCAN_GEO_WEIGHT: float = 0.3
    DBSCAN_MAX_GEO_DIST_M: float = 200.0

    # Outlier removal
    OUTLIER_MAD_THRESHOLD: float = 2.5

    # Highlights
    HIGHLIGHT_SIMILARITY_THRESHOLD: float = 0.85

    # POI ranking
    POI_CLIP_WEIGHT: float = 0.3
    POI_DISTANCE_WEIGHT: float = 0.7
    POI_DISTANCE_SCALE_M: float = 100.0
    POI_MAX_CANDIDATES: int = 10
    PLACE_SEARCH_RADII_M: Tuple[int, ...] = (1200, 75)

    # Local runner
    LOCAL_PHOTOS_PATH: str = "assets/photos.json"
    LOCAL_PLACES_PATH: str = "assets/places.json"
    LOCAL_LABELS_PATH: Optional[str] = None
    LOCAL_OUTPUT_PATH: str = "assets/albums.json"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


configs = Config()
