import uuid
from typing import List, Optional

from pydantic import BaseModel, Field


class Highlight(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    representative_asset_id: str
    asset_ids: List[str]


class POICandidate(BaseModel):
    id: str
    name: str
    score: float
    latitude: float
    longitude: float
    categories: List[str] = []


class Moment(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    time: str
    representative_asset_id: str
    highlights: List[Highlight] = []
    optional_asset_ids: List[str] = []
    poi_candidates: List[POICandidate] = []
    voice_memo_path: Optional[str] = None
    caption: Optional[str] = None

    @property
    def all_asset_ids(self) -> List[str]:
        ids = [asset_id for highlight in self.highlights for asset_id in highlight.asset_ids]
        return ids + list(self.optional_asset_ids)


class Day(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    date: str
    cover_image: str
    summary: str
    moments: List[Moment] = []


class TripAlbum(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    album_title: str = "A Trip Album"
    days: List[Day] = []
