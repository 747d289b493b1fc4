from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlaceCandidate(BaseModel):
    """
    A named place near a photo, as returned by a place search.

    Accepts either the flat shape (`lat`/`lng`) or a nearby-search result with
    `geometry.location`.
    """
    model_config = ConfigDict(frozen=True)

    place_id: str
    name: str
    types: List[str] = Field(default_factory=list)
    lat: float
    lng: float

    @model_validator(mode="before")
    @classmethod
    def _flatten_geometry(cls, data: Any) -> Any:
        if isinstance(data, dict) and "geometry" in data and "lat" not in data:
            location = data["geometry"].get("location", {})
            data = {**data, "lat": location.get("lat"), "lng": location.get("lng")}
        return data


class NearbySearchResponse(BaseModel):
    results: List[PlaceCandidate] = Field(default_factory=list)
