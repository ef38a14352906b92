# src/geofeed/models.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class BoundingBox(BaseModel):
    """Map viewport in degrees. No antimeridian wraparound."""

    model_config = ConfigDict(frozen=True)

    north: float
    south: float
    east: float
    west: float

    @property
    def is_valid(self) -> bool:
        return self.north > self.south and self.east > self.west

    @property
    def lat_range(self) -> float:
        return self.north - self.south

    @property
    def lng_range(self) -> float:
        return self.east - self.west

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east


WORLD_BBOX = BoundingBox(north=90.0, south=-90.0, east=180.0, west=-180.0)


class PlaceRef(BaseModel):
    id: Optional[Any] = None
    name: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class GeotaggedRecord(BaseModel):
    id: Any
    coordinate: Optional[GeoPoint] = None
    geohash: Optional[str] = None
    created_at: datetime
    place_id: Optional[Any] = None
    place_name: Optional[str] = None
    city: Optional[str] = None
    place: Optional[PlaceRef] = None


class ClusterSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    latitude: float
    longitude: float
    posts_count: int
    is_cluster: bool
    sample_post_ids: List[Any] = Field(default_factory=list)
    place_id: Optional[Any] = None
    place_name: Optional[str] = None
    city: Optional[str] = None

    @property
    def centroid(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    @property
    def member_count(self) -> int:
        return self.posts_count

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict in the map client's camelCase shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
