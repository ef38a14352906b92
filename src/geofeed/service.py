# src/geofeed/service.py
import logging
from typing import Any, Dict, List, Optional

from .config import DEFAULT_ZOOM
from .engine import ClusterEngine
from .models import WORLD_BBOX, BoundingBox, ClusterSummary
from .store import PostStore
from .zoom_policy import clamp_zoom

logger = logging.getLogger(__name__)


class InvalidBoundsError(ValueError):
    """Raised when a requested viewport has south above north or west beyond east."""


class MapService:
    """Cluster lookup for the map endpoint: viewport defaults, store fetch, engine."""

    def __init__(self, store: PostStore, engine: Optional[ClusterEngine] = None):
        self.store = store
        self.engine = engine or ClusterEngine()

    def resolve_bounds(
        self,
        north: Optional[float] = None,
        south: Optional[float] = None,
        east: Optional[float] = None,
        west: Optional[float] = None,
    ) -> BoundingBox:
        """Fill missing sides from the whole world; reject inverted ranges."""
        bbox = BoundingBox(
            north=WORLD_BBOX.north if north is None else north,
            south=WORLD_BBOX.south if south is None else south,
            east=WORLD_BBOX.east if east is None else east,
            west=WORLD_BBOX.west if west is None else west,
        )
        if bbox.south > bbox.north or bbox.west > bbox.east:
            raise InvalidBoundsError(
                f"Invalid coordinate range: lat [{bbox.south}, {bbox.north}], lng [{bbox.west}, {bbox.east}]"
            )
        return bbox

    def get_clusters(
        self,
        north: Optional[float] = None,
        south: Optional[float] = None,
        east: Optional[float] = None,
        west: Optional[float] = None,
        zoom: int = DEFAULT_ZOOM,
    ) -> List[ClusterSummary]:
        bbox = self.resolve_bounds(north, south, east, west)
        zoom = clamp_zoom(zoom)
        posts = self.store.within_bounds(bbox)
        clusters = self.engine.compute(bbox, zoom, posts)
        logger.info("zoom=%d posts=%d clusters=%d", zoom, len(posts), len(clusters))
        return clusters

    def get_clusters_json(self, **kwargs: Any) -> List[Dict[str, Any]]:
        return [c.to_wire() for c in self.get_clusters(**kwargs)]
