# src/geofeed/engine.py
"""
Map clustering engine.

Turns the posts visible in a viewport into at most MAX_CLUSTERS cluster
summaries. Coarse zooms group by geohash prefix, fine zooms by a uniform grid
over the viewport. Pure and stateless: every call builds its own frame.
"""

import logging
from typing import List, Union

from .config import GEOHASH_MAX_ZOOM, MAX_CLUSTERS
from .geo_clustering import GeohashClusterer, TileClusterer
from .models import BoundingBox, ClusterSummary
from .records import Records, records_to_frame, with_coordinates
from .zoom_policy import clamp_zoom

logger = logging.getLogger(__name__)

Clusterer = Union[GeohashClusterer, TileClusterer]


class ClusterEngine:
    def __init__(self, max_clusters: int = MAX_CLUSTERS, geohash_max_zoom: int = GEOHASH_MAX_ZOOM):
        self.max_clusters = max_clusters
        self.geohash_max_zoom = geohash_max_zoom
        self.geohash_clusterer = GeohashClusterer()
        self.tile_clusterer = TileClusterer()

    def select_strategy(self, zoom: int) -> Clusterer:
        if zoom <= self.geohash_max_zoom:
            return self.geohash_clusterer
        return self.tile_clusterer

    def compute(self, bbox: BoundingBox, zoom: float, records: Records) -> List[ClusterSummary]:
        """Cluster `records` for the viewport, densest first.

        A malformed viewport yields an empty list rather than an error, and
        records without a coordinate are dropped. Records are assumed to be
        already filtered to the bbox.
        """
        if not bbox.is_valid:
            logger.debug("Ignoring malformed viewport %s", bbox)
            return []

        zoom = clamp_zoom(zoom)
        df = with_coordinates(records_to_frame(records))
        if df.empty:
            return []

        strategy = self.select_strategy(zoom)
        clusters = strategy.cluster(df, bbox, zoom)
        clusters.sort(key=lambda c: c.posts_count, reverse=True)
        logger.debug(
            "%s clustering at zoom %d: %d posts -> %d clusters (cap %d)",
            strategy.name, zoom, len(df), len(clusters), self.max_clusters,
        )
        return clusters[: self.max_clusters]


_default_engine = ClusterEngine()


def compute_clusters(bbox: BoundingBox, zoom: float, records: Records) -> List[ClusterSummary]:
    """Cluster with the default engine settings."""
    return _default_engine.compute(bbox, zoom, records)
