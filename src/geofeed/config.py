# src/geofeed/config.py
import os
from dataclasses import dataclass

# ---------- Output caps ----------
MAX_CLUSTERS = 500         # densest clusters kept per response
MAX_SAMPLE_POSTS = 10      # newest post ids carried by each cluster

# ---------- Zoom ----------
MIN_ZOOM = 0
MAX_ZOOM = 18
DEFAULT_ZOOM = 10
GEOHASH_MAX_ZOOM = 9       # zoom <= this uses geohash prefixes, above uses tiles

# ---------- Tile cells (degrees) ----------
TILE_BASE_ZOOM = 6         # cell count doubles per zoom level above this
MIN_CELL_DEG = 0.001       # ~100 m
MAX_CELL_DEG = 1.0         # ~100 km

# ---------- Geohash ----------
MIN_GEOHASH_PRECISION = 1
MAX_GEOHASH_PRECISION = 12
DEFAULT_GEOHASH_PRECISION = 9

# Zoom band upper bound -> geohash prefix length
ZOOM_PREFIX_BANDS = (
    (3, 3),    # country / continent
    (5, 4),    # region
    (7, 5),    # state / province
    (9, 6),    # city
    (11, 7),   # district
    (13, 8),   # neighbourhood
)
FINEST_PREFIX_LENGTH = 9   # street / building

# ---------- Map rendering ----------
CLUSTER_COLOR = "#E76F51"
SINGLE_COLOR = "green"      # folium.Icon named color
MIN_MARKER_RADIUS = 6
MARKER_RADIUS_STEP = 3     # extra pixels per doubling of the cluster size


@dataclass(frozen=True)
class Settings:
    posts_csv: str
    log_level: str
    map_center_lat: float
    map_center_lon: float
    map_zoom: int

    def __init__(self):
        object.__setattr__(
            self, "posts_csv", os.getenv("GEOFEED_POSTS_CSV", os.path.join("data", "posts.csv")).strip()
        )
        object.__setattr__(
            self, "log_level", os.getenv("GEOFEED_LOG_LEVEL", "INFO").strip().upper()
        )
        object.__setattr__(
            self, "map_center_lat", float(os.getenv("GEOFEED_MAP_CENTER_LAT", "39.93").strip())
        )
        object.__setattr__(
            self, "map_center_lon", float(os.getenv("GEOFEED_MAP_CENTER_LON", "32.86").strip())
        )
        zoom = int(os.getenv("GEOFEED_MAP_ZOOM", str(DEFAULT_ZOOM)).strip())
        object.__setattr__(self, "map_zoom", max(MIN_ZOOM, min(MAX_ZOOM, zoom)))
