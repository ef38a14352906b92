# src/geofeed/zoom_policy.py
from typing import Tuple

from .config import (
    FINEST_PREFIX_LENGTH,
    MAX_CELL_DEG,
    MAX_ZOOM,
    MIN_CELL_DEG,
    MIN_ZOOM,
    TILE_BASE_ZOOM,
    ZOOM_PREFIX_BANDS,
)


def clamp_zoom(zoom: float) -> int:
    """Clamp a zoom level into [MIN_ZOOM, MAX_ZOOM] as an int."""
    return int(max(MIN_ZOOM, min(MAX_ZOOM, zoom)))


def prefix_length_for_zoom(zoom: int) -> int:
    """Geohash prefix length used for clustering at `zoom`.

    Lower zoom means a shorter prefix (larger cells).
    """
    for upper, length in ZOOM_PREFIX_BANDS:
        if zoom <= upper:
            return length
    return FINEST_PREFIX_LENGTH


def _clamp_cell(value: float) -> float:
    return max(MIN_CELL_DEG, min(MAX_CELL_DEG, value))


def cell_size_for_zoom(zoom: int, lat_range: float, lng_range: float) -> Tuple[float, float]:
    """Tile size in degrees as (lat_cell, lng_cell) for the viewport extent."""
    cell_count = 2 ** max(0, zoom - TILE_BASE_ZOOM)
    return _clamp_cell(lat_range / cell_count), _clamp_cell(lng_range / cell_count)
