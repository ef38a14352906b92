# src/geofeed/render.py
import math
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import folium

from .config import (
    CLUSTER_COLOR,
    DEFAULT_ZOOM,
    MARKER_RADIUS_STEP,
    MIN_MARKER_RADIUS,
    SINGLE_COLOR,
)
from .models import BoundingBox, ClusterSummary
from .schema import LAT_MAX, LAT_MIN, LON_MAX, LON_MIN


def marker_radius(count: int) -> float:
    """Circle radius in pixels, growing with log2 of the cluster size."""
    return MIN_MARKER_RADIUS + MARKER_RADIUS_STEP * math.log2(max(count, 1))


def _popup_html(c: ClusterSummary) -> str:
    return f"""
    <div style="font-size:13px; line-height:1.35;">
      <b>Place:</b> {c.place_name or '-'}<br>
      <b>City:</b> {c.city or '-'}
    </div>
    """


def build_cluster_map(
    clusters: Iterable[ClusterSummary],
    center: Sequence[float],
    zoom: int = DEFAULT_ZOOM,
) -> folium.Map:
    """Folium map with one marker per cluster summary."""
    m = folium.Map(location=list(center), zoom_start=zoom, tiles="CartoDB Positron")
    for c in clusters:
        if c.is_cluster:
            folium.CircleMarker(
                location=[c.latitude, c.longitude],
                radius=marker_radius(c.posts_count),
                color=CLUSTER_COLOR,
                fill=True,
                fill_color=CLUSTER_COLOR,
                fill_opacity=0.7,
                tooltip=f"{c.posts_count} posts",
            ).add_to(m)
        else:
            folium.Marker(
                location=[c.latitude, c.longitude],
                tooltip=c.place_name or "1 post",
                popup=folium.Popup(_popup_html(c), max_width=280),
                icon=folium.Icon(color=SINGLE_COLOR),
            ).add_to(m)
    return m


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def bounds_from_map_state(state: Optional[Dict[str, Any]]) -> Optional[Tuple[BoundingBox, int]]:
    """Viewport and zoom from the dict returned by st_folium, or None before first render.

    Panning past the date line reports longitudes beyond +-180; they are
    clamped to the world range.
    """
    if not state:
        return None
    bounds = state.get("bounds") or {}
    sw = bounds.get("_southWest") or {}
    ne = bounds.get("_northEast") or {}
    if any(v is None for v in (sw.get("lat"), sw.get("lng"), ne.get("lat"), ne.get("lng"))):
        return None

    bbox = BoundingBox(
        north=_clamp(float(ne["lat"]), LAT_MIN, LAT_MAX),
        south=_clamp(float(sw["lat"]), LAT_MIN, LAT_MAX),
        east=_clamp(float(ne["lng"]), LON_MIN, LON_MAX),
        west=_clamp(float(sw["lng"]), LON_MIN, LON_MAX),
    )
    zoom = state.get("zoom")
    return bbox, int(zoom) if zoom is not None else DEFAULT_ZOOM
