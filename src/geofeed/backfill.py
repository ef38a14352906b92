# src/geofeed/backfill.py
"""
Geohash backfill for stored posts.

A post's effective coordinate is its own latitude/longitude when both are
set, otherwise the coordinate of its linked place (only when the post has a
place_id). The cached geohash is rewritten when the post had no coordinate
of its own, when the geohash is missing, or when it no longer covers the
coordinate.
"""

import logging
from typing import Tuple

import pandas as pd

from .config import DEFAULT_GEOHASH_PRECISION
from .geohash import contains, encode
from .records import records_to_frame
from .schema import (
    GEOHASH_COL,
    LAT_COL,
    LON_COL,
    PLACE_ID_COL,
    PLACE_REF_LAT_COL,
    PLACE_REF_LON_COL,
)

logger = logging.getLogger(__name__)


def resolve_coordinates(df: pd.DataFrame) -> Tuple[pd.Series, pd.Series]:
    """Effective (lat, lon) per row; NaN where neither source has both parts.

    The place coordinate is used only for posts linked to a place.
    """
    has_own = df[LAT_COL].notna() & df[LON_COL].notna()
    has_place = (
        df[PLACE_ID_COL].notna() & df[PLACE_REF_LAT_COL].notna() & df[PLACE_REF_LON_COL].notna()
    )
    use_place = ~has_own & has_place
    lat = df[LAT_COL].where(has_own, df[PLACE_REF_LAT_COL].where(use_place))
    lon = df[LON_COL].where(has_own, df[PLACE_REF_LON_COL].where(use_place))
    return lat, lon


def _covers(geohash, lat: float, lon: float) -> bool:
    return isinstance(geohash, str) and geohash != "" and contains(geohash, lat, lon)


def needs_geohash_update(df: pd.DataFrame) -> pd.Series:
    """Boolean mask of rows whose coordinates or geohash must be rewritten."""
    lat, lon = resolve_coordinates(df)
    resolvable = lat.notna() & lon.notna()
    has_own = df[LAT_COL].notna() & df[LON_COL].notna()
    covered = pd.Series(
        [_covers(g, a, o) for g, a, o in zip(df[GEOHASH_COL], lat, lon)],
        index=df.index,
        dtype=bool,
    )
    return resolvable & (~has_own | ~covered)


def backfill_geohashes(
    df: pd.DataFrame, precision: int = DEFAULT_GEOHASH_PRECISION
) -> Tuple[pd.DataFrame, int]:
    """Copy of `df` with coordinates and geohash filled in; returns (frame, updated rows)."""
    out = records_to_frame(df)
    mask = needs_geohash_update(out)
    if not mask.any():
        return out, 0

    lat, lon = resolve_coordinates(out)
    out[GEOHASH_COL] = out[GEOHASH_COL].astype(object)
    out.loc[mask, LAT_COL] = lat[mask]
    out.loc[mask, LON_COL] = lon[mask]
    out.loc[mask, GEOHASH_COL] = [encode(a, o, precision) for a, o in zip(lat[mask], lon[mask])]

    updated = int(mask.sum())
    logger.info("Backfilled geohash for %d of %d posts", updated, len(out))
    return out, updated
