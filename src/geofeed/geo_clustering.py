# src/geofeed/geo_clustering.py
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from .config import MAX_SAMPLE_POSTS
from .geohash import encode
from .models import BoundingBox, ClusterSummary
from .schema import (
    CITY_COL,
    CREATED_AT_COL,
    GEOHASH_COL,
    ID_COL,
    LAT_COL,
    LON_COL,
    PLACE_ID_COL,
    PLACE_NAME_COL,
    PLACE_REF_CITY_COL,
    PLACE_REF_NAME_COL,
)
from .zoom_policy import cell_size_for_zoom, prefix_length_for_zoom

GEOHASH_KEY_COL = "_geohash_key"
CELL_X_COL = "_cell_x"
CELL_Y_COL = "_cell_y"

_META_COLS = [PLACE_ID_COL, PLACE_NAME_COL, CITY_COL, PLACE_REF_NAME_COL, PLACE_REF_CITY_COL]


def _clean(value: Any) -> Any:
    """Map pandas nulls (None, NaN, NaT) to None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def _native(value: Any) -> Any:
    return value.item() if isinstance(value, np.generic) else value


def _sample_ids(df: pd.DataFrame, key_cols: List[str]) -> Dict[Any, List[Any]]:
    """Newest MAX_SAMPLE_POSTS ids per group, created_at descending."""
    newest_first = df.sort_values(CREATED_AT_COL, ascending=False, kind="mergesort")
    ids = (
        newest_first.groupby(key_cols, sort=False)
        .head(MAX_SAMPLE_POSTS)
        .groupby(key_cols, sort=False)[ID_COL]
        .agg(list)
    )
    return {key: [_native(v) for v in values] for key, values in ids.items()}


def _place_meta(row: Dict[str, Any]) -> Dict[str, Any]:
    """Place fields for a single-post marker; record fields win over the place's."""
    place_name = _clean(row.get(PLACE_NAME_COL))
    city = _clean(row.get(CITY_COL))
    return {
        "place_id": _native(_clean(row.get(PLACE_ID_COL))),
        "place_name": place_name if place_name is not None else _clean(row.get(PLACE_REF_NAME_COL)),
        "city": city if city is not None else _clean(row.get(PLACE_REF_CITY_COL)),
    }


def summarize_groups(
    df: pd.DataFrame, key_cols: Sequence[str], with_place_meta: bool = False
) -> List[ClusterSummary]:
    """Fold each group of `df` into a ClusterSummary.

    Centroid is the mean latitude/longitude of the members. With
    `with_place_meta`, single-member groups carry their record's place id,
    name and city, falling back to the associated place's name and city.
    """
    key_cols = list(key_cols)
    if df.empty:
        return []

    grouped = df.groupby(key_cols, sort=True)
    stats = grouped.agg(
        latitude=(LAT_COL, "mean"),
        longitude=(LON_COL, "mean"),
        posts_count=(ID_COL, "size"),
    )
    samples = _sample_ids(df, key_cols)
    meta = grouped[_META_COLS].first().to_dict("index") if with_place_meta else {}

    out = []
    for key, lat, lon, count in zip(
        stats.index, stats["latitude"], stats["longitude"], stats["posts_count"]
    ):
        count = int(count)
        extra = _place_meta(meta.get(key, {})) if with_place_meta and count == 1 else {}
        out.append(
            ClusterSummary(
                latitude=float(lat),
                longitude=float(lon),
                posts_count=count,
                is_cluster=count > 1,
                sample_post_ids=samples.get(key, []),
                **extra,
            )
        )
    return out


class GeohashClusterer:
    """Groups records by geohash prefix; used at coarse zoom levels."""

    name = "geohash"

    def effective_geohash(self, df: pd.DataFrame, prefix_length: int) -> pd.Series:
        """Cached geohash where long enough, otherwise encoded from the coordinate."""
        cached = df[GEOHASH_COL]
        reusable = cached.map(lambda g: isinstance(g, str) and len(g) >= prefix_length).astype(bool)
        stale = df.loc[~reusable]
        computed = pd.Series(
            [encode(lat, lon, prefix_length) for lat, lon in zip(stale[LAT_COL], stale[LON_COL])],
            index=stale.index,
            dtype=object,
        )
        return cached.where(reusable, computed)

    def cluster(self, df: pd.DataFrame, bbox: BoundingBox, zoom: int) -> List[ClusterSummary]:
        prefix_length = prefix_length_for_zoom(zoom)
        keys = self.effective_geohash(df, prefix_length).str[:prefix_length]
        keyed = df.assign(**{GEOHASH_KEY_COL: keys})
        keyed = keyed[keyed[GEOHASH_KEY_COL].notna() & (keyed[GEOHASH_KEY_COL] != "")]
        return summarize_groups(keyed, [GEOHASH_KEY_COL])


class TileClusterer:
    """Groups records into a uniform viewport grid; used at fine zoom levels."""

    name = "tile"

    def cell_coordinates(self, df: pd.DataFrame, bbox: BoundingBox, zoom: int) -> pd.DataFrame:
        lat_cell, lng_cell = cell_size_for_zoom(zoom, bbox.lat_range, bbox.lng_range)
        cell_x = np.floor((df[LON_COL].to_numpy(dtype=float) - bbox.west) / lng_cell).astype(np.int64)
        cell_y = np.floor((df[LAT_COL].to_numpy(dtype=float) - bbox.south) / lat_cell).astype(np.int64)
        return df.assign(**{CELL_X_COL: cell_x, CELL_Y_COL: cell_y})

    def cluster(self, df: pd.DataFrame, bbox: BoundingBox, zoom: int) -> List[ClusterSummary]:
        celled = self.cell_coordinates(df, bbox, zoom)
        return summarize_groups(celled, [CELL_X_COL, CELL_Y_COL], with_place_meta=True)
