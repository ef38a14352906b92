# src/geofeed/store.py
import logging

import pandas as pd

from .backfill import backfill_geohashes
from .config import DEFAULT_GEOHASH_PRECISION
from .models import BoundingBox
from .records import Records, records_to_frame
from .schema import CREATED_AT_COL, CSV_RENAME_MAP, GEOHASH_COL, LAT_COL, LON_COL

logger = logging.getLogger(__name__)


def load_posts_csv(path: str) -> pd.DataFrame:
    """
    Load posts from CSV into the record frame:
      - alternative column names (lat/lng/lon, createdAt, placeId, ...) are renamed
      - latitude/longitude coerced to numbers, bad values become NaN
      - created_at parsed as UTC datetimes
      - geohash kept as text so all-digit hashes survive
      - whole-number ids stay integers when some cells are blank
    """
    df = pd.read_csv(path, dtype={GEOHASH_COL: "string"}, low_memory=False)
    rename_map = {k: v for k, v in CSV_RENAME_MAP.items() if k in df.columns and v not in df.columns}
    df = df.rename(columns=rename_map)
    df = records_to_frame(df)
    df[CREATED_AT_COL] = pd.to_datetime(df[CREATED_AT_COL], errors="coerce", utc=True)
    logger.info("Loaded %d posts from %s", len(df), path)
    return df


class PostStore:
    """In-memory spatial post store answering viewport and geohash-prefix queries."""

    def __init__(self, records: Records):
        self._df = records_to_frame(records)

    @classmethod
    def from_csv(cls, path: str) -> "PostStore":
        return cls(load_posts_csv(path))

    @property
    def frame(self) -> pd.DataFrame:
        return self._df

    def __len__(self) -> int:
        return len(self._df)

    def _newest_first(self, df: pd.DataFrame) -> pd.DataFrame:
        return df.sort_values(CREATED_AT_COL, ascending=False, kind="mergesort")

    def within_bounds(self, bbox: BoundingBox) -> pd.DataFrame:
        """Posts whose coordinate lies in `bbox` (edges included), newest first."""
        df = self._df
        inside = (
            df[LAT_COL].between(bbox.south, bbox.north)
            & df[LON_COL].between(bbox.west, bbox.east)
        )
        return self._newest_first(df[inside])

    def by_geohash_prefix(self, prefix: str) -> pd.DataFrame:
        """Posts whose cached geohash starts with `prefix`, newest first."""
        hashes = self._df[GEOHASH_COL]
        match = hashes.map(lambda g: isinstance(g, str) and g.startswith(prefix)).astype(bool)
        return self._newest_first(self._df[match])

    def backfill_geohashes(self, precision: int = DEFAULT_GEOHASH_PRECISION) -> int:
        self._df, updated = backfill_geohashes(self._df, precision)
        return updated
