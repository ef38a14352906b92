# src/geofeed/records.py
from typing import Any, Dict, Iterable, Union

import pandas as pd

from .models import GeotaggedRecord
from .schema import (
    CITY_COL,
    CREATED_AT_COL,
    GEOHASH_COL,
    ID_COL,
    LAT_COL,
    LON_COL,
    NUMERIC_COLS,
    PLACE_ID_COL,
    PLACE_NAME_COL,
    PLACE_REF_CITY_COL,
    PLACE_REF_LAT_COL,
    PLACE_REF_LON_COL,
    PLACE_REF_NAME_COL,
    RECORD_COLS,
    REQUIRED_COLS,
)

Records = Union[pd.DataFrame, Iterable[GeotaggedRecord]]


def text_or_none(s: pd.Series) -> pd.Series:
    """Object Series holding str values, with every null or non-text value as None."""
    return pd.Series([v if isinstance(v, str) else None for v in s], index=s.index, dtype=object)


def integral_ids(s: pd.Series) -> pd.Series:
    """Float id column back to nullable Int64 when every present value is whole.

    A blank cell makes read_csv load an integer column as float64.
    """
    if not pd.api.types.is_float_dtype(s):
        return s
    present = s.dropna()
    if not (present % 1 == 0).all():
        return s
    return s.astype("Int64")


def record_to_row(record: GeotaggedRecord) -> Dict[str, Any]:
    """Flatten a GeotaggedRecord into a record-frame row."""
    coord = record.coordinate
    place = record.place
    place_id = record.place_id
    if place_id is None and place is not None:
        place_id = place.id
    return {
        ID_COL: record.id,
        LAT_COL: coord.latitude if coord is not None else None,
        LON_COL: coord.longitude if coord is not None else None,
        GEOHASH_COL: record.geohash,
        CREATED_AT_COL: record.created_at,
        PLACE_ID_COL: place_id,
        PLACE_NAME_COL: record.place_name,
        CITY_COL: record.city,
        PLACE_REF_NAME_COL: place.name if place is not None else None,
        PLACE_REF_CITY_COL: place.city if place is not None else None,
        PLACE_REF_LAT_COL: place.latitude if place is not None else None,
        PLACE_REF_LON_COL: place.longitude if place is not None else None,
    }


def records_to_frame(records: Records) -> pd.DataFrame:
    """Normalise records into a frame with every column in RECORD_COLS.

    Accepts a DataFrame or an iterable of GeotaggedRecord. Missing optional
    columns are added as nulls; coordinates are coerced to float with
    unparseable values becoming NaN. Whole-number ids that pandas widened to
    float come back as nullable ints, and the geohash column is always an
    object column of str or None.
    """
    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        df = pd.DataFrame([record_to_row(r) for r in records], columns=RECORD_COLS)

    missing = set(REQUIRED_COLS) - set(df.columns)
    if missing:
        raise ValueError(f"Missing required record columns: {sorted(missing)}")

    for c in RECORD_COLS:
        if c not in df.columns:
            df[c] = None
    for c in NUMERIC_COLS:
        df[c] = pd.to_numeric(df[c], errors="coerce")
    for c in (ID_COL, PLACE_ID_COL):
        df[c] = integral_ids(df[c])
    df[GEOHASH_COL] = text_or_none(df[GEOHASH_COL])
    return df


def with_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """Rows that have both a latitude and a longitude."""
    return df.dropna(subset=[LAT_COL, LON_COL])
