# src/geofeed/schema.py

# Column names of the record frame the clustering engine works on
ID_COL = "id"
LAT_COL = "latitude"           # degrees
LON_COL = "longitude"          # degrees
GEOHASH_COL = "geohash"        # cached hint, may be stale or missing
CREATED_AT_COL = "created_at"

# Denormalised place fields carried on the post itself
PLACE_ID_COL = "place_id"
PLACE_NAME_COL = "place_name"
CITY_COL = "city"

# Fields of the associated place (legacy fallback source)
PLACE_REF_NAME_COL = "place_ref_name"
PLACE_REF_CITY_COL = "place_ref_city"
PLACE_REF_LAT_COL = "place_ref_latitude"
PLACE_REF_LON_COL = "place_ref_longitude"

REQUIRED_COLS = [ID_COL, LAT_COL, LON_COL, CREATED_AT_COL]
OPTIONAL_COLS = [
    GEOHASH_COL,
    PLACE_ID_COL,
    PLACE_NAME_COL,
    CITY_COL,
    PLACE_REF_NAME_COL,
    PLACE_REF_CITY_COL,
    PLACE_REF_LAT_COL,
    PLACE_REF_LON_COL,
]
RECORD_COLS = REQUIRED_COLS + OPTIONAL_COLS
NUMERIC_COLS = [LAT_COL, LON_COL, PLACE_REF_LAT_COL, PLACE_REF_LON_COL]

# Alternative spellings accepted when loading posts from CSV
CSV_RENAME_MAP = {
    "lat": LAT_COL,
    "lng": LON_COL,
    "lon": LON_COL,
    "createdAt": CREATED_AT_COL,
    "placeId": PLACE_ID_COL,
    "placeName": PLACE_NAME_COL,
    "displayName": PLACE_NAME_COL,
    "placeRefName": PLACE_REF_NAME_COL,
    "placeRefCity": PLACE_REF_CITY_COL,
    "placeLatitude": PLACE_REF_LAT_COL,
    "placeLongitude": PLACE_REF_LON_COL,
}

# Basic sanity bounds
LAT_MIN, LAT_MAX = -90.0, 90.0
LON_MIN, LON_MAX = -180.0, 180.0
