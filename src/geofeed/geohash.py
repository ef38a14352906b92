# src/geofeed/geohash.py
from typing import Tuple

from .config import DEFAULT_GEOHASH_PRECISION, MAX_GEOHASH_PRECISION, MIN_GEOHASH_PRECISION
from .schema import LAT_MAX, LAT_MIN, LON_MAX, LON_MIN

BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"  # Standard Base32 characters
_BITS = (16, 8, 4, 2, 1)
_BASE32_INDEX = {c: i for i, c in enumerate(BASE32)}


def encode(lat: float, lon: float, precision: int = DEFAULT_GEOHASH_PRECISION) -> str:
    """Encode a latitude and longitude into a geohash of `precision` characters.

    Longitude and latitude intervals are bisected alternately, longitude first.
    A value equal to the midpoint falls in the lower half. Precision outside
    [1, 12] falls back to the default of 9.
    """
    if not MIN_GEOHASH_PRECISION <= precision <= MAX_GEOHASH_PRECISION:
        precision = DEFAULT_GEOHASH_PRECISION

    lat_lo, lat_hi = LAT_MIN, LAT_MAX
    lon_lo, lon_hi = LON_MIN, LON_MAX
    result = []
    bit = 0
    ch = 0
    even = True

    while len(result) < precision:
        if even:
            mid = (lon_lo + lon_hi) / 2
            if lon > mid:
                ch |= _BITS[bit]
                lon_lo = mid
            else:
                lon_hi = mid
        else:
            mid = (lat_lo + lat_hi) / 2
            if lat > mid:
                ch |= _BITS[bit]
                lat_lo = mid
            else:
                lat_hi = mid
        even = not even

        if bit < 4:
            bit += 1
        else:
            result.append(BASE32[ch])
            bit = 0
            ch = 0

    return "".join(result)


def decode_bounds(geohash: str) -> Tuple[float, float, float, float]:
    """Bounding box of a geohash prefix as (min_lat, max_lat, min_lng, max_lng).

    Characters outside the alphabet are skipped rather than rejected.
    """
    lat_lo, lat_hi = LAT_MIN, LAT_MAX
    lon_lo, lon_hi = LON_MIN, LON_MAX
    even = True

    for c in geohash:
        idx = _BASE32_INDEX.get(c)
        if idx is None:
            continue
        for mask in _BITS:
            if even:
                mid = (lon_lo + lon_hi) / 2
                if idx & mask:
                    lon_lo = mid
                else:
                    lon_hi = mid
            else:
                mid = (lat_lo + lat_hi) / 2
                if idx & mask:
                    lat_lo = mid
                else:
                    lat_hi = mid
            even = not even

    return lat_lo, lat_hi, lon_lo, lon_hi


def decode(geohash: str) -> Tuple[float, float]:
    """Centre of the geohash cell as (lat, lon)."""
    min_lat, max_lat, min_lng, max_lng = decode_bounds(geohash)
    return (min_lat + max_lat) / 2, (min_lng + max_lng) / 2


def contains(geohash: str, lat: float, lon: float) -> bool:
    """True if (lat, lon) lies inside the cell of `geohash`, edges included."""
    min_lat, max_lat, min_lng, max_lng = decode_bounds(geohash)
    return min_lat <= lat <= max_lat and min_lng <= lon <= max_lng
