import pytest

from geofeed.geohash import BASE32, contains, decode, decode_bounds, encode

POINTS = [
    (0.0, 0.0),
    (39.9334, 32.8597),
    (41.0082, 28.9784),
    (-33.8688, 151.2093),
    (51.5074, -0.1278),
    (-54.8019, -68.3030),
    (90.0, 180.0),
    (-90.0, -180.0),
    (89.9999, -179.9999),
]


def _inside(bounds, lat, lon):
    min_lat, max_lat, min_lng, max_lng = bounds
    return min_lat <= lat <= max_lat and min_lng <= lon <= max_lng


def test_encode_known_value():
    assert encode(57.64911, 10.40744, 11) == "u4pruydqqvj"


def test_encode_origin_falls_in_lower_halves():
    assert encode(0.0, 0.0, 1) == "7"


def test_encode_is_deterministic():
    first = encode(39.9334, 32.8597, 7)
    assert len(first) == 7
    assert all(encode(39.9334, 32.8597, 7) == first for _ in range(5))
    assert _inside(decode_bounds(first), 39.9334, 32.8597)


@pytest.mark.parametrize("lat,lon", POINTS)
def test_round_trip_contains_point(lat, lon):
    for precision in range(1, 13):
        gh = encode(lat, lon, precision)
        assert len(gh) == precision
        assert set(gh) <= set(BASE32)
        assert _inside(decode_bounds(gh), lat, lon)
        assert contains(gh, lat, lon)


@pytest.mark.parametrize("lat,lon", POINTS)
def test_longer_prefix_nests_inside_shorter(lat, lon):
    previous = decode_bounds("")
    for precision in range(1, 13):
        bounds = decode_bounds(encode(lat, lon, precision))
        assert previous[0] <= bounds[0] <= bounds[1] <= previous[1]
        assert previous[2] <= bounds[2] <= bounds[3] <= previous[3]
        previous = bounds


def test_longer_encoding_extends_shorter():
    full = encode(41.0082, 28.9784, 12)
    for precision in range(1, 12):
        assert full.startswith(encode(41.0082, 28.9784, precision))


@pytest.mark.parametrize("precision", [0, -1, 13, 100])
def test_out_of_range_precision_falls_back_to_nine(precision):
    assert encode(41.0, 29.0, precision) == encode(41.0, 29.0, 9)
    assert len(encode(41.0, 29.0, precision)) == 9


def test_decode_empty_is_whole_world():
    assert decode_bounds("") == (-90.0, 90.0, -180.0, 180.0)


def test_decode_skips_unknown_symbols():
    assert decode_bounds("s!x") == decode_bounds("sx")
    # alphabet is lower case only; a, i, l, o are not geohash symbols
    assert decode_bounds("Sail") == decode_bounds("")


def test_decode_returns_cell_centre():
    lat, lon = decode(encode(39.9334, 32.8597, 9))
    assert lat == pytest.approx(39.9334, abs=1e-4)
    assert lon == pytest.approx(32.8597, abs=1e-4)


def test_contains_rejects_point_outside_cell():
    gh = encode(41.0, 29.0, 6)
    assert not contains(gh, -33.0, 151.0)
