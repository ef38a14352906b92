import pytest

from conftest import make_frame
from geofeed.engine import ClusterEngine
from geofeed.models import WORLD_BBOX
from geofeed.service import InvalidBoundsError, MapService
from geofeed.store import PostStore


@pytest.fixture
def service():
    rows = [
        {"id": "ist-1", "latitude": 41.0003, "longitude": 29.0003, "place_name": "Galata"},
        {"id": "ist-2", "latitude": 41.0016, "longitude": 29.0016},
        {"id": "ank-1", "latitude": 39.93, "longitude": 32.86, "city": "Ankara"},
        {"id": "syd-1", "latitude": -33.87, "longitude": 151.21},
    ]
    return MapService(PostStore(make_frame(rows)))


def test_missing_sides_default_to_world(service):
    assert service.resolve_bounds() == WORLD_BBOX
    bbox = service.resolve_bounds(north=42.0)
    assert (bbox.north, bbox.south, bbox.east, bbox.west) == (42.0, -90.0, 180.0, -180.0)


def test_world_view_counts_every_post(service):
    clusters = service.get_clusters(zoom=2)
    assert sum(c.posts_count for c in clusters) == 4


def test_viewport_limits_posts(service):
    clusters = service.get_clusters(north=41.1, south=40.9, east=29.1, west=28.9, zoom=12)
    assert sum(c.posts_count for c in clusters) == 2


@pytest.mark.parametrize(
    "bounds",
    [dict(north=10, south=20), dict(east=-10, west=10), dict(north=-100)],
)
def test_inverted_ranges_are_rejected(service, bounds):
    with pytest.raises(InvalidBoundsError):
        service.get_clusters(**bounds)


def test_invalid_bounds_is_a_value_error():
    assert issubclass(InvalidBoundsError, ValueError)


def test_zero_height_viewport_is_empty_not_an_error(service):
    assert service.get_clusters(north=41.0, south=41.0, east=29.1, west=28.9, zoom=12) == []


def test_zoom_is_clamped(service):
    assert service.get_clusters(zoom=99) == service.get_clusters(zoom=18)
    assert service.get_clusters(zoom=-4) == service.get_clusters(zoom=0)


def test_json_output(service):
    payload = service.get_clusters_json(north=41.1, south=40.9, east=29.1, west=28.9, zoom=18)
    assert len(payload) == 2
    for item in payload:
        assert set(item) >= {"latitude", "longitude", "postsCount", "isCluster", "samplePostIds"}
        assert item["postsCount"] == 1
    names = {item.get("placeName") for item in payload}
    assert names == {"Galata", None}


def test_uses_supplied_engine(service):
    capped = MapService(service.store, ClusterEngine(max_clusters=1))
    assert len(capped.get_clusters(zoom=2)) == 1
