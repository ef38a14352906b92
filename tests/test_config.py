import logging

from geofeed.config import DEFAULT_ZOOM, Settings
from geofeed.log import HealthCheckFilter


def test_settings_defaults(monkeypatch):
    for var in ["GEOFEED_POSTS_CSV", "GEOFEED_LOG_LEVEL", "GEOFEED_MAP_CENTER_LAT",
                "GEOFEED_MAP_CENTER_LON", "GEOFEED_MAP_ZOOM"]:
        monkeypatch.delenv(var, raising=False)
    s = Settings()
    assert s.posts_csv.endswith("posts.csv")
    assert s.log_level == "INFO"
    assert s.map_zoom == DEFAULT_ZOOM


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GEOFEED_POSTS_CSV", " /tmp/p.csv ")
    monkeypatch.setenv("GEOFEED_LOG_LEVEL", "debug")
    monkeypatch.setenv("GEOFEED_MAP_CENTER_LAT", "41.0")
    monkeypatch.setenv("GEOFEED_MAP_ZOOM", "7")
    s = Settings()
    assert s.posts_csv == "/tmp/p.csv"
    assert s.log_level == "DEBUG"
    assert s.map_center_lat == 41.0
    assert s.map_zoom == 7


def test_health_check_filter():
    f = HealthCheckFilter()

    def record(msg):
        return logging.LogRecord("tornado.access", logging.INFO, __file__, 1, msg, None, None)

    assert not f.filter(record("GET /healthz 200"))
    assert f.filter(record("GET /api/map/clusters 200"))


def test_settings_zoom_is_clamped(monkeypatch):
    monkeypatch.setenv("GEOFEED_MAP_ZOOM", "20")
    assert Settings().map_zoom == 18
    monkeypatch.setenv("GEOFEED_MAP_ZOOM", "-3")
    assert Settings().map_zoom == 0
