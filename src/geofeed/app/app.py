# app.py
import os

import pandas as pd
import streamlit as st
from streamlit_folium import st_folium

from geofeed.config import MAX_ZOOM, MIN_ZOOM, Settings
from geofeed.log import setup_logging
from geofeed.render import bounds_from_map_state, build_cluster_map
from geofeed.service import MapService
from geofeed.store import PostStore, load_posts_csv

SETTINGS = Settings()
setup_logging(SETTINGS.log_level)

st.set_page_config(page_title="GeoFeed Map", layout="wide")
st.markdown('<h1 class="app-title">GeoFeed Map</h1>', unsafe_allow_html=True)


# ==============================
# Load posts (backfilled once per file)
# ==============================
@st.cache_data(show_spinner=False)
def load_posts(path: str) -> pd.DataFrame:
    store = PostStore(load_posts_csv(path))
    updated = store.backfill_geohashes()
    if updated:
        st.sidebar.info(f"Backfilled geohash for {updated} posts")
    return store.frame


if not os.path.exists(SETTINGS.posts_csv):
    st.error(f"CSV not found at {SETTINGS.posts_csv}. Set GEOFEED_POSTS_CSV or place your file there.")
    st.stop()

service = MapService(PostStore(load_posts(SETTINGS.posts_csv)))

# ==============================
# Viewport state
# ==============================
if "viewport" not in st.session_state:
    st.session_state["viewport"] = None
if "center" not in st.session_state:
    st.session_state["center"] = [SETTINGS.map_center_lat, SETTINGS.map_center_lon]
if "zoom" not in st.session_state:
    st.session_state["zoom"] = SETTINGS.map_zoom

with st.sidebar:
    st.markdown("### Posts")
    st.caption(f"{len(service.store)} posts loaded")
    zoom_override = st.slider("Cluster zoom", MIN_ZOOM, MAX_ZOOM, st.session_state["zoom"])

viewport = st.session_state["viewport"]
if viewport is None:
    clusters = service.get_clusters(zoom=zoom_override)
else:
    bbox = viewport
    clusters = service.get_clusters(
        north=bbox.north, south=bbox.south, east=bbox.east, west=bbox.west, zoom=zoom_override
    )

st.caption(f"{len(clusters)} markers, {sum(c.posts_count for c in clusters)} posts in view")

m = build_cluster_map(clusters, st.session_state["center"], st.session_state["zoom"])
st_data = st_folium(m, use_container_width=True, height=560)

# Rerun with the new viewport after a pan or zoom
state = bounds_from_map_state(st_data)
if state is not None:
    bbox, zoom = state
    if bbox != st.session_state["viewport"] or zoom != st.session_state["zoom"]:
        st.session_state["viewport"] = bbox
        st.session_state["zoom"] = zoom
        center = (st_data or {}).get("center") or {}
        if center.get("lat") is not None and center.get("lng") is not None:
            st.session_state["center"] = [center["lat"], center["lng"]]
        st.rerun()
