from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from geofeed.models import BoundingBox

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_frame(rows):
    """Record frame from (id, lat, lon) tuples or dicts; created_at grows with position."""
    records = []
    for i, row in enumerate(rows):
        if isinstance(row, dict):
            rec = dict(row)
        else:
            rec = {"id": row[0], "latitude": row[1], "longitude": row[2]}
        rec.setdefault("created_at", BASE_TIME + timedelta(minutes=i))
        records.append(rec)
    return pd.DataFrame(records)


@pytest.fixture
def istanbul_bbox():
    return BoundingBox(north=41.1, south=40.9, east=29.1, west=28.9)
