"""
Shared test fixtures and configuration.
"""

import os
import tempfile
from datetime import datetime

import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", tempfile.mkdtemp(prefix="cardiolog_test_"))
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("MERGE_POLICY", "append")

from cardiolog.models import HeartRateRecord  # noqa: E402

# Saturday; late enough that every export row below is in the past
NOW = datetime(2026, 1, 31, 23, 0)

EXPORT_HTML = """<!DOCTYPE html>
<html>
<head><title>Heart Rate Report</title></head>
<body>
<div>
  <div>1. Profile</div>
  <div>
    <div>Name : Alex</div>
    <div>Date of birth : 1990-05-15</div>
    <div>Activity level : Active</div>
  </div>
  <div>2. Heart rate</div>
</div>
<table>
  <tr><th>Date</th><th>Time</th><th>Heart rate</th><th>Tag</th><th>Notes</th></tr>
  <tr><td>Today</td><td>Sat 31 Jan 20:00 - 20:32</td><td>58-142</td><td>Exercising</td><td>Evening run</td></tr>
  <tr><td>Today</td><td>Sat 31 Jan 07:10</td><td>55</td><td>Resting</td><td></td></tr>
  <tr><td>30 Jan</td><td>Fri 30 Jan 16:12</td><td>72</td><td>Resting</td><td>After nap</td></tr>
  <tr><td>25 Dec</td><td>Thu 25 Dec 10:00 - 11:00</td><td>60-120</td><td></td><td></td></tr>
  <tr><td>broken</td><td>row</td></tr>
  <tr><td>24 Dec</td><td>Wed 24 Dec 09:00</td><td>abc</td><td></td><td></td></tr>
</table>
</body>
</html>
"""

HEALTH_CONNECT_PAYLOAD = [
    {
        "type": "HeartRateSeries",
        "startTime": "2025-11-20T20:00:00Z",
        "endTime": "2025-11-20T21:30:00Z",
        "samples": [
            {"time": "2025-11-20T20:05:00Z", "beatsPerMinute": 80},
            {"time": "2025-11-20T20:40:00Z", "beatsPerMinute": 100},
            {"time": "2025-11-20T20:10:00Z", "beatsPerMinute": 90},
            {"time": "not-a-time", "beatsPerMinute": 75},
            {"time": "2025-11-20T20:20:00Z", "beatsPerMinute": "fast"},
        ],
    },
    {
        "type": "HeartRateSeries",
        "startTime": "2025-11-20T21:00:00Z",
        "endTime": "2025-11-20T21:30:00Z",
        "samples": [
            {"time": "2025-11-20T21:15:00Z", "beatsPerMinute": 70},
        ],
    },
    {
        "type": "Steps",
        "samples": [{"time": "2025-11-20T21:15:00Z", "beatsPerMinute": 999}],
    },
]


def make_record(**overrides) -> HeartRateRecord:
    fields = {
        "display_date": "2026-01-31",
        "full_date_text": "2026-01-31 08:00",
        "time_range": "08:00 - 08:45",
        "min_hr": 60,
        "max_hr": 90,
        "avg_hr": 75,
        "tag": "",
        "notes": "",
    }
    fields.update(overrides)
    return HeartRateRecord(**fields)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def export_html():
    return EXPORT_HTML


@pytest.fixture
def health_connect_payload():
    return HEALTH_CONNECT_PAYLOAD


@pytest.fixture
def record_factory():
    return make_record
