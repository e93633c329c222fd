"""
Debug export - dumps raw Health Connect series into an HTML page that the
HTML import recognizes and replays through the sample-stream adapter.
"""

import html
import json

from ..models import SampleStream
from ..models.sources import HEART_RATE_SERIES_TYPE
from .html_export import DEBUG_EXPORT_TITLE


def render_debug_export(stream: SampleStream) -> str:
    """Render ``stream`` as a "Health Connect Debug Data" page."""
    payload = []
    for series in stream.series:
        payload.append({
            "type": series.type or HEART_RATE_SERIES_TYPE,
            "startTime": series.start_time.isoformat() if series.start_time else None,
            "endTime": series.end_time.isoformat() if series.end_time else None,
            "samples": [
                {"time": s.time.isoformat(), "beatsPerMinute": s.beats_per_minute}
                for s in series.samples
            ],
        })

    body = html.escape(json.dumps(payload, indent=2), quote=False)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        f"<head><meta charset=\"utf-8\"><title>{DEBUG_EXPORT_TITLE}</title></head>\n"
        "<body>\n"
        f"<pre>{body}</pre>\n"
        "</body>\n"
        "</html>\n"
    )
