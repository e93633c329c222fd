"""
Parse timing for export files, used from the debug API.
"""

import time
from datetime import tzinfo
from typing import Dict, Optional

from ..adapters import import_html_export


def run_html_benchmark(html: str, tz: Optional[tzinfo] = None) -> Dict[str, float]:
    """
    Time a full HTML export parse.

    Returns:
        Dict with ``time_ms`` and ``record_count``
    """
    start = time.perf_counter()
    data = import_html_export(html, tz)
    elapsed_ms = (time.perf_counter() - start) * 1000
    return {"time_ms": round(elapsed_ms, 3), "record_count": len(data.records)}
