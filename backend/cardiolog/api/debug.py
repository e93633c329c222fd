"""
Debug API endpoints - only mounted when settings.debug is enabled.
"""

import logging
from datetime import tzinfo
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import HTMLResponse

from ..adapters import ExportFormatError, render_debug_export
from ..models import HeartRateRecord, SampleStream
from ..storage import get_record_store
from ..utils.benchmark import run_html_benchmark
from .deps import get_zone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/debug", tags=["debug"])


@router.post("/export", response_class=HTMLResponse)
async def export_debug_html(payload: Any = Body(...)):
    """Render posted Health Connect series as a re-importable debug page."""
    try:
        stream = SampleStream.from_raw(payload)
    except ExportFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTMLResponse(content=render_debug_export(stream))


@router.post("/benchmark/html")
async def benchmark_html(
    file: UploadFile = File(...),
    zone: Optional[tzinfo] = Depends(get_zone),
):
    """Time the HTML import of an uploaded export without storing anything."""
    content = await file.read()
    try:
        result = run_html_benchmark(content.decode("utf-8"), zone)
    except (UnicodeDecodeError, ExportFormatError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"HTML benchmark: {result['record_count']} record(s) in {result['time_ms']:.1f}ms")
    return result


@router.get("/cache", response_model=List[HeartRateRecord])
async def load_hourly_cache():
    """Records rebuilt from the hourly-compressed cache file."""
    return await get_record_store().load_cached_records()
