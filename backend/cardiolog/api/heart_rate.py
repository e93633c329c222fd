"""
Heart-rate API endpoints - Imports, record views, statistics and charts.
"""

import logging
from datetime import datetime, tzinfo
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, UploadFile, status

from ..adapters import ExportFormatError, adapt_raw_samples, import_html_export
from ..config import settings
from ..core import aggregate, bucketize, DayContext, WeekContext, MonthContext
from ..core import estimate_max_hr, calculate_age, merge_records, summarize
from ..core.labels import LabelFormatter
from ..core.selection import available_months, available_weeks, group_by_day, select_records
from ..models import (
    AppData, ChartPoint, DailyGroup, Granularity, HeartRateRecord, HeartRateStats,
    ImportSummary, ProfileSummary, UserProfile, WeekOption,
)
from ..storage import get_record_store
from .deps import get_labels, get_now, get_zone, parse_date_param, parse_month_param

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/heart-rate", tags=["heart-rate"])


async def _load_app_data() -> AppData:
    return await get_record_store().load_app_data() or AppData()


async def _merge_and_save(
    incoming: List[HeartRateRecord],
    now: datetime,
    profile: Optional[UserProfile] = None,
) -> ImportSummary:
    """Merge imported records into the stored document and persist it."""
    current = await _load_app_data()
    merged = merge_records(current.records, incoming, settings.merge_policy, now)

    # An export without a profile section keeps the stored profile
    if profile is None or profile == UserProfile():
        profile = current.profile

    saved = await get_record_store().save_app_data(AppData(profile=profile, records=merged))
    if not saved:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to persist heart-rate data"
        )

    logger.info(
        f"Imported {len(incoming)} record(s), stored total {len(merged)} "
        f"(policy={settings.merge_policy})"
    )
    return ImportSummary(imported=len(incoming), total=len(merged), policy=settings.merge_policy, profile=profile)


async def _selected_records(
    now: datetime,
    month: Optional[str],
    week_start: Optional[str],
    latest_days: Optional[int],
) -> List[HeartRateRecord]:
    data = await _load_app_data()
    week = parse_date_param(week_start, "week_start") if week_start else None
    return select_records(
        data.records,
        now,
        month=month,
        week_start=week,
        latest_days=latest_days or settings.latest_days_default,
    )


@router.post("/import/html", response_model=ImportSummary, status_code=status.HTTP_201_CREATED)
async def import_html(
    file: UploadFile = File(...),
    now: datetime = Depends(get_now),
    zone: Optional[tzinfo] = Depends(get_zone),
):
    """
    Import an exported HTML report (table export or Health Connect debug dump).

    Args:
        file: Uploaded .html export

    Returns:
        ImportSummary: Imported and stored record counts
    """
    content = await file.read()
    try:
        html = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Export file is not UTF-8 text")

    try:
        data = import_html_export(html, zone)
    except ExportFormatError as e:
        logger.warning(f"Rejected export {file.filename}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return await _merge_and_save(data.records, now, data.profile)


@router.post("/import/health-connect", response_model=ImportSummary, status_code=status.HTTP_201_CREATED)
async def import_health_connect(
    payload: Any = Body(...),
    now: datetime = Depends(get_now),
    zone: Optional[tzinfo] = Depends(get_zone),
):
    """Import HeartRateSeries records read from Health Connect."""
    try:
        records = adapt_raw_samples(payload, zone)
    except ExportFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return await _merge_and_save(records, now)


@router.get("/records", response_model=List[HeartRateRecord])
async def list_records(
    month: Optional[str] = Query(None, description='Month key, e.g. "Nov 2025"'),
    week_start: Optional[str] = Query(None, description="Any date of the ISO week, YYYY-MM-DD"),
    latest_days: Optional[int] = Query(None, ge=1),
    now: datetime = Depends(get_now),
):
    return await _selected_records(now, month, week_start, latest_days)


@router.get("/stats", response_model=HeartRateStats)
async def get_stats(
    month: Optional[str] = None,
    week_start: Optional[str] = None,
    latest_days: Optional[int] = Query(None, ge=1),
    now: datetime = Depends(get_now),
):
    """Average, resting and peak heart rate of the selected records."""
    return summarize(await _selected_records(now, month, week_start, latest_days))


@router.get("/daily-groups", response_model=List[DailyGroup])
async def get_daily_groups(
    month: Optional[str] = None,
    week_start: Optional[str] = None,
    latest_days: Optional[int] = Query(None, ge=1),
    now: datetime = Depends(get_now),
):
    return group_by_day(await _selected_records(now, month, week_start, latest_days))


@router.get("/months", response_model=List[str])
async def get_months(now: datetime = Depends(get_now)):
    data = await _load_app_data()
    return available_months(data.records, now)


@router.get("/weeks", response_model=List[WeekOption])
async def get_weeks(
    month: str = Query(..., description='Month key, e.g. "Nov 2025"'),
    now: datetime = Depends(get_now),
    labels: LabelFormatter = Depends(get_labels),
):
    data = await _load_app_data()
    return available_weeks(data.records, month, now, labels)


@router.get("/chart", response_model=List[ChartPoint])
async def get_chart(
    granularity: Granularity = Granularity.ALL,
    day: Optional[str] = Query(None, description="Display date for the day view"),
    month: Optional[str] = None,
    week_start: Optional[str] = None,
    latest_days: Optional[int] = Query(None, ge=1),
    now: datetime = Depends(get_now),
):
    """
    Chart points for the selected records.

    With ``day`` set, only records of that display date are charted.
    """
    records = await _selected_records(now, month, week_start, latest_days)
    if day:
        records = [r for r in records if r.display_date == day]
    return aggregate(records, granularity)


@router.get("/buckets/day", response_model=List[ChartPoint])
async def get_day_buckets(
    date: str = Query(..., description="YYYY-MM-DD"),
    now: datetime = Depends(get_now),
    labels: LabelFormatter = Depends(get_labels),
):
    """24 hourly buckets, empty hours included."""
    data = await _load_app_data()
    return bucketize(data.records, DayContext(parse_date_param(date, "date")), now, labels)


@router.get("/buckets/week", response_model=List[ChartPoint])
async def get_week_buckets(
    start: str = Query(..., description="Any date of the ISO week, YYYY-MM-DD"),
    now: datetime = Depends(get_now),
    labels: LabelFormatter = Depends(get_labels),
):
    """Monday-Sunday buckets, empty days included."""
    data = await _load_app_data()
    return bucketize(data.records, WeekContext(parse_date_param(start, "start")), now, labels)


@router.get("/buckets/month", response_model=List[ChartPoint])
async def get_month_buckets(
    month: str = Query(..., description="YYYY-MM"),
    now: datetime = Depends(get_now),
    labels: LabelFormatter = Depends(get_labels),
):
    """One bucket per calendar day, empty days included."""
    year, month_num = parse_month_param(month)
    data = await _load_app_data()
    return bucketize(data.records, MonthContext(year, month_num), now, labels)


@router.get("/profile", response_model=ProfileSummary)
async def get_profile(now: datetime = Depends(get_now)):
    data = await _load_app_data()
    return _profile_summary(data.profile, now)


@router.put("/profile", response_model=ProfileSummary)
async def update_profile(profile: UserProfile, now: datetime = Depends(get_now)):
    """Replace the stored profile, keeping the records."""
    data = await _load_app_data()
    saved = await get_record_store().save_app_data(AppData(profile=profile, records=data.records))
    if not saved:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to persist profile"
        )
    return _profile_summary(profile, now)


def _profile_summary(profile: UserProfile, now: datetime) -> ProfileSummary:
    today = now.date()
    return ProfileSummary(
        profile=profile,
        age=calculate_age(profile.dob, today),
        max_hr=estimate_max_hr(profile, today),
    )
