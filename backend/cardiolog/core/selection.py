"""
Record selection - month/week filters and per-day grouping for the views.

All functions are pure; the reference time is passed in so year-less dates
resolve deterministically.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from ..models import DailyGroup, HeartRateRecord, WeekOption
from .aggregator import bucket_values
from .date_resolver import record_timestamp
from .labels import LabelFormatter, get_label_formatter, month_abbr


def month_key(dt: datetime | date) -> str:
    """"Nov 2025"."""
    return f"{month_abbr(dt.month)} {dt.year}"


def available_months(records: Sequence[HeartRateRecord], now: datetime) -> List[str]:
    """Month keys in first-seen order (newest first for exported data)."""
    months: Dict[str, None] = {}
    for r in records:
        months.setdefault(month_key(record_timestamp(r, now)), None)
    return list(months)


def filter_by_month(records: Sequence[HeartRateRecord], key: str, now: datetime) -> List[HeartRateRecord]:
    return [r for r in records if month_key(record_timestamp(r, now)) == key]


def available_weeks(
    records: Sequence[HeartRateRecord],
    key: str,
    now: datetime,
    labels: Optional[LabelFormatter] = None,
) -> List[WeekOption]:
    """
    ISO weeks (Monday start) containing records of month ``key``.

    Args:
        records: Record set
        key: Month key such as "Nov 2025"
        now: Reference time for date resolution
        labels: Formatter for the week start label

    Returns:
        List[WeekOption]: Sorted by week start
    """
    labels = labels or get_label_formatter()
    starts = set()
    for r in records:
        ts = record_timestamp(r, now)
        if month_key(ts) == key:
            starts.add(week_start_of(ts.date()))

    return [
        WeekOption(week_number=start.isocalendar()[1], start=start, label=labels.short_date_label(start))
        for start in sorted(starts)
    ]


def week_start_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def filter_by_week(records: Sequence[HeartRateRecord], week_start: date, now: datetime) -> List[HeartRateRecord]:
    monday = week_start_of(week_start)
    return [r for r in records if week_start_of(record_timestamp(r, now).date()) == monday]


def limit_to_latest_days(records: Sequence[HeartRateRecord], days: int = 30) -> List[HeartRateRecord]:
    """Keep records from the first ``days`` distinct display dates."""
    latest: Dict[str, None] = {}
    for r in records:
        if len(latest) >= days:
            break
        latest.setdefault(r.display_date, None)
    return [r for r in records if r.display_date in latest]


def select_records(
    records: Sequence[HeartRateRecord],
    now: datetime,
    month: Optional[str] = None,
    week_start: Optional[date] = None,
    latest_days: int = 30,
) -> List[HeartRateRecord]:
    """Apply the month and week filters; without either, keep the latest days."""
    selected = list(records)
    if month:
        selected = filter_by_month(selected, month, now)
    if week_start is not None:
        selected = filter_by_week(selected, week_start, now)
    if not month and week_start is None:
        selected = limit_to_latest_days(selected, latest_days)
    return selected


def group_by_day(records: Sequence[HeartRateRecord]) -> List[DailyGroup]:
    """Group records by display date, keeping input order of the groups."""
    groups: Dict[str, List[HeartRateRecord]] = {}
    for r in records:
        groups.setdefault(r.display_date, []).append(r)

    daily = []
    for display_date, members in groups.items():
        resting = next((r.min_hr for r in members if r.is_resting), None)
        daily.append(DailyGroup(
            date=display_date,
            resting=resting,
            records=list(reversed(members)),
            **bucket_values(members),
        ))
    return daily
