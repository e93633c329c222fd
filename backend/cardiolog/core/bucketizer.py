"""
Gap-filling bucketizer.

Produces a fixed axis for a calendar context: 24 hours of a day, 7 days of an
ISO week or every day of a month. Units without data are emitted as empty,
zero-valued buckets so charts of different periods stay comparable.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Union

from ..models import ChartPoint, HeartRateRecord
from .aggregator import bucket_values
from .date_resolver import record_timestamp
from .labels import LabelFormatter, get_label_formatter


@dataclass(frozen=True)
class DayContext:
    day: date


@dataclass(frozen=True)
class WeekContext:
    week_start: date

    @property
    def monday(self) -> date:
        return self.week_start - timedelta(days=self.week_start.weekday())


@dataclass(frozen=True)
class MonthContext:
    year: int
    month: int


CalendarContext = Union[DayContext, WeekContext, MonthContext]


def bucketize(
    records: Sequence[HeartRateRecord],
    context: CalendarContext,
    now: datetime,
    labels: Optional[LabelFormatter] = None,
) -> List[ChartPoint]:
    """Dispatch to the bucketizer matching ``context``."""
    if isinstance(context, DayContext):
        return bucketize_day(records, context.day, now, labels)
    if isinstance(context, WeekContext):
        return bucketize_week(records, context.week_start, now, labels)
    if isinstance(context, MonthContext):
        return bucketize_month(records, context.year, context.month, now, labels)
    raise TypeError(f"Unsupported calendar context: {type(context).__name__}")


def bucketize_day(
    records: Sequence[HeartRateRecord],
    day: date,
    now: datetime,
    labels: Optional[LabelFormatter] = None,
) -> List[ChartPoint]:
    """One bucket per hour 00:00-23:00 of ``day``."""
    labels = labels or get_label_formatter()
    by_hour: Dict[int, List[HeartRateRecord]] = {}
    for r in records:
        ts = record_timestamp(r, now)
        if ts.date() == day:
            by_hour.setdefault(ts.hour, []).append(r)

    return [
        _point(
            str(hour),
            labels.hour_label(hour),
            f"{day.isoformat()} {hour:02d}:00",
            by_hour.get(hour, []),
        )
        for hour in range(24)
    ]


def bucketize_week(
    records: Sequence[HeartRateRecord],
    week_start: date,
    now: datetime,
    labels: Optional[LabelFormatter] = None,
) -> List[ChartPoint]:
    """One bucket per day Monday-Sunday of the ISO week containing ``week_start``."""
    labels = labels or get_label_formatter()
    monday = WeekContext(week_start).monday
    days = [monday + timedelta(days=offset) for offset in range(7)]
    by_day = _group_by_date(records, now)

    return [
        _point(str(i), labels.weekday_label(d), d.isoformat(), by_day.get(d, []))
        for i, d in enumerate(days)
    ]


def bucketize_month(
    records: Sequence[HeartRateRecord],
    year: int,
    month: int,
    now: datetime,
    labels: Optional[LabelFormatter] = None,
) -> List[ChartPoint]:
    """One bucket per calendar day of ``year``-``month``."""
    labels = labels or get_label_formatter()
    days_in_month = calendar.monthrange(year, month)[1]
    by_day = _group_by_date(records, now)

    points = []
    for day_num in range(1, days_in_month + 1):
        d = date(year, month, day_num)
        points.append(_point(str(day_num - 1), labels.day_label(d), d.isoformat(), by_day.get(d, [])))
    return points


def _group_by_date(records: Sequence[HeartRateRecord], now: datetime) -> Dict[date, List[HeartRateRecord]]:
    groups: Dict[date, List[HeartRateRecord]] = {}
    for r in records:
        groups.setdefault(record_timestamp(r, now).date(), []).append(r)
    return groups


def _point(point_id: str, label: str, key: str, members: List[HeartRateRecord]) -> ChartPoint:
    return ChartPoint(
        id=point_id,
        label=label,
        date=key,
        is_empty=not members,
        **bucket_values(members),
    )
