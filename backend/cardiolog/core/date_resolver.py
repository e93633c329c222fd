"""
Date resolution for heart-rate records.

Exported tables only carry "Thu 20 Nov 20:00 - 20:32" style text, with no
year. Resolution picks the most recent occurrence of that day/month/time at or
before a reference "now" supplied by the caller. Canonical records carry ISO
text and are parsed directly.
"""

import calendar
import logging
from datetime import datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

from ..models import HeartRateRecord

logger = logging.getLogger(__name__)

_MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

_RELATIVE_DAYS = {"today": 0, "yesterday": 1}

# Year-less text never resolves further back than this
_MAX_LOOKBACK = timedelta(days=366)


def resolve_record_date(text: str, now: datetime) -> datetime:
    """
    Resolve record date text into an absolute timestamp.

    Args:
        text: "Thu 20 Nov 20:00 - 20:32", "20 Nov", "Today 08:15", or ISO text
        now: Reference timestamp; the result is never later than this for
             year-less text

    Returns:
        datetime: Resolved timestamp, or ``now`` when the text cannot be parsed
    """
    resolved = parse_record_date(text, now)
    return now if resolved is None else resolved


def parse_record_date(text: str, now: datetime) -> Optional[datetime]:
    """Like resolve_record_date, but None when the text cannot be parsed."""
    try:
        return _resolve(text, now)
    except (ValueError, IndexError, TypeError, AttributeError) as e:
        logger.debug(f"Unparseable record date {text!r}: {e}")
        return None


def record_timestamp(record: HeartRateRecord, now: datetime) -> datetime:
    """Resolved timestamp of a record's full date text."""
    return resolve_record_date(record.full_date_text, now)


def sort_newest_first(records: Iterable[HeartRateRecord], now: datetime) -> List[HeartRateRecord]:
    """Stable sort by resolved timestamp, newest first."""
    return sorted(records, key=lambda r: record_timestamp(r, now), reverse=True)


def _resolve(text: str, now: datetime) -> datetime:
    tokens = text.strip().split()
    if not tokens:
        raise ValueError("empty date text")

    offset = _RELATIVE_DAYS.get(tokens[0].lower())
    if offset is not None:
        hour, minute = _parse_clock(tokens[1:])
        base = now.date() - timedelta(days=offset)
        return datetime.combine(base, time(hour, minute), tzinfo=now.tzinfo)

    iso = _parse_iso(tokens, now)
    if iso is not None:
        return iso

    # Weekday is informational only
    if not tokens[0].isdigit():
        tokens = tokens[1:]
    day = int(tokens[0])
    month = _month_number(tokens[1])
    hour, minute = _parse_clock(tokens[2:])
    return _most_recent(month, day, hour, minute, now)


def _parse_iso(tokens: List[str], now: datetime) -> Optional[datetime]:
    head = tokens[0]
    if len(head) < 10 or not head[:4].isdigit() or head[4] != "-":
        return None

    candidate = head
    if len(tokens) > 1 and ":" in tokens[1]:
        candidate = f"{head} {tokens[1]}"
    parsed = datetime.fromisoformat(candidate.replace("Z", "+00:00"))

    if parsed.tzinfo is not None and now.tzinfo is not None:
        return parsed.astimezone(now.tzinfo)
    if parsed.tzinfo is not None:
        return parsed.replace(tzinfo=None)
    if now.tzinfo is not None:
        return parsed.replace(tzinfo=now.tzinfo)
    return parsed


def _month_number(token: str) -> int:
    month = _MONTHS.get(token.strip(",.").lower()[:4]) or _MONTHS.get(token.strip(",.").lower()[:3])
    if month is None:
        raise ValueError(f"unknown month {token!r}")
    return month


def _parse_clock(tokens: List[str]) -> Tuple[int, int]:
    """First clock time of "20:00 - 20:32", "20:00-20:32" or "16:12"; midnight when absent."""
    if not tokens:
        return 0, 0
    clock = tokens[0].split("-")[0]
    hour_text, minute_text = clock.split(":")[:2]
    parsed = time(int(hour_text), int(minute_text))
    return parsed.hour, parsed.minute


def _most_recent(month: int, day: int, hour: int, minute: int, now: datetime) -> datetime:
    if month == 2 and day == 29:
        # Only a 29 Feb within the trailing window is a real date
        for year in (now.year, now.year - 1):
            if not calendar.isleap(year):
                continue
            candidate = datetime(year, 2, 29, hour, minute, tzinfo=now.tzinfo)
            if candidate <= now and now - candidate <= _MAX_LOOKBACK:
                return candidate
        raise ValueError("no 29 Feb within the last 366 days")

    candidate = datetime(now.year, month, day, hour, minute, tzinfo=now.tzinfo)
    if candidate > now:
        candidate = candidate.replace(year=now.year - 1)
    return candidate
