"""
Summary statistics over heart-rate records.
"""

from datetime import date, datetime
from typing import Iterable, Optional

from ..models import HeartRateRecord, HeartRateStats, UserProfile, round_half_up

DEFAULT_MAX_HR = 190  # estimate for an unknown age of 30


def summarize(records: Iterable[HeartRateRecord]) -> HeartRateStats:
    """
    Compute average, resting and peak heart rate.

    The three values are independent: a Resting record counts towards the
    average and the peak as well.

    Args:
        records: Record set, possibly empty

    Returns:
        HeartRateStats: Zeros for an empty set
    """
    records = list(records)

    avgs = [r.avg_hr for r in records if r.avg_hr is not None and r.avg_hr > 0]
    resting = [r.min_hr for r in records if r.is_resting]

    return HeartRateStats(
        avg=round_half_up(sum(avgs) / len(avgs)) if avgs else 0,
        resting=round_half_up(sum(resting) / len(resting)) if resting else 0,
        peak=max((r.max_hr for r in records), default=0),
    )


def calculate_age(dob: str, today: date) -> int:
    """Whole years between ``dob`` (ISO date) and ``today``; 0 when unknown."""
    birth = _parse_dob(dob)
    if birth is None or birth > today:
        return 0
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def estimate_max_hr(profile: Optional[UserProfile], today: date) -> int:
    """Age-predicted maximum heart rate (220 - age)."""
    if profile is None or _parse_dob(profile.dob) is None:
        return DEFAULT_MAX_HR
    return 220 - calculate_age(profile.dob, today)


def _parse_dob(dob: str) -> Optional[date]:
    if not dob or not dob.strip():
        return None
    try:
        return datetime.fromisoformat(dob.strip()).date()
    except ValueError:
        return None
