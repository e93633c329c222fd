"""
Chart aggregation over heart-rate records.

Input collections are conventionally newest first, as exported. Every chart
series is emitted oldest first.
"""

from typing import Dict, List, Sequence

from ..models import ChartPoint, Granularity, HeartRateRecord, round_half_up


def bucket_values(members: Sequence[HeartRateRecord]) -> Dict[str, int]:
    """Min of mins, max of maxes and rounded mean of averages for one bucket."""
    if not members:
        return {"min": 0, "max": 0, "avg": 0}
    return {
        "min": min(r.min_hr for r in members),
        "max": max(r.max_hr for r in members),
        "avg": round_half_up(sum(r.effective_avg for r in members) / len(members)),
    }


def aggregate(records: Sequence[HeartRateRecord], granularity: Granularity | str) -> List[ChartPoint]:
    """
    Aggregate records into chart points.

    Args:
        records: Records, newest first
        granularity: ``hour`` for one point per record, otherwise one point
                     per display date

    Returns:
        List[ChartPoint]: Chronological points; empty for empty input
    """
    if not records:
        return []

    granularity = Granularity(granularity)
    if granularity == Granularity.HOUR:
        return [
            ChartPoint(
                id=str(i),
                label=r.time_range,
                min=r.min_hr,
                max=r.max_hr,
                avg=r.effective_avg,
                date=r.display_date,
            )
            for i, r in enumerate(reversed(records))
        ]

    groups: Dict[str, List[HeartRateRecord]] = {}
    for r in records:
        groups.setdefault(r.display_date, []).append(r)

    points = []
    for i, (display_date, members) in enumerate(reversed(list(groups.items()))):
        points.append(ChartPoint(id=str(i), label=display_date, date=display_date, **bucket_values(members)))
    return points
