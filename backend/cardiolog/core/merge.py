"""
Merging a fresh import into the persisted record collection.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, List, Sequence, Tuple, Union

from ..models import HEALTH_CONNECT_TAG, HeartRateRecord
from .date_resolver import parse_record_date, sort_newest_first

logger = logging.getLogger(__name__)


class MergePolicy(str, Enum):
    APPEND = "append"
    REPLACE = "replace"


DedupKey = Tuple[Union[datetime, str], str, int, int, str]


def dedup_key(record: HeartRateRecord, now: datetime) -> DedupKey:
    """
    Identity of a record across imports.

    Records match on resolved start time, time range, HR bounds and tag.
    Health Connect records summarize a clock hour, and a later sync may start
    the hour at an earlier sample or add samples, so they match on the hour
    and tag alone. Date text that cannot be resolved is matched verbatim
    instead of on the reference time.
    """
    ts = parse_record_date(record.full_date_text, now)
    if ts is None:
        return record.full_date_text, record.time_range, record.min_hr, record.max_hr, record.tag
    if record.tag == HEALTH_CONNECT_TAG:
        return ts.replace(minute=0, second=0, microsecond=0), "", 0, 0, record.tag
    return ts, record.time_range, record.min_hr, record.max_hr, record.tag


def merge_records(
    existing: Sequence[HeartRateRecord],
    incoming: Sequence[HeartRateRecord],
    policy: MergePolicy | str,
    now: datetime,
) -> List[HeartRateRecord]:
    """
    Combine stored and imported records.

    Args:
        existing: Records already persisted
        incoming: Records from the new import
        policy: ``append`` keeps existing records and lets incoming ones win
                on a key collision; ``replace`` discards existing records
        now: Reference time for date resolution

    Returns:
        List[HeartRateRecord]: Merged records, newest first
    """
    policy = MergePolicy(policy)
    if policy == MergePolicy.REPLACE:
        return sort_newest_first(incoming, now)

    merged: Dict[DedupKey, HeartRateRecord] = {}
    for r in existing:
        merged[dedup_key(r, now)] = r

    replaced = 0
    for r in incoming:
        key = dedup_key(r, now)
        if key in merged:
            replaced += 1
        merged[key] = r

    if replaced:
        logger.info(f"Merge replaced {replaced} existing record(s) with imported data")
    return sort_newest_first(merged.values(), now)
