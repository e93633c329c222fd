"""
Health Connect adapter - hourly summaries from instantaneous BPM samples.
"""

import logging
from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional, Tuple

from ..models import HEALTH_CONNECT_TAG, HeartRateRecord, SampleStream, round_half_up

logger = logging.getLogger(__name__)


def _to_local(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Naive wall-clock time in ``tz`` (host local zone when None)."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz).replace(tzinfo=None)


def adapt_sample_stream(stream: SampleStream, tz: Optional[tzinfo] = None) -> List[HeartRateRecord]:
    """
    Summarize samples into one record per local clock hour.

    Args:
        stream: Validated sample stream
        tz: Zone for the hour grouping; host local time when None

    Returns:
        List[HeartRateRecord]: Canonical ISO-dated records, newest first
    """
    groups: Dict[datetime, List[Tuple[datetime, int]]] = {}
    for series in stream.series:
        for sample in series.samples:
            local = _to_local(sample.time, tz)
            hour = local.replace(minute=0, second=0, microsecond=0)
            groups.setdefault(hour, []).append((local, sample.beats_per_minute))

    summaries = []
    for samples in groups.values():
        samples.sort(key=lambda s: s[0])
        bpms = [bpm for _, bpm in samples]
        first, last = samples[0][0], samples[-1][0]

        summaries.append((first, HeartRateRecord(
            display_date=first.strftime("%Y-%m-%d"),
            full_date_text=first.strftime("%Y-%m-%d %H:%M"),
            time_range=f"{first.strftime('%H:%M')} - {last.strftime('%H:%M')}",
            min_hr=min(bpms),
            max_hr=max(bpms),
            avg_hr=round_half_up(sum(bpms) / len(bpms)),
            tag=HEALTH_CONNECT_TAG,
            notes=f"Imported {len(samples)} samples",
        )))

    # Direct timestamp sort; ISO text needs no year inference
    summaries.sort(key=lambda s: s[0], reverse=True)
    logger.debug(f"Summarized {stream.sample_count} sample(s) into {len(summaries)} hourly record(s)")
    return [record for _, record in summaries]


def adapt_raw_samples(payload: Any, tz: Optional[tzinfo] = None) -> List[HeartRateRecord]:
    """Validate loosely typed series JSON and summarize it."""
    return adapt_sample_stream(SampleStream.from_raw(payload), tz)
