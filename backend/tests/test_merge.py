"""
Unit tests for merging imports into the stored collection.
"""

import pytest

from cardiolog.adapters import import_html_export
from cardiolog.core import MergePolicy, merge_records


@pytest.fixture
def exported_records(export_html):
    return import_html_export(export_html).records


def test_reimport_does_not_duplicate(exported_records, now):
    merged = merge_records(exported_records, exported_records, MergePolicy.APPEND, now)
    assert len(merged) == 4


def test_incoming_record_wins_on_collision(exported_records, now):
    updated = exported_records[2].model_copy(update={"notes": "Edited"})
    merged = merge_records(exported_records, [updated], "append", now)
    assert len(merged) == 4
    assert merged[2].notes == "Edited"


def test_append_keeps_both_and_sorts_newest_first(record_factory, now):
    existing = [record_factory(full_date_text="2026-01-20 08:00")]
    incoming = [record_factory(full_date_text="2026-01-25 08:00")]
    merged = merge_records(existing, incoming, MergePolicy.APPEND, now)
    assert [r.full_date_text for r in merged] == ["2026-01-25 08:00", "2026-01-20 08:00"]


def test_same_time_different_tag_is_kept(record_factory, now):
    existing = [record_factory(tag="Resting")]
    incoming = [record_factory(tag="Exercising")]
    assert len(merge_records(existing, incoming, MergePolicy.APPEND, now)) == 2


def test_health_connect_hour_is_matched_by_hour(record_factory, now):
    existing = [record_factory(full_date_text="2025-11-20 20:05", tag="Health Connect", notes="Imported 3 samples")]
    incoming = [record_factory(full_date_text="2025-11-20 20:01", tag="Health Connect", notes="Imported 5 samples")]
    merged = merge_records(existing, incoming, MergePolicy.APPEND, now)
    assert len(merged) == 1
    assert merged[0].notes == "Imported 5 samples"


def test_other_records_are_matched_by_minute(record_factory, now):
    existing = [record_factory(full_date_text="2025-11-20 20:05")]
    incoming = [record_factory(full_date_text="2025-11-20 20:01")]
    assert len(merge_records(existing, incoming, MergePolicy.APPEND, now)) == 2


def test_replace_discards_existing(exported_records, record_factory, now):
    incoming = [record_factory(full_date_text="2026-01-20 08:00")]
    merged = merge_records(exported_records, incoming, MergePolicy.REPLACE, now)
    assert merged == incoming


def test_unknown_policy(now):
    with pytest.raises(ValueError):
        merge_records([], [], "overwrite", now)


def test_undated_records_are_not_collapsed(record_factory, now):
    incoming = [
        record_factory(full_date_text="unknown time", min_hr=50, max_hr=60, notes="a"),
        record_factory(full_date_text="unknown time", min_hr=90, max_hr=140, notes="b"),
        record_factory(full_date_text="garbled 12", notes="c"),
    ]
    merged = merge_records([], incoming, MergePolicy.APPEND, now)
    assert sorted(r.notes for r in merged) == ["a", "b", "c"]


def test_undated_record_reimport_is_deduplicated(record_factory, now):
    undated = record_factory(full_date_text="unknown time")
    assert len(merge_records([undated], [undated], MergePolicy.APPEND, now)) == 1


def test_same_start_and_tag_with_different_readings_are_kept(record_factory, now):
    incoming = [
        record_factory(full_date_text="Sat 31 Jan 08:00", time_range="08:00 - 08:20", min_hr=60, max_hr=90),
        record_factory(full_date_text="Sat 31 Jan 08:00", time_range="08:00 - 08:45", min_hr=62, max_hr=130),
    ]
    assert len(merge_records([], incoming, MergePolicy.APPEND, now)) == 2


def test_health_connect_resync_with_more_samples_replaces_the_hour(record_factory, now):
    existing = [record_factory(full_date_text="2025-11-20 20:05", tag="Health Connect", min_hr=80, max_hr=100)]
    incoming = [record_factory(full_date_text="2025-11-20 20:02", tag="Health Connect", min_hr=75, max_hr=110)]
    merged = merge_records(existing, incoming, MergePolicy.APPEND, now)
    assert [(r.min_hr, r.max_hr) for r in merged] == [(75, 110)]
