"""Core module - date resolution, aggregation and statistics over heart-rate records."""

from .date_resolver import resolve_record_date, parse_record_date, record_timestamp, sort_newest_first
from .aggregator import aggregate
from .bucketizer import bucketize, DayContext, WeekContext, MonthContext
from .statistics import summarize, calculate_age, estimate_max_hr
from .merge import merge_records, MergePolicy

__all__ = [
    'resolve_record_date', 'parse_record_date', 'record_timestamp', 'sort_newest_first',
    'aggregate',
    'bucketize', 'DayContext', 'WeekContext', 'MonthContext',
    'summarize', 'calculate_age', 'estimate_max_hr',
    'merge_records', 'MergePolicy',
]
