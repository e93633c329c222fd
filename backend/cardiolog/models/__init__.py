"""Models module."""

from .heart_rate import (
    HeartRateRecord, UserProfile, AppData, RESTING_TAG, HEALTH_CONNECT_TAG, round_half_up
)
from .chart import (
    Granularity, ChartPoint, HeartRateStats, DailyGroup, WeekOption, ImportSummary, ProfileSummary
)
from .sources import (
    TabularExport, SampleStream, HeartRateSeries, HeartRateSample, ExportDocument, ExportFormatError
)

__all__ = [
    'HeartRateRecord', 'UserProfile', 'AppData', 'RESTING_TAG', 'HEALTH_CONNECT_TAG', 'round_half_up',
    'Granularity', 'ChartPoint', 'HeartRateStats', 'DailyGroup', 'WeekOption',
    'ImportSummary', 'ProfileSummary',
    'TabularExport', 'SampleStream', 'HeartRateSeries', 'HeartRateSample',
    'ExportDocument', 'ExportFormatError',
]
