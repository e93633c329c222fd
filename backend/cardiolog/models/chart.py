"""
Chart and summary models - Derived views computed from the record collection.
"""

from datetime import date
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from .heart_rate import HeartRateRecord, UserProfile


class Granularity(str, Enum):
    """Aggregation level requested by a chart."""
    HOUR = "hour"  # day view: one point per record
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class ChartPoint(BaseModel):
    """One chart bucket. Empty buckets keep every field, zero-valued."""
    id: str
    label: str
    min: int = 0
    max: int = 0
    avg: int = 0
    date: str  # reference key: ISO date, or "YYYY-MM-DD HH:00" for hour buckets
    is_empty: bool = Field(False, alias="isEmpty")

    model_config = ConfigDict(populate_by_name=True)


class HeartRateStats(BaseModel):
    """Summary statistics over a record set."""
    avg: int = 0
    resting: int = 0
    peak: int = 0


class DailyGroup(BaseModel):
    """Records sharing one display date."""
    date: str
    min: int
    max: int
    avg: int
    resting: Optional[int] = None
    records: List[HeartRateRecord] = Field(default_factory=list)


class WeekOption(BaseModel):
    """An ISO week (Monday start) that has data."""
    week_number: int
    start: date
    label: str  # "Nov 17"


class ImportSummary(BaseModel):
    """Result of merging an import into the stored collection."""
    imported: int
    total: int
    policy: str
    profile: Optional[UserProfile] = None


class ProfileSummary(BaseModel):
    """Profile with derived age and max-HR estimate."""
    profile: UserProfile
    age: int
    max_hr: int
