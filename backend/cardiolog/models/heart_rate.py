"""
Heart Rate Models - Canonical record shape shared by every adapter and view.

Field aliases follow the persisted app-data.json layout so files written by
the mobile app load unchanged.
"""

import json
import math
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

RESTING_TAG = "Resting"
HEALTH_CONNECT_TAG = "Health Connect"


def round_half_up(value: float) -> int:
    """Round .5 upwards, matching the charting frontend."""
    return int(math.floor(value + 0.5))


class HeartRateRecord(BaseModel):
    """One heart-rate observation window."""
    display_date: str = Field(..., alias="date")  # "2025-11-20", legacy "Today" / "18 Nov"
    full_date_text: str = Field(..., alias="fullDate")  # "Thu 20 Nov 20:00 - 20:32" or "2025-11-20 20:00"
    time_range: str = Field("", alias="timeRange")
    min_hr: int = Field(..., alias="minHr")
    max_hr: int = Field(..., alias="maxHr")
    avg_hr: Optional[int] = Field(None, alias="avgHr")
    tag: str = ""
    notes: str = ""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def effective_avg(self) -> int:
        """Average HR, falling back to the min/max midpoint."""
        if self.avg_hr is not None:
            return self.avg_hr
        return round_half_up((self.min_hr + self.max_hr) / 2)

    @property
    def is_resting(self) -> bool:
        return self.tag == RESTING_TAG


class UserProfile(BaseModel):
    """User profile. Only the date of birth feeds any computation."""
    name: str = ""
    dob: str = ""
    activity_level: str = Field("", alias="activityLevel")
    sex: Optional[str] = None
    height: Optional[str] = None
    weight: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class AppData(BaseModel):
    """Persisted document: a profile plus the record collection."""
    profile: UserProfile = Field(default_factory=UserProfile)
    records: List[HeartRateRecord] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, content: str | bytes) -> "AppData":
        return cls.model_validate_json(content)
