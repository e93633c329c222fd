"""
Source models - Tagged input variants handed to the source adapters.

An export document is classified exactly once, at the boundary, into either a
TabularExport (the HTML table export) or a SampleStream (Health Connect
series). Downstream code never inspects raw document shapes again.
"""

import logging
from datetime import datetime
from typing import Any, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .heart_rate import UserProfile

logger = logging.getLogger(__name__)

HEART_RATE_SERIES_TYPE = "HeartRateSeries"


class ExportFormatError(ValueError):
    """The whole input document is unusable and the import must be rejected."""


class TabularExport(BaseModel):
    """Rows of the exported HTML table, header row already removed."""
    kind: Literal["tabular"] = "tabular"
    profile: UserProfile = Field(default_factory=UserProfile)
    rows: List[List[str]] = Field(default_factory=list)


class HeartRateSample(BaseModel):
    """Instantaneous BPM reading."""
    time: datetime
    beats_per_minute: int = Field(..., alias="beatsPerMinute", gt=0)

    model_config = ConfigDict(populate_by_name=True)


class HeartRateSeries(BaseModel):
    """One Health Connect HeartRateSeries record."""
    type: Optional[str] = None
    start_time: Optional[datetime] = Field(None, alias="startTime")
    end_time: Optional[datetime] = Field(None, alias="endTime")
    samples: List[HeartRateSample] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class SampleStream(BaseModel):
    """Collection of sample series from the device health API."""
    kind: Literal["samples"] = "samples"
    series: List[HeartRateSeries] = Field(default_factory=list)

    @property
    def sample_count(self) -> int:
        return sum(len(s.samples) for s in self.series)

    @classmethod
    def from_raw(cls, payload: Any) -> "SampleStream":
        """
        Build a stream from loosely typed JSON, skipping malformed samples.

        Args:
            payload: Decoded JSON, expected to be a list of series objects

        Returns:
            SampleStream with every valid sample

        Raises:
            ExportFormatError: If the payload is not a list of objects
        """
        if not isinstance(payload, list):
            raise ExportFormatError(
                f"Sample data must be a list of series, got {type(payload).__name__}"
            )

        series_list = []
        skipped = 0
        for series_idx, raw_series in enumerate(payload):
            if not isinstance(raw_series, dict):
                raise ExportFormatError(f"Series {series_idx} is not an object")

            series_type = raw_series.get("type")
            if series_type is not None and series_type != HEART_RATE_SERIES_TYPE:
                logger.debug(f"Ignoring series {series_idx} of type {series_type}")
                continue

            raw_samples = raw_series.get("samples") or []
            if not isinstance(raw_samples, list):
                logger.warning(f"Series {series_idx}: 'samples' is not a list, skipping series")
                continue

            samples = []
            for sample_idx, raw_sample in enumerate(raw_samples):
                try:
                    samples.append(HeartRateSample.model_validate(raw_sample))
                except ValidationError as e:
                    skipped += 1
                    logger.warning(
                        f"Series {series_idx} sample {sample_idx}: skipped malformed sample "
                        f"({e.error_count()} error(s))"
                    )

            try:
                series = HeartRateSeries(
                    type=series_type,
                    startTime=raw_series.get("startTime"),
                    endTime=raw_series.get("endTime"),
                    samples=samples,
                )
            except ValidationError:
                # Bad series bounds do not invalidate its samples
                series = HeartRateSeries(type=series_type, samples=samples)
            series_list.append(series)

        if skipped:
            logger.warning(f"Skipped {skipped} malformed heart-rate sample(s)")

        return cls(series=series_list)


ExportDocument = Union[TabularExport, SampleStream]
