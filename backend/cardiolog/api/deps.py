"""
Shared API dependencies.
"""

import logging
from datetime import date, datetime, tzinfo
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import HTTPException, status

from ..config import settings
from ..core.labels import LabelFormatter, get_label_formatter

logger = logging.getLogger(__name__)


def get_zone() -> Optional[tzinfo]:
    """Configured zone for sample localization; None means host local time."""
    if not settings.timezone:
        return None
    try:
        return ZoneInfo(settings.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.error(f"Unknown timezone '{settings.timezone}', using host local time")
        return None


def get_now() -> datetime:
    """Reference time for date resolution, as naive local wall-clock time."""
    zone = get_zone()
    if zone is None:
        return datetime.now()
    return datetime.now(zone).replace(tzinfo=None)


def get_labels() -> LabelFormatter:
    return get_label_formatter(settings.locale)


def parse_date_param(value: str, name: str) -> date:
    """Parse YYYY-MM-DD. Raises HTTPException on bad input."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {name} '{value}'. Use YYYY-MM-DD."
        )


def parse_month_param(value: str) -> Tuple[int, int]:
    """Parse YYYY-MM into (year, month). Raises HTTPException on bad input."""
    try:
        year_text, month_text = value.split("-")
        year, month = int(year_text), int(month_text)
        if not 1 <= month <= 12 or len(year_text) != 4:
            raise ValueError(value)
        return year, month
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid month '{value}'. Use YYYY-MM."
        )
