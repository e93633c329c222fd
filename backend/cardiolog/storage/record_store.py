"""
Record Store - Persistent storage for the heart-rate document using StorageInterface.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..models import AppData, HeartRateRecord, round_half_up
from .interface import StorageInterface
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)

DATA_FILE = "app-data.json"
REPORT_FILE = "report.md"
HOURLY_CACHE_FILE = "simplified_hr_data.json"


def compress_hourly(records: List[HeartRateRecord]) -> List[Dict]:
    """
    Reduce records to one entry per display date and clock hour.

    Entries use the short keys d, fd, tr, mn, mx, av. Records whose time
    range has no readable hour are left out.
    """
    buckets: Dict[Tuple[str, int], Dict] = {}
    for r in records:
        try:
            hour = int(r.time_range.split(":")[0])
        except ValueError:
            continue

        entry = buckets.setdefault((r.display_date, hour), {
            "d": r.display_date,
            "fd": r.full_date_text,
            "tr": f"{hour:02d}:00",
            "mn": r.min_hr,
            "mx": r.max_hr,
            "sum": 0,
            "count": 0,
        })
        entry["mn"] = min(entry["mn"], r.min_hr)
        entry["mx"] = max(entry["mx"], r.max_hr)
        entry["sum"] += r.avg_hr or r.min_hr
        entry["count"] += 1

    simplified = []
    for entry in buckets.values():
        simplified.append({
            "d": entry["d"],
            "fd": entry["fd"],
            "tr": entry["tr"],
            "mn": entry["mn"],
            "mx": entry["mx"],
            "av": round_half_up(entry["sum"] / entry["count"]),
        })
    return simplified


class RecordStore:
    """
    Manages the persisted heart-rate document.
    The profile and records live in a single JSON file, like the mobile app.
    """

    def __init__(self, storage: StorageInterface, debug: bool = False):
        """
        Initialize record store.

        Args:
            storage: StorageInterface implementation (typically LocalStorage)
            debug: Also maintain the hourly-compressed cache on every save
        """
        self.storage = storage
        self.debug = debug

    async def load_app_data(self) -> Optional[AppData]:
        """
        Load the persisted document.

        Returns:
            Optional[AppData]: Stored data, or None if missing or unreadable
        """
        content = await self.storage.load(DATA_FILE)
        if content is None:
            return None

        try:
            return AppData.from_json(content)
        except ValidationError as e:
            logger.error(f"Stored data in {DATA_FILE} is corrupt, ignoring it: {e.error_count()} error(s)")
            return None

    async def save_app_data(self, data: AppData) -> bool:
        """
        Persist the document, and the hourly cache in debug mode.

        Returns:
            bool: True if the main document was written
        """
        saved = await self.storage.save(DATA_FILE, data.to_json())
        if not saved:
            return False

        logger.info(f"Saved {len(data.records)} record(s) to {DATA_FILE}")
        if self.debug:
            simplified = compress_hourly(data.records)
            await self.storage.save(HOURLY_CACHE_FILE, json.dumps(simplified))
            logger.debug(f"Saved hourly cache with {len(simplified)} entr(ies)")
        return True

    async def load_cached_records(self) -> List[HeartRateRecord]:
        """Records rebuilt from the hourly cache; empty when absent or unreadable."""
        content = await self.storage.load(HOURLY_CACHE_FILE)
        if content is None:
            return []

        try:
            raw = json.loads(content.decode('utf-8'))
            return [
                HeartRateRecord(
                    display_date=r["d"],
                    full_date_text=r["fd"],
                    time_range=r["tr"],
                    min_hr=r["mn"],
                    max_hr=r["mx"],
                    avg_hr=r["av"],
                    tag="",
                    notes="Loaded from cache",
                )
                for r in raw
            ]
        except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
            logger.warning(f"Hourly cache unreadable: {e}")
            return []

    async def save_report(self, content: str) -> bool:
        return await self.storage.save(REPORT_FILE, content)

    async def load_report(self) -> str:
        content = await self.storage.load(REPORT_FILE)
        return content.decode('utf-8') if content else ""


# Global record store instance
_record_store: Optional[RecordStore] = None


def init_record_store(storage: StorageInterface = None, debug: bool = False):
    """
    Initialize the global record store instance.

    Args:
        storage: Optional StorageInterface implementation. If None, creates LocalStorage.
        debug: Debug mode flag passed to the store
    """
    global _record_store
    if storage is None:
        storage = LocalStorage()
    _record_store = RecordStore(storage, debug=debug)


def get_record_store() -> RecordStore:
    """
    Get the global record store instance.

    Raises:
        RuntimeError: If the record store has not been initialized
    """
    if _record_store is None:
        raise RuntimeError("Record store not initialized. Call init_record_store() first.")
    return _record_store
