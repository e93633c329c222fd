"""
HTML export adapter.

Handles the exported heart-rate report:
- Classifying the document as a table export or a Health Connect debug dump
- Reading the "1. Profile" section
- Converting table rows into HeartRateRecord objects, skipping bad rows
"""

import json
import logging
import re
from datetime import tzinfo
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from ..models import (
    AppData, ExportDocument, ExportFormatError, HeartRateRecord, SampleStream,
    TabularExport, UserProfile, round_half_up,
)
from .health_connect import adapt_sample_stream

logger = logging.getLogger(__name__)

DEBUG_EXPORT_TITLE = "Health Connect Debug Data"
PROFILE_HEADER = "1. Profile"
MIN_ROW_CELLS = 5

_SECTION_HEADER = re.compile(r"^\d+\.\s")
_PROFILE_FIELDS = {
    "Name :": "name",
    "Date of birth :": "dob",
    "Activity level :": "activity_level",
}


def debug_profile() -> UserProfile:
    """Placeholder profile attached to debug dumps."""
    return UserProfile(name="Debug User", dob="1990-01-01", activity_level="Unknown")


class _ExportDocumentParser(HTMLParser):
    """Collects title, first <pre>, table cells and leaf div texts."""

    def __init__(self):
        super().__init__()
        self.title_parts: List[str] = []
        self.pre_parts: Optional[List[str]] = None
        self.table_found = False
        self.rows: List[List[str]] = []
        self.div_texts: List[str] = []
        self._in_title = False
        self._in_pre = False
        self._row: Optional[List[str]] = None
        self._cell: Optional[List[str]] = None
        self._div_stack: List[List[str]] = []

    @property
    def title(self) -> str:
        return "".join(self.title_parts).strip()

    def handle_starttag(self, tag, attrs):
        if tag == "title":
            self._in_title = True
        elif tag == "pre" and self.pre_parts is None:
            self._in_pre = True
            self.pre_parts = []
        elif tag == "table":
            self.table_found = True
        elif tag == "tr":
            self._close_row()
            self._row = []
        elif tag in ("td", "th"):
            self._close_cell()
            self._cell = [] if tag == "td" else None
        elif tag == "div":
            self._div_stack.append([])
        elif tag == "br" and self._cell is not None:
            self._cell.append(" ")

    def handle_endtag(self, tag):
        if tag == "title":
            self._in_title = False
        elif tag == "pre":
            self._in_pre = False
        elif tag == "td":
            self._close_cell()
        elif tag in ("tr", "table"):
            self._close_row()
        elif tag == "div" and self._div_stack:
            text = " ".join("".join(self._div_stack.pop()).split())
            if text:
                self.div_texts.append(text)

    def handle_data(self, data):
        if self._in_title:
            self.title_parts.append(data)
        if self._in_pre:
            self.pre_parts.append(data)
        if self._cell is not None:
            self._cell.append(data)
        if self._div_stack:
            self._div_stack[-1].append(data)

    def _close_cell(self):
        if self._cell is not None and self._row is not None:
            self._row.append(" ".join("".join(self._cell).split()))
        self._cell = None

    def _close_row(self):
        self._close_cell()
        if self._row is not None:
            self.rows.append(self._row)
        self._row = None


def parse_export_document(html: str) -> ExportDocument:
    """
    Classify an export document into its input variant.

    Args:
        html: Raw HTML text of the export

    Returns:
        TabularExport or SampleStream

    Raises:
        ExportFormatError: If the document holds neither a table nor a
                           readable debug dump
    """
    parser = _ExportDocumentParser()
    parser.feed(html)
    parser.close()

    if parser.pre_parts is not None and parser.title == DEBUG_EXPORT_TITLE:
        try:
            payload = json.loads("".join(parser.pre_parts) or "[]")
        except json.JSONDecodeError as e:
            raise ExportFormatError(f"Invalid JSON in debug export: {e}") from e
        return SampleStream.from_raw(payload)

    if not parser.table_found:
        raise ExportFormatError("No heart-rate table found in export document")

    # First row is the column header
    return TabularExport(profile=_extract_profile(parser.div_texts), rows=parser.rows[1:])


def _extract_profile(div_texts: List[str]) -> UserProfile:
    fields = {}
    in_profile = False
    for text in div_texts:
        if text == PROFILE_HEADER:
            in_profile = True
            continue
        if not in_profile:
            continue
        if _SECTION_HEADER.match(text):
            break
        for prefix, field in _PROFILE_FIELDS.items():
            if prefix in text:
                fields[field] = text.replace(prefix, "").strip()
    return UserProfile(**fields)


def parse_hr_range(text: str) -> Tuple[int, int]:
    """
    Parse "58-142" or a bare "72" into (min, max).

    Raises:
        ValueError: If either bound is not an integer
    """
    if "-" in text:
        parts = text.split("-")
        low, high = int(parts[0]), int(parts[1])
    else:
        low = high = int(text)
    return min(low, high), max(low, high)


def adapt_tabular_export(export: TabularExport) -> List[HeartRateRecord]:
    """
    Convert table rows to records.

    Columns: date label, full date-time text, HR range, tag, notes.
    Short rows and rows with an unreadable HR range are skipped.
    """
    records = []
    skipped = []
    for idx, row in enumerate(export.rows, start=1):
        if len(row) < MIN_ROW_CELLS:
            skipped.append((idx, f"expected {MIN_ROW_CELLS} cells, got {len(row)}"))
            continue

        date_label, full_text, hr_text, tag, notes = row[:MIN_ROW_CELLS]
        try:
            min_hr, max_hr = parse_hr_range(hr_text)
        except ValueError:
            skipped.append((idx, f"invalid heart-rate range {hr_text!r}"))
            continue

        records.append(HeartRateRecord(
            display_date=date_label,
            full_date_text=full_text,
            time_range=" ".join(full_text.split()[3:]),
            min_hr=min_hr,
            max_hr=max_hr,
            avg_hr=round_half_up((min_hr + max_hr) / 2),
            tag=tag,
            notes=notes,
        ))

    if skipped:
        logger.warning(f"Skipped {len(skipped)} malformed export row(s)")
        for idx, reason in skipped:
            logger.warning(f"  Row {idx}: {reason}")

    return records


def import_html_export(html: str, tz: Optional[tzinfo] = None) -> AppData:
    """
    Parse an HTML export into the persisted document shape.

    Args:
        html: Raw HTML text
        tz: Zone used to localize Health Connect samples in debug dumps

    Returns:
        AppData: Profile and records

    Raises:
        ExportFormatError: If the whole document must be rejected
    """
    document = parse_export_document(html)
    if isinstance(document, SampleStream):
        logger.info(f"Debug export detected with {document.sample_count} sample(s)")
        return AppData(profile=debug_profile(), records=adapt_sample_stream(document, tz))

    records = adapt_tabular_export(document)
    logger.info(f"Parsed {len(records)} record(s) from {len(document.rows)} table row(s)")
    return AppData(profile=document.profile, records=records)
