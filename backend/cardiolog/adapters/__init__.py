"""Source adapters - convert external heart-rate formats into HeartRateRecord."""

from ..models import ExportFormatError
from .health_connect import adapt_sample_stream, adapt_raw_samples
from .html_export import (
    parse_export_document, adapt_tabular_export, import_html_export, parse_hr_range
)
from .debug_export import render_debug_export

__all__ = [
    'ExportFormatError',
    'adapt_sample_stream', 'adapt_raw_samples',
    'parse_export_document', 'adapt_tabular_export', 'import_html_export', 'parse_hr_range',
    'render_debug_export',
]
