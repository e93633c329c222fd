"""Storage module - provides interface and implementations for data persistence."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .record_store import RecordStore, compress_hourly, init_record_store, get_record_store

__all__ = [
    'StorageInterface', 'LocalStorage', 'RecordStore', 'compress_hourly',
    'init_record_store', 'get_record_store',
]
