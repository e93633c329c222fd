"""API module."""

from .heart_rate import router as heart_rate_router
from .debug import router as debug_router

__all__ = ['heart_rate_router', 'debug_router']
