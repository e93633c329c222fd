"""CardioLog - personal heart-rate tracking backend."""

__version__ = "1.0.0"
