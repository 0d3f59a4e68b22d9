"""Time-series storage module."""

from tradefeed.core.data.storage.repository import TimeSeriesRepository

__all__ = ["TimeSeriesRepository"]
