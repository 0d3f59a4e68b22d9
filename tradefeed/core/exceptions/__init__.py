"""Exception handling module."""

from tradefeed.core.exceptions.base import (
    FetchError,
    NetworkError,
    ParseError,
    SourceError,
    StorageError,
    TradeFeedError,
)

__all__ = [
    "TradeFeedError",
    "SourceError",
    "NetworkError",
    "FetchError",
    "ParseError",
    "StorageError",
]
