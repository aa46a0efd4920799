from .exceptions import (
    AmbiguousSite,
    DataNotAvailable,
    DecodeError,
    ForecastDataError,
    InitializationTimeNotAvailable,
    NBMArchiveError,
    NoMatch,
    StoreError,
    TransportError,
)
from .logger import setup_logger

__all__ = [
    "setup_logger",
    "NBMArchiveError",
    "TransportError",
    "DecodeError",
    "StoreError",
    "InitializationTimeNotAvailable",
    "NoMatch",
    "AmbiguousSite",
    "DataNotAvailable",
    "ForecastDataError",
]
