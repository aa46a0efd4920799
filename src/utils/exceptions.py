"""Custom exception hierarchy for the NBM archive client."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.archive.site_resolver import SiteInfo


class NBMArchiveError(Exception):
    """Base exception for all NBM archive errors.

    Attributes:
        message: Human-readable error message.
        context: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Format error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} | Context: {context_str}"


class TransportError(NBMArchiveError):
    """Raised when a download from the archive fails.

    Example context:
        - url: URL that was requested
        - status_code: HTTP status code if applicable
        - error: Underlying requests error message
    """


class DecodeError(NBMArchiveError):
    """Raised when cached bytes are not valid UTF-8 text."""


class StoreError(NBMArchiveError):
    """Raised when the local store cannot be opened, read, or written."""


class InitializationTimeNotAvailable(NBMArchiveError):
    """No data is available for an initialization time at any location."""

    def __init__(self, init_time: datetime) -> None:
        self.init_time = init_time
        super().__init__(
            f"No data available for initialization time {init_time}",
            context={"init_time": init_time.isoformat()},
        )


class NoMatch(NBMArchiveError):
    """No site matched the requested site name."""

    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"No match found for site {query}")


class AmbiguousSite(NBMArchiveError):
    """The requested site matched more than one location.

    Attributes:
        matches: The candidate sites, in locations table order.
    """

    def __init__(self, matches: list["SiteInfo"]) -> None:
        self.matches = list(matches)
        lines = ["Ambiguous site name, possible matches are"]
        lines.extend(f"     {site}" for site in self.matches)
        super().__init__("\n".join(lines))


class DataNotAvailable(NBMArchiveError):
    """Raised when a forecast file can't be found locally or downloaded."""

    def __init__(self, file_name: str, init_time: datetime) -> None:
        self.file_name = file_name
        self.init_time = init_time
        super().__init__(
            f"No data available for {file_name}",
            context={"file_name": file_name, "init_time": init_time.isoformat()},
        )


class ForecastDataError(NBMArchiveError):
    """Raised when forecast text can't be parsed or lacks a requested column.

    Example context:
        - column: Column that was requested
        - available: Columns present in the data
    """
