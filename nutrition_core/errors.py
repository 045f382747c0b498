"""Exception classes for the dashboard core.

Load failures share a common base so callers can turn them into a single
"data unavailable" signal; the API maps ``status_code`` onto the response.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DashboardError(Exception):
    """Base exception for dashboard errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code the API answers with.
        details: Optional additional error context.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DataUnavailableError(DashboardError):
    """Either source could not be loaded; the load cycle is aborted."""

    status_code = 503


class ResourceUnavailable(DataUnavailableError):
    """Raised when a source cannot be fetched (network error, HTTP error, missing file)."""

    def __init__(self, location: str, reason: str):
        super().__init__(
            f"Resource '{location}' is unavailable: {reason}",
            details={"location": location, "reason": reason},
        )


class ParseFailure(DataUnavailableError):
    """Raised when source text does not match its dataset schema."""

    def __init__(self, source: str, reason: str, *, column: Optional[str] = None, row: Optional[int] = None):
        where = source
        if column is not None:
            where = f"{where}, column '{column}'"
        if row is not None:
            where = f"{where}, row {row}"
        details: Dict[str, Any] = {"source": source, "reason": reason}
        if column is not None:
            details["column"] = column
        if row is not None:
            details["row"] = row
        super().__init__(f"Could not parse {where}: {reason}", details=details)


class UnknownRegionError(DashboardError):
    """Raised when selecting a region that has no summary."""

    status_code = 404

    def __init__(self, region: str):
        super().__init__(f"Region '{region}' not found", details={"region": region})
