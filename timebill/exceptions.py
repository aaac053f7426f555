"""Error taxonomy shared by the services and the HTTP boundary.

Each error carries the HTTP status it maps to; ``web.errors`` turns any
``TimebillError`` into a ``{"error": message}`` JSON response.
"""

from __future__ import annotations


class TimebillError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthenticated(TimebillError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class InvalidRequest(TimebillError):
    status_code = 400


class InvalidDateFormat(InvalidRequest):
    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid date {value!r}, expected YYYY-MM-DD")
        self.value = value


class NoDataForPeriod(TimebillError):
    status_code = 404

    def __init__(self, month_label: str) -> None:
        super().__init__(f"No entries found for {month_label}")
        self.month_label = month_label


class EntryNotFound(TimebillError):
    status_code = 404

    def __init__(self, entry_uuid: str) -> None:
        super().__init__(f"Time entry {entry_uuid} not found")
        self.entry_uuid = entry_uuid


class UpstreamFetchError(TimebillError):
    """The time-entry data source failed; never confused with an empty month."""


class RenderError(TimebillError):
    """Building a CSV or PDF document failed."""
