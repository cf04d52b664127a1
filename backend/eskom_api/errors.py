"""Error hierarchy for the calendar API.

Every error carries the HTTP status it is rendered with, so routers can let
them propagate and a single exception handler in ``main`` turns them into
``{"detail": ...}`` responses.
"""


class CalendarError(Exception):
    """Base exception for all calendar errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FetchError(CalendarError):
    """Upstream feed unreachable, non-success status, or undecodable body."""

    status_code = 502


class ParseError(CalendarError):
    """Malformed CSV, unrecognized schedule headers, or a field in the wrong format."""

    status_code = 502


class RegexError(ParseError):
    """A caller-supplied area pattern does not compile."""

    status_code = 400


class ValidationError(CalendarError):
    """A parsed row breaks a range invariant (day of week, month or cycle)."""

    status_code = 502


class NotFoundError(CalendarError):
    """No outages in the feed match the requested area."""

    status_code = 404
