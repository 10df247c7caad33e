"""Typed errors for the heat-map engine.

- InvalidTimestampError: a session instant cannot be turned into a calendar date
- InvalidYearError: a target year falls outside the representable date range
- GridInvariantError: a built grid violates a placement invariant
"""


class HeatMapError(Exception):
    """Base exception for heat-map computation errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidTimestampError(HeatMapError):
    """Raised when a session instant is NaN, non-integral or out of range."""

    def __init__(self, instant: object, reason: str):
        self.instant = instant
        self.reason = reason
        super().__init__(f"Invalid timestamp {instant!r}: {reason}")


class InvalidYearError(HeatMapError):
    """Raised when a target year cannot produce a full calendar grid."""

    def __init__(self, year: object):
        self.year = year
        super().__init__(f"Invalid year {year!r}: must be an integer between 1 and 9999")


class GridInvariantError(HeatMapError):
    """Raised when a year grid fails its post-condition checks.

    Attributes:
        code: Error code (e.g., "DAY_COUNT_MISMATCH", "WEEKDAY_ROW_MISMATCH")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")
