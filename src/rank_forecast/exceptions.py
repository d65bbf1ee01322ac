"""Custom exceptions for Rank Forecast.

Every error carries an actionable message plus the offending values as
attributes, so callers can render them without parsing strings.
"""

from __future__ import annotations


class RankForecastError(Exception):
    """Base exception for all Rank Forecast errors."""

    pass


class UnknownRankError(RankForecastError):
    """A rank name is not part of the configured ladder.

    Raised by ladder lookups and propagated unchanged by every component
    that accepts a rank name.
    """

    def __init__(self, rank_name: str, known: list[str] | None = None):
        self.rank_name = rank_name
        self.known = known or []

        message = f"Unknown rank '{rank_name}'."
        if self.known:
            message += f"\nValid ranks: {', '.join(self.known)}"
        super().__init__(message)


class InvalidInputError(RankForecastError):
    """Input outside the range an operation accepts.

    Raised for out-of-range game counts, a draw passed where only
    win/loss makes sense, and similar precondition failures.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Invalid value for '{field}': {message}"
        super().__init__(full_message)


class ConfigError(RankForecastError):
    """Error in configuration.

    Raised when a configuration file is malformed.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Configuration error in '{field}': {message}"
        super().__init__(full_message)
