"""Exceptions raised by the trending engine.

All errors are local validation failures. None are retried and none are
swallowed: callers receive them as-is.
"""


class TrendingError(Exception):
    """Base exception for trending engine errors."""


class ConfigurationError(TrendingError):
    """Raised when a DecayConfig is built with invalid values."""

    def __init__(self, message: str, field_name: str | None = None):
        super().__init__(message)
        self.field_name = field_name


class ValidationError(TrendingError):
    """Raised when mention input is malformed (bad date, bad count)."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value
