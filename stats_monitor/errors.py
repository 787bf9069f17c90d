"""Exception types raised while fetching and parsing statistics reports."""

from enum import Enum
from typing import Optional, Union


class MonitorError(Exception):
    """Base class for all monitor errors."""
    pass


class ConfigError(MonitorError, ValueError):
    """Raised when a configuration value cannot be used."""
    pass


class FetchError(MonitorError):
    """Raised when the statistics endpoint cannot deliver a report."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseErrorKind(str, Enum):
    """Why a report was rejected"""
    WRONG_FIELD_COUNT = "wrong_field_count"
    BAD_FIELD = "bad_field"
    INVALID_TOTAL = "invalid_total"


class ParseError(MonitorError):
    """
    Raised when a report is malformed or semantically invalid.

    Attributes:
        kind: ParseErrorKind describing the failure
        field: Field index for BAD_FIELD, field name for INVALID_TOTAL,
               None for WRONG_FIELD_COUNT
    """

    def __init__(self, kind: ParseErrorKind, message: str,
                 field: Optional[Union[int, str]] = None):
        super().__init__(message)
        self.kind = kind
        self.field = field

    def __repr__(self):
        return f"ParseError(kind={self.kind.value!r}, field={self.field!r})"
