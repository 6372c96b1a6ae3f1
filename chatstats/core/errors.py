"""
Failure kinds of the report operations.
"""
from enum import IntEnum


class ErrorCode(IntEnum):
    OK = 0
    PARSE_ERROR = 1
    RANGE_ERROR = 2
    QUERY_ERROR = 3


class ReportError(Exception):
    """Base class for failures that end up in an error envelope."""

    code: ErrorCode = ErrorCode.QUERY_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(ReportError):
    """A date argument could not be understood."""

    code = ErrorCode.PARSE_ERROR


class RangeError(ReportError):
    """The requested date range is inverted or too long."""

    code = ErrorCode.RANGE_ERROR


class QueryError(ReportError):
    """The database rejected or failed the query."""

    code = ErrorCode.QUERY_ERROR
