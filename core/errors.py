# =============================================================================
# core/errors.py  -  Error Taxonomy & Result Values
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Names every way a Graylog tool call can fail, and defines the two
#   result values (Success / Failure) the HTTP client hands back instead
#   of raising.
#
# THE TAXONOMY:
#   GraylogError                 base class, carries a human-readable message
#     ConfigurationError         missing/invalid GRAYLOG_* settings (fatal at startup)
#     InputValidationError       tool arguments failed their declared shape
#     NetworkError               could not reach Graylog (DNS, refused, timeout)
#     GraylogHTTPError           Graylog answered with a non-2xx status
#     DecodingError              body is not JSON, or lacks the fields we use
#
# RESULT VALUES:
#   The client returns Success(value) or Failure(error).  Handlers check
#   which one they got with isinstance() and turn a Failure into an error
#   outcome for the caller.  Nothing is retried.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class GraylogError(Exception):
    """Base class for every failure surfaced to a tool caller."""

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(GraylogError):
    """Required connection settings are missing or malformed."""


class InputValidationError(GraylogError):
    """Tool arguments do not match the declared input shape."""


class NetworkError(GraylogError):
    """Transport-level failure reaching Graylog."""


class GraylogHTTPError(GraylogError):
    """Graylog returned a non-2xx response."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class DecodingError(GraylogError):
    """Response body is not valid JSON or is missing a field we rely on."""


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: GraylogError


Result = Union[Success[Any], Failure]
