"""Tagged success/failure results and the failure kinds of the holidays pipeline."""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class ErrorCode(str, Enum):
    """Codes shown to chat users when a request cannot be served."""

    REDIS_READ = "REDIS_READ_ERROR"
    SITE_PARSE = "SITE_PARSE_ERROR"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]


@dataclass(frozen=True)
class FetchFailure:
    """The upstream page could not be retrieved."""

    url: str
    cause: Exception
    code: ErrorCode = ErrorCode.SITE_PARSE


@dataclass(frozen=True)
class ParseFailure:
    """The retrieved page did not yield a DayRecord."""

    cause: Exception
    code: ErrorCode = ErrorCode.SITE_PARSE


@dataclass(frozen=True)
class CacheReadError:
    """The cache could not be read or held an undecodable value."""

    key: str
    cause: Exception
    code: ErrorCode = ErrorCode.REDIS_READ


PipelineFailure = Union[FetchFailure, ParseFailure]
