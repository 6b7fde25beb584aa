"""Tagged results for calls across the AI boundary."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

import openai
from pydantic import ValidationError

from .constants import ErrorConstants

T = TypeVar("T")


class FetchStatus(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


class FailureKind(str, Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    QUOTA = "quota"
    API_ERROR = "api_error"
    MALFORMED = "malformed"
    SCHEMA_MISMATCH = "schema_mismatch"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one model request.

    ``empty`` means the model answered but produced no usable record;
    ``failure`` carries the reason the request or its parsing broke. Both
    render as the neutral idle state, only ``success`` carries a value.
    """
    status: FetchStatus
    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    reason: str = ""

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(status=FetchStatus.SUCCESS, value=value)

    @classmethod
    def empty(cls, reason: str = "") -> "FetchResult[T]":
        return cls(status=FetchStatus.EMPTY, reason=reason)

    @classmethod
    def fail(cls, kind: FailureKind, reason: str = "") -> "FetchResult[T]":
        return cls(status=FetchStatus.FAILURE, failure=kind, reason=reason[:ErrorConstants.REASON_MAX_LENGTH])

    @classmethod
    def from_exception(cls, exc: BaseException) -> "FetchResult[T]":
        return cls.fail(classify_exception(exc), f"{type(exc).__name__}: {exc}")

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.SUCCESS

    def unwrap_or_none(self) -> Optional[T]:
        """Return the value on success and None for empty or failure."""
        return self.value if self.ok else None


def classify_exception(exc: BaseException) -> FailureKind:
    """Map an exception raised at the AI boundary to a failure kind."""
    if isinstance(exc, ValidationError):
        return FailureKind.SCHEMA_MISMATCH
    if isinstance(exc, json.JSONDecodeError):
        return FailureKind.MALFORMED
    # APITimeoutError subclasses APIConnectionError, check it first
    if isinstance(exc, (openai.APITimeoutError, TimeoutError)):
        return FailureKind.TIMEOUT
    if isinstance(exc, (openai.APIConnectionError, ConnectionError)):
        return FailureKind.NETWORK
    if isinstance(exc, openai.RateLimitError):
        return FailureKind.QUOTA
    if isinstance(exc, openai.APIStatusError):
        return FailureKind.API_ERROR
    if isinstance(exc, ValueError):
        return FailureKind.MALFORMED
    return FailureKind.UNKNOWN
