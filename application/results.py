from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

# What get_credits().value_or(CREDITS_UNAVAILABLE) gives when the balance could not be read.
CREDITS_UNAVAILABLE = -1


class FailureKind(Enum):
    """Why a session operation failed."""
    TRANSPORT = "transport"                        # connect/read/write failed, stream closed
    PROTOCOL = "protocol"                          # response did not follow the protocol
    REJECTED = "rejected"                          # server answered, but not with success
    INSUFFICIENT_CREDITS = "insufficient_credits"  # refused locally, nothing sent
    INVALID_STATE = "invalid_state"                # not allowed in the current session state


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of one request/response exchange.

    ok results carry a value; failed results carry a FailureKind and a
    human-readable detail. value is None on failure.
    """
    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @staticmethod
    def success(value: Any) -> "Result":
        return Result(value=value)

    @staticmethod
    def fail(kind: FailureKind, detail: Optional[str] = None) -> "Result":
        return Result(failure=kind, detail=detail)

    def value_or(self, default: Any) -> Any:
        return self.value if self.ok else default

    def __repr__(self) -> str:
        if self.ok:
            return f"Result(ok, {self.value!r})"
        return f"Result({self.failure.value}, {self.detail!r})"
