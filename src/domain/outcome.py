"""
Coded outcomes for ledger operations.

Every fallible operation returns an Outcome holding either a value or a
LedgerFailure. Failures carry one code from the closed ErrorCode taxonomy,
or the settlement collaborator's own code when a value transfer fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

FailureSource = Literal["ledger", "settlement"]


class ErrorCode(IntEnum):
    NOT_AUTHORIZED = 100
    INVALID_AMOUNT = 101
    SUBSCRIPTION_EXISTS = 102
    SUBSCRIPTION_NOT_FOUND = 103
    CONTENT_NOT_FOUND = 104
    INSUFFICIENT_BALANCE = 105
    TRANSFER_FAILED = 106
    INVALID_ROYALTY = 107
    INVALID_RATING = 108
    ALREADY_REPORTED = 109
    PROFILE_EXISTS = 110


# Wire names, as surfaced to API clients.
ERROR_NAMES: dict[ErrorCode, str] = {
    ErrorCode.NOT_AUTHORIZED: "NotAuthorized",
    ErrorCode.INVALID_AMOUNT: "InvalidAmount",
    ErrorCode.SUBSCRIPTION_EXISTS: "SubscriptionExists",
    ErrorCode.SUBSCRIPTION_NOT_FOUND: "SubscriptionNotFound",
    ErrorCode.CONTENT_NOT_FOUND: "ContentNotFound",
    ErrorCode.INSUFFICIENT_BALANCE: "InsufficientBalance",
    ErrorCode.TRANSFER_FAILED: "TransferFailed",
    ErrorCode.INVALID_ROYALTY: "InvalidRoyalty",
    ErrorCode.INVALID_RATING: "InvalidRating",
    ErrorCode.ALREADY_REPORTED: "AlreadyReported",
    ErrorCode.PROFILE_EXISTS: "ProfileExists",
}


@dataclass(frozen=True)
class LedgerFailure:
    """A tagged failure surfaced verbatim to the caller."""

    code: int
    name: str
    message: str = ""
    source: FailureSource = "ledger"

    @classmethod
    def of(cls, code: ErrorCode, message: str = "") -> LedgerFailure:
        return cls(code=int(code), name=ERROR_NAMES[code], message=message)

    @classmethod
    def from_settlement(cls, code: int | None, reason: str | None) -> LedgerFailure:
        # Collaborators that do not report a code map onto TransferFailed.
        if code is None:
            return cls(
                code=int(ErrorCode.TRANSFER_FAILED),
                name=ERROR_NAMES[ErrorCode.TRANSFER_FAILED],
                message=reason or "",
                source="settlement",
            )
        return cls(code=code, name="SettlementFailure", message=reason or "", source="settlement")

    def is_code(self, code: ErrorCode) -> bool:
        return self.source == "ledger" and self.code == int(code)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success value or failure of a single ledger call."""

    value: T | None = None
    failure: LedgerFailure | None = None

    @property
    def success(self) -> bool:
        return self.failure is None

    @classmethod
    def ok(cls, value: T | None = None) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, code: ErrorCode, message: str = "") -> Outcome[T]:
        return cls(failure=LedgerFailure.of(code, message))

    @classmethod
    def failed(cls, failure: LedgerFailure) -> Outcome[T]:
        return cls(failure=failure)


class TransactionAborted(Exception):
    """Raised inside a host transaction to roll back a failed call."""

    def __init__(self, failure: LedgerFailure):
        super().__init__(f"{failure.name} ({failure.code})")
        self.failure = failure
