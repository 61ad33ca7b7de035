"""OTP record and validation outcome value objects."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


@dataclass(frozen=True)
class OTPRecord:
    """One pending code for one identity.

    Timestamps are epoch seconds as reported by the store's clock.
    """

    code: str
    expires_at: float
    attempts_remaining: int
    created_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def remaining_seconds(self, now: float) -> int:
        """Whole seconds left before expiry, never negative."""
        return max(int(self.expires_at - now), 0)

    def with_failed_attempt(self) -> OTPRecord:
        return replace(self, attempts_remaining=self.attempts_remaining - 1)


class ValidationStatus(Enum):
    """Possible outcomes of checking a submitted code."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    EXPIRED = "expired"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"
    NO_CODE_PENDING = "no_code_pending"


@dataclass(frozen=True)
class ValidationResult:
    """Value object returned by :meth:`OTPStore.validate`.

    ``attempts_remaining`` is only set for ``INCORRECT`` outcomes and holds
    the count left *after* the failed attempt was recorded.
    """

    status: ValidationStatus
    attempts_remaining: int | None = None

    @property
    def is_correct(self) -> bool:
        return self.status is ValidationStatus.CORRECT

    @classmethod
    def incorrect(cls, attempts_remaining: int) -> ValidationResult:
        return cls(ValidationStatus.INCORRECT, attempts_remaining)


CORRECT = ValidationResult(ValidationStatus.CORRECT)
EXPIRED = ValidationResult(ValidationStatus.EXPIRED)
ATTEMPTS_EXHAUSTED = ValidationResult(ValidationStatus.ATTEMPTS_EXHAUSTED)
NO_CODE_PENDING = ValidationResult(ValidationStatus.NO_CODE_PENDING)
