"""In-memory OTP store with expiry and bounded attempts."""

from __future__ import annotations

import random
import string
import threading

from otp_auth.config import settings
from otp_auth.models.otp import (
    ATTEMPTS_EXHAUSTED,
    CORRECT,
    EXPIRED,
    NO_CODE_PENDING,
    OTPRecord,
    ValidationResult,
)
from otp_auth.services.clock import Clock, SystemClock


class OTPStore:
    """Owns the lifecycle of one-time codes, keyed by identity (email).

    Each entry maps ``identity → OTPRecord``.  At most one record exists per
    identity; generating again replaces it and resets its attempts.  Every
    read-then-write sequence runs under a single lock so concurrent
    validations for the same identity cannot lose a decrement.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        code_length: int | None = None,
        ttl_seconds: int | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._code_length = code_length if code_length is not None else settings.otp_length
        self._ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.otp_ttl_seconds
        self._max_attempts = (
            max_attempts if max_attempts is not None else settings.otp_max_attempts
        )
        self._store: dict[str, OTPRecord] = {}
        self._lock = threading.RLock()

    @property
    def code_length(self) -> int:
        return self._code_length

    def generate(self, identity: str) -> str:
        """Generate and store a fresh code for *identity*, discarding any prior one."""
        code = "".join(random.choices(string.digits, k=self._code_length))
        now = self._clock.now()
        with self._lock:
            self._store[identity] = OTPRecord(
                code=code,
                expires_at=now + self._ttl_seconds,
                attempts_remaining=self._max_attempts,
                created_at=now,
            )
        return code

    def validate(self, identity: str, submitted: str) -> ValidationResult:
        """Check *submitted* against the pending code for *identity*.

        Checks run in a fixed order: existence, expiry, attempts left, and
        only then the code itself.  An expired record is left in place so
        later calls keep reporting ``EXPIRED`` until a new code is generated
        or the record is cleared.
        """
        with self._lock:
            record = self._store.get(identity)
            if record is None:
                return NO_CODE_PENDING

            if record.is_expired(self._clock.now()):
                return EXPIRED

            if record.attempts_remaining <= 0:
                return ATTEMPTS_EXHAUSTED

            if submitted == record.code:
                # Single use
                del self._store[identity]
                return CORRECT

            updated = record.with_failed_attempt()
            self._store[identity] = updated
            return ValidationResult.incorrect(updated.attempts_remaining)

    def peek(self, identity: str) -> OTPRecord | None:
        """Return the live record for *identity*, or ``None`` if absent or expired."""
        with self._lock:
            record = self._store.get(identity)
        if record is None or record.is_expired(self._clock.now()):
            return None
        return record

    def clear(self, identity: str) -> None:
        """Remove any record for *identity*; a no-op when there is none."""
        with self._lock:
            self._store.pop(identity, None)

    @property
    def pending_count(self) -> int:
        """Number of records currently held (useful for diagnostics)."""
        with self._lock:
            return len(self._store)
