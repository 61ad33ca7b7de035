"""Auth orchestrator — drives the email → OTP → session state machine."""

from __future__ import annotations

import logging
from collections.abc import Callable

from otp_auth.config import settings
from otp_auth.models.auth_state import (
    Authenticated,
    AuthSnapshot,
    AuthState,
    Initial,
    OtpCountdownView,
    OtpSent,
)
from otp_auth.models.otp import ValidationResult, ValidationStatus
from otp_auth.services.clock import Clock, SystemClock
from otp_auth.services.countdown import PeriodicTask
from otp_auth.services.event_logger import AuthEventLogger, LoggingEventLogger
from otp_auth.services.validation import InputValidationError, validate_code, validate_email
from otp_auth.store.otp_store import OTPStore

logger = logging.getLogger(__name__)

Observer = Callable[[AuthSnapshot], None]

# ── User-facing messages for rejected codes ──────────────
MSG_EXPIRED = "OTP has expired. Please request a new one"
MSG_ATTEMPTS_EXHAUSTED = "Maximum attempts exceeded. Please request a new OTP"
MSG_NO_CODE_PENDING = "No OTP found. Please request a new one"

# Reasons reported to the event logger
REASON_EXPIRED = "OTP Expired"
REASON_ATTEMPTS_EXHAUSTED = "Max attempts exceeded"
REASON_NO_CODE_PENDING = "No OTP generated"


class AuthOrchestrator:
    """Owns the authentication state and translates user intents into it.

    Flow
    ----
    1. ``request_code(email)`` checks the address, generates a code in the
       :class:`OTPStore` and moves to :class:`OtpSent`.  A countdown task
       starts publishing the remaining time and attempts every second.
    2. ``submit_code(email, code)`` checks the code's shape, asks the store
       to validate it and either moves to :class:`Authenticated` or publishes
       an error while staying put.
    3. ``resend()`` repeats step 1 for the pending email.
    4. ``logout()`` reports the session length and returns to :class:`Initial`.

    No exception escapes an intent: rejected input and rejected codes become
    the published ``error`` message.
    """

    def __init__(
        self,
        store: OTPStore | None = None,
        event_logger: AuthEventLogger | None = None,
        clock: Clock | None = None,
        countdown_interval: float | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._store = store or OTPStore(clock=self._clock)
        self._events = event_logger or LoggingEventLogger()
        self._countdown_interval = (
            settings.countdown_interval_seconds
            if countdown_interval is None
            else countdown_interval
        )

        self._state: AuthState = Initial()
        self._countdown_view = OtpCountdownView()
        self._error: str | None = None

        self._countdown_task: PeriodicTask | None = None
        self._observers: list[Observer] = []

    # ── Observable state ─────────────────────────────────

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def countdown(self) -> OtpCountdownView:
        return self._countdown_view

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def snapshot(self) -> AuthSnapshot:
        return AuthSnapshot(state=self._state, countdown=self._countdown_view, error=self._error)

    @property
    def pending_identity(self) -> str | None:
        """Email awaiting verification, if the state is :class:`OtpSent`."""
        if isinstance(self._state, OtpSent):
            return self._state.identity
        return None

    @property
    def countdown_running(self) -> bool:
        return self._countdown_task is not None and self._countdown_task.running

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer* and immediately send it the current snapshot.

        Returns a callable that removes the observer again.
        """
        self._observers.append(observer)
        self._deliver(observer, self.snapshot)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ── Intents ──────────────────────────────────────────

    async def request_code(self, identity: str) -> None:
        """Generate a code for *identity* and move to :class:`OtpSent`."""
        self._error = None
        try:
            validate_email(identity)
        except InputValidationError as exc:
            logger.info("Rejected email input %r: %s", identity, exc)
            self._error = str(exc)
            self._publish()
            return

        code = self._store.generate(identity)
        self._notify("on_code_generated", identity)
        self._state = OtpSent(identity=identity, code=code)
        logger.info("OTP issued for %s", identity)

        self._start_countdown(identity)
        self._publish()

    async def submit_code(self, identity: str, submitted: str) -> None:
        """Validate *submitted* for *identity* and update the state accordingly."""
        self._error = None
        try:
            validate_code(submitted, self._store.code_length)
        except InputValidationError as exc:
            self._error = str(exc)
            self._publish()
            return

        result = self._store.validate(identity, submitted)
        if result.is_correct:
            self._cancel_countdown()
            self._state = Authenticated(identity=identity, session_started_at=self._clock.now())
            self._notify("on_validation_succeeded", identity)
            logger.info("%s authenticated via OTP", identity)
        else:
            message, reason = self._describe_failure(result)
            self._error = message
            self._notify("on_validation_failed", identity, reason)
            logger.info("OTP rejected for %s: %s", identity, reason)
            if self.pending_identity == identity:
                self._recompute_countdown(identity)

        self._publish()

    async def resend(self, identity: str | None = None) -> None:
        """Issue a fresh code; defaults to the email currently awaiting verification."""
        await self.request_code(identity or self.pending_identity or "")

    async def logout(self) -> None:
        """End the session (if any) and return to :class:`Initial`."""
        state = self._state
        if isinstance(state, Authenticated):
            duration = max(int(self._clock.now() - state.session_started_at), 0)
            self._notify("on_logout", state.identity, duration)
            logger.info("%s logged out after %ss", state.identity, duration)

        self._cancel_countdown()
        self._state = Initial()
        self._countdown_view = OtpCountdownView()
        self._error = None
        self._publish()

    def clear_error(self) -> None:
        self._error = None
        self._publish()

    def close(self) -> None:
        """Stop any running countdown; the orchestrator stays usable afterwards."""
        self._cancel_countdown()

    # ── Countdown ────────────────────────────────────────

    def refresh_countdown(self, identity: str) -> bool:
        """Recompute the countdown view once.

        Returns ``True`` while the code for *identity* is still live and the
        countdown should keep ticking.
        """
        if self.pending_identity != identity:
            return False

        live = self._recompute_countdown(identity)
        self._publish()
        return live

    async def wait_for_countdown(self) -> None:
        if self._countdown_task is not None:
            await self._countdown_task.wait()

    # ── Private helpers ──────────────────────────────────

    def _recompute_countdown(self, identity: str) -> bool:
        """Derive the countdown view from the store without publishing it."""
        record = self._store.peek(identity)
        if record is None:
            self._countdown_view = OtpCountdownView.expired()
            return False

        now = self._clock.now()
        remaining = record.remaining_seconds(now)
        self._countdown_view = OtpCountdownView(
            remaining_seconds=remaining,
            attempts_remaining=record.attempts_remaining,
            is_expired=record.is_expired(now),
        )
        return remaining > 0

    def _start_countdown(self, identity: str) -> None:
        self._cancel_countdown()
        # First tick inline so the view published with the new code is current
        if not self._recompute_countdown(identity):
            return
        self._countdown_task = PeriodicTask(
            lambda: self.refresh_countdown(identity),
            self._countdown_interval,
            name=f"otp-countdown:{identity}",
        )
        self._countdown_task.start()

    def _cancel_countdown(self) -> None:
        if self._countdown_task is not None:
            self._countdown_task.cancel()
            self._countdown_task = None

    @staticmethod
    def _describe_failure(result: ValidationResult) -> tuple[str, str]:
        """Map a rejected outcome to ``(user message, logged reason)``."""
        if result.status is ValidationStatus.INCORRECT:
            left = result.attempts_remaining
            return (
                f"Incorrect OTP. {left} attempt(s) remaining",
                f"Incorrect OTP, {left} attempts remaining",
            )
        if result.status is ValidationStatus.EXPIRED:
            return MSG_EXPIRED, REASON_EXPIRED
        if result.status is ValidationStatus.ATTEMPTS_EXHAUSTED:
            return MSG_ATTEMPTS_EXHAUSTED, REASON_ATTEMPTS_EXHAUSTED
        return MSG_NO_CODE_PENDING, REASON_NO_CODE_PENDING

    def _notify(self, event: str, *args: object) -> None:
        try:
            getattr(self._events, event)(*args)
        except Exception:
            logger.exception("Event logger failed handling %s", event)

    def _publish(self) -> None:
        snapshot = self.snapshot
        for observer in list(self._observers):
            self._deliver(observer, snapshot)

    @staticmethod
    def _deliver(observer: Observer, snapshot: AuthSnapshot) -> None:
        try:
            observer(snapshot)
        except Exception:
            logger.exception("Auth state observer %r failed", observer)
