"""Auth event logging — fire-and-forget notifications about the OTP flow."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

events_logger = logging.getLogger("otp_auth.events")


class AuthEventLogger(ABC):
    """Abstract receiver for authentication events.

    Implementations are notified after the orchestrator has already made its
    decision; nothing they do (including raising) influences the flow.
    """

    @abstractmethod
    def on_code_generated(self, identity: str) -> None:
        """A new code was generated for *identity*."""

    @abstractmethod
    def on_validation_succeeded(self, identity: str) -> None:
        """*identity* submitted the correct code."""

    @abstractmethod
    def on_validation_failed(self, identity: str, reason: str) -> None:
        """A submitted code was rejected.

        Parameters
        ----------
        identity:
            The email the code was submitted for.
        reason:
            Short human-readable cause, e.g. ``"OTP Expired"``.
        """

    @abstractmethod
    def on_logout(self, identity: str, session_duration_seconds: int) -> None:
        """*identity* ended a session that lasted *session_duration_seconds*."""


class LoggingEventLogger(AuthEventLogger):
    """Writes each event as a single record on the ``otp_auth.events`` logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def on_code_generated(self, identity: str) -> None:
        events_logger.log(self._level, "EVENT: OTP_GENERATED for email: %s", identity)

    def on_validation_succeeded(self, identity: str) -> None:
        events_logger.log(
            self._level, "EVENT: OTP_VALIDATION_SUCCESS for email: %s", identity
        )

    def on_validation_failed(self, identity: str, reason: str) -> None:
        events_logger.log(
            self._level,
            "EVENT: OTP_VALIDATION_FAILURE for email: %s, reason: %s",
            identity,
            reason,
        )

    def on_logout(self, identity: str, session_duration_seconds: int) -> None:
        events_logger.log(
            self._level,
            "EVENT: LOGOUT for email: %s, duration: %ss",
            identity,
            session_duration_seconds,
        )
