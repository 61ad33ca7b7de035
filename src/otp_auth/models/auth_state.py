"""Authentication state machine variants and the snapshots published to observers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from otp_auth.config import settings


@dataclass(frozen=True)
class Initial:
    """No identity in flight."""


@dataclass(frozen=True)
class OtpSent:
    """A code was generated and awaits verification.

    ``code`` is carried for display only; the store holds the authoritative
    value.
    """

    identity: str
    code: str


@dataclass(frozen=True)
class Authenticated:
    """Verification succeeded; the session started at ``session_started_at``."""

    identity: str
    session_started_at: float


AuthState: TypeAlias = Initial | OtpSent | Authenticated


@dataclass(frozen=True)
class OtpCountdownView:
    """Projection of the pending code for rendering, recomputed every tick."""

    remaining_seconds: int = 0
    attempts_remaining: int = field(default_factory=lambda: settings.otp_max_attempts)
    is_expired: bool = False

    @classmethod
    def expired(cls) -> OtpCountdownView:
        return cls(remaining_seconds=0, attempts_remaining=0, is_expired=True)


@dataclass(frozen=True)
class AuthSnapshot:
    """Everything a presentation layer needs to render the current screen."""

    state: AuthState
    countdown: OtpCountdownView
    error: str | None = None
