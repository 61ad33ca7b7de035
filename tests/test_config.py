"""Tests for environment-driven settings."""

from otp_auth.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.otp_length == 6
    assert s.otp_ttl_seconds == 60
    assert s.otp_max_attempts == 3
    assert s.countdown_interval_seconds == 1.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OTP_AUTH_OTP_TTL_SECONDS", "30")
    monkeypatch.setenv("OTP_AUTH_OTP_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("OTP_AUTH_DEBUG", "true")

    s = Settings(_env_file=None)

    assert s.otp_ttl_seconds == 30
    assert s.otp_max_attempts == 5
    assert s.debug is True
