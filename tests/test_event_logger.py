"""Tests for the LoggingEventLogger output format."""

import logging

import pytest

from otp_auth.services.event_logger import LoggingEventLogger


@pytest.fixture
def event_logger(caplog):
    caplog.set_level(logging.INFO, logger="otp_auth.events")
    return LoggingEventLogger()


def test_code_generated(event_logger, caplog):
    event_logger.on_code_generated("a@b.co")
    assert caplog.messages == ["EVENT: OTP_GENERATED for email: a@b.co"]
    assert caplog.records[0].name == "otp_auth.events"


def test_validation_succeeded(event_logger, caplog):
    event_logger.on_validation_succeeded("a@b.co")
    assert caplog.messages == ["EVENT: OTP_VALIDATION_SUCCESS for email: a@b.co"]


def test_validation_failed(event_logger, caplog):
    event_logger.on_validation_failed("a@b.co", "OTP Expired")
    assert caplog.messages == [
        "EVENT: OTP_VALIDATION_FAILURE for email: a@b.co, reason: OTP Expired"
    ]


def test_logout(event_logger, caplog):
    event_logger.on_logout("a@b.co", 125)
    assert caplog.messages == ["EVENT: LOGOUT for email: a@b.co, duration: 125s"]


def test_level_is_configurable(caplog):
    caplog.set_level(logging.DEBUG, logger="otp_auth.events")
    LoggingEventLogger(level=logging.DEBUG).on_code_generated("a@b.co")
    assert caplog.records[0].levelno == logging.DEBUG
