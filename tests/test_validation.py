"""Tests for input-shape validation."""

import pytest

from otp_auth.services.validation import InputValidationError, validate_code, validate_email


@pytest.mark.parametrize(
    "email",
    ["a@b.co", "alice@example.com", "first.last+tag@mail.example.org", "x_y%z@sub-domain.io"],
)
def test_accepts_well_formed_email(email):
    assert validate_email(email) == email


@pytest.mark.parametrize(
    "email",
    ["not-an-email", "a@b", "@example.com", "alice@", "alice@.com", "al ice@example.com", "a@b.co "],
)
def test_rejects_malformed_email(email):
    with pytest.raises(InputValidationError, match="valid email"):
        validate_email(email)


@pytest.mark.parametrize("email", ["", "   "])
def test_rejects_blank_email(email):
    with pytest.raises(InputValidationError, match="enter an email"):
        validate_email(email)


def test_accepts_code_of_exact_length():
    assert validate_code("012345") == "012345"


def test_rejects_blank_code():
    with pytest.raises(InputValidationError) as exc_info:
        validate_code("")
    assert str(exc_info.value) == "Please enter OTP"


@pytest.mark.parametrize("code", ["12345", "1234567"])
def test_rejects_wrong_length_code(code):
    with pytest.raises(InputValidationError, match="OTP must be 6 digits"):
        validate_code(code)


def test_code_length_can_be_overridden():
    assert validate_code("1234", length=4) == "1234"
    with pytest.raises(InputValidationError, match="OTP must be 4 digits"):
        validate_code("123456", length=4)


def test_explicit_zero_length_is_honoured():
    with pytest.raises(InputValidationError, match="OTP must be 0 digits"):
        validate_code("123456", length=0)
