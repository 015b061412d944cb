from __future__ import annotations

import pytest

from otpengine import utils


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, b"\x00" * 8),
        (1, b"\x00" * 7 + b"\x01"),
        (0x3039, b"\x00" * 6 + b"\x30\x39"),
        (2**64 - 1, b"\xff" * 8),
    ],
)
def test_int_to_bytestring(value, expected):
    assert utils.int_to_bytestring(value) == expected


@pytest.mark.parametrize("token", ["0", "000443", "123456789"])
def test_parse_token_accepts_digits(token):
    assert utils.parse_token(token) == token


@pytest.mark.parametrize("token", ["", "²", "1234567890", "12 34", b"123456"])
def test_parse_token_rejects(token):
    assert utils.parse_token(token) is None


def test_strings_equal():
    assert utils.strings_equal("000443", "000443")
    assert not utils.strings_equal("000443", "443")


def test_check_digits_rejects_bool():
    with pytest.raises(TypeError):
        utils.check_digits(True)
