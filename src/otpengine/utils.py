import calendar
import datetime
import time
from hmac import compare_digest
from typing import Union

MAX_DIGITS = 9
MAX_COUNTER = 0xFFFFFFFFFFFFFFFF


def check_digits(digits: int) -> int:
    """
    Validates the width of a rendered code.

    10 ** digits has to stay inside the unsigned 32-bit range the truncated
    value lives in, so only 1 to 9 digits are supported.
    """
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise TypeError("digits must be an integer")
    if not 1 <= digits <= MAX_DIGITS:
        raise ValueError("digits must be between 1 and {}".format(MAX_DIGITS))
    return digits


def check_counter(counter: int) -> int:
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise TypeError("counter must be an integer")
    if counter < 0:
        raise ValueError("counter must be positive integer")
    if counter > MAX_COUNTER:
        raise ValueError("counter must fit in 64 bits")
    return counter


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def parse_token(token: str) -> Union[str, None]:
    """
    Returns ``token`` if it looks like a rendered code, otherwise None.

    Only ASCII digits are accepted; ``str.isdigit`` alone would let through
    superscripts and other scripts' digits.
    """
    if not isinstance(token, str):
        return None
    if not 1 <= len(token) <= MAX_DIGITS:
        return None
    if not (token.isascii() and token.isdigit()):
        return None
    return token


def to_unix_seconds(for_time: Union[int, float, datetime.datetime]) -> int:
    """
    Normalizes a point in time to whole, non-negative Unix seconds.

    :param for_time: seconds since the epoch, or a datetime. Naive datetimes
        are taken as local time.
    """
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo is None:
            seconds = int(time.mktime(for_time.timetuple()))
        else:
            seconds = calendar.timegm(for_time.utctimetuple())
    elif isinstance(for_time, bool) or not isinstance(for_time, (int, float)):
        raise TypeError("time must be an int, float or datetime")
    else:
        seconds = int(for_time // 1)
    if seconds < 0:
        raise ValueError("time must be positive integer")
    if seconds > MAX_COUNTER:
        raise ValueError("time must fit in 64 bits")
    return seconds


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    return compare_digest(s1.encode("ascii"), s2.encode("ascii"))
