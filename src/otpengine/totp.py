import datetime
import logging
import time
from typing import Any, Callable, Optional, Union

from . import utils
from .hotp import HOTP
from .otp import Algorithm

logger = logging.getLogger(__name__)

TimeLike = Union[int, float, datetime.datetime]


class TOTP(object):
    """
    Handler for time-based OTP counters.

    Wraps an :class:`HOTP` engine and feeds it ``time // step`` as counter.
    """

    def __init__(
        self,
        secret: bytes,
        algorithm: Union[Algorithm, str, None] = Algorithm.SHA1,
        digits: int = 6,
        step: int = 30,
        skew: int = 1,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        :param secret: raw secret bytes
        :param algorithm: hash function used in the HMAC
        :param digits: default length of generated codes
        :param step: the time interval in seconds for OTP. This defaults to 30.
        :param skew: number of neighbouring steps accepted on each side when
            verifying, to absorb clock drift. 0 disables it.
        :param clock: callable returning the current Unix time
        """
        self.inner = HOTP(secret, algorithm=algorithm, digits=digits)
        self.step = step
        self.skew = skew
        self.clock = clock
        logger.debug("TOTP configured with step=%ss skew=%s", self.step, self.skew)

    @property
    def step(self) -> int:
        return self._step

    @step.setter
    def step(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("step must be an integer")
        if value <= 0:
            raise ValueError("step must be greater than zero")
        self._step = value

    @property
    def skew(self) -> int:
        return self._skew

    @skew.setter
    def skew(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("skew must be an integer")
        if value < 0:
            raise ValueError("skew must not be negative")
        self._skew = value

    @property
    def algorithm(self) -> Algorithm:
        return self.inner.algorithm

    @property
    def digits(self) -> int:
        return self.inner.digits

    def timecode(self, for_time: TimeLike) -> int:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate the counter for
        :returns: the HMAC counter value for ``for_time``
        """
        return utils.to_unix_seconds(for_time) // self.step

    def sign(self, for_time: TimeLike) -> bytes:
        return self.inner.sign(self.timecode(for_time))

    def generate_num(self, for_time: TimeLike, digits: int) -> int:
        return self.inner.generate_num(self.timecode(for_time), digits)

    def generate_to(self, for_time: TimeLike, dest: Any) -> None:
        """
        Writes the code for ``for_time`` into ``dest``, filling all of it.
        """
        self.inner.generate_to(self.timecode(for_time), dest)

    def at(self, for_time: TimeLike, digits: Optional[int] = None) -> str:
        """
        Generates the OTP for the given time.

        :param for_time: Unix timestamp or datetime
        :param digits: code length, defaults to the engine's
        :returns: OTP value
        """
        return self.inner.at(self.timecode(for_time), digits)

    def now(self, digits: Optional[int] = None) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(self.clock(), digits)

    def verify(self, otp: str, for_time: TimeLike) -> bool:
        """
        Verifies the OTP passed in against ``for_time``.

        The exact window is tried first, then ``skew`` steps ahead and behind,
        nearest first. Windows that would fall before the epoch or past a
        64-bit counter are skipped.

        :param otp: the OTP to check against
        :param for_time: time to check the OTP at
        :returns: True if verification succeeded, False otherwise
        """
        if utils.parse_token(otp) is None:
            return False

        seconds = utils.to_unix_seconds(for_time)
        if self.inner.check(otp, seconds // self.step):
            return True

        for offset in range(1, self.skew + 1):
            delta = offset * self.step
            for candidate in (seconds + delta, seconds - delta):
                if candidate < 0:
                    continue
                counter = candidate // self.step
                if counter > utils.MAX_COUNTER:
                    continue
                if self.inner.check(otp, counter):
                    logger.debug("TOTP accepted %+d steps from %s", (counter - seconds // self.step), seconds)
                    return True
        return False

    def verify_now(self, otp: str) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.
        """
        return self.verify(otp, self.clock())

    def __repr__(self) -> str:
        return "<TOTP algorithm={} digits={} step={} skew={}>".format(
            self.algorithm.name, self.digits, self.step, self.skew
        )
