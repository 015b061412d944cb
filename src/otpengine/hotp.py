from typing import Optional, Union

from .otp import OTP, Algorithm


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        secret: bytes,
        algorithm: Union[Algorithm, str, None] = Algorithm.SHA1,
        digits: int = 6,
    ) -> None:
        """
        :param secret: raw secret bytes
        :param algorithm: hash function used in the HMAC, SHA1 unless told otherwise
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        """
        super().__init__(secret, algorithm=algorithm, digits=digits)

    def at(self, count: int, digits: Optional[int] = None) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter
        :param digits: code length, defaults to the one the engine was built with
        :returns: OTP
        """
        return self.generate_otp(count, digits)

    def verify(self, otp: str, counter: int) -> bool:
        """
        Verifies the OTP passed in against the counter OTP.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter
        """
        return self.check(otp, counter)
