import enum
import hashlib
import hmac
import logging
from typing import Any, Callable, Optional, Union

from . import utils

logger = logging.getLogger(__name__)


class Algorithm(enum.Enum):
    """
    HMAC hash functions an engine can be keyed with.

    SHA1 is the RFC default and what most authenticator apps still expect.
    """

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def digest(self) -> Callable[..., Any]:
        return getattr(hashlib, self.value)

    @property
    def digest_size(self) -> int:
        return self.digest().digest_size

    @classmethod
    def coerce(cls, value: Union["Algorithm", str, None]) -> "Algorithm":
        if value is None:
            return cls.SHA1
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.upper().replace("-", "")]
            except KeyError:
                pass
        raise ValueError("Invalid value for algorithm, must be SHA1, SHA256 or SHA512")


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        secret: bytes,
        algorithm: Union[Algorithm, str, None] = Algorithm.SHA1,
        digits: int = 6,
    ) -> None:
        """
        :param secret: raw secret bytes, already decoded from base32 or
            whatever encoding it was shared in
        :param algorithm: hash function used in the HMAC
        :param digits: default length of rendered codes
        """
        if not isinstance(secret, (bytes, bytearray, memoryview)):
            raise TypeError("secret must be bytes; decode it before passing")
        secret = bytes(secret)
        if not secret:
            raise ValueError("secret must not be empty")

        self.algorithm = Algorithm.coerce(algorithm)
        self.digits = utils.check_digits(digits)
        # Keyed once; sign() works on copies so the engine stays read-only.
        self._hmac = hmac.new(secret, digestmod=self.algorithm.digest)
        logger.debug("Keyed %s with HMAC-%s", type(self).__name__, self.algorithm.name)

    def sign(self, counter: int) -> bytes:
        """
        Signs the 8 byte big-endian form of ``counter``.

        :param counter: unsigned 64-bit HMAC counter
        :returns: 20, 32 or 64 bytes depending on the algorithm
        """
        hasher = self._hmac.copy()
        hasher.update(utils.int_to_bytestring(utils.check_counter(counter)))
        return hasher.digest()

    def generate_num(self, counter: int, digits: int) -> int:
        """
        Implements the dynamic truncation of RFC 4226 section 5.3.

        :param counter: the HMAC counter value
        :param digits: number of decimal digits to keep
        :returns: integer in ``range(10 ** digits)``
        """
        digits = utils.check_digits(digits)
        hmac_hash = self.sign(counter)
        offset = hmac_hash[-1] & 0xF
        if offset + 4 > len(hmac_hash):
            raise ValueError("digest too short for dynamic truncation")
        code = int.from_bytes(hmac_hash[offset : offset + 4], "big") & 0x7FFFFFFF
        return code % 10**digits

    def generate_to(self, counter: int, dest: Any) -> None:
        """
        Writes the code for ``counter`` into ``dest``.

        The whole buffer is always written; its length is the number of
        digits.

        :param dest: writable bytes-like object, e.g. ``bytearray(6)``
        """
        view = memoryview(dest)
        if view.readonly:
            raise TypeError("destination buffer must be writable")
        view = view.cast("B")
        digits = utils.check_digits(len(view))
        view[:] = self.format_num(self.generate_num(counter, digits), digits).encode("ascii")

    def generate_otp(self, counter: int, digits: Optional[int] = None) -> str:
        if digits is None:
            digits = self.digits
        return self.format_num(self.generate_num(counter, digits), digits)

    def check(self, token: str, counter: int) -> bool:
        """
        Compares ``token`` with the code for ``counter``.

        The token's own length picks how many digits the reference value is
        truncated to, so "0443" and "000443" are checked against differently
        truncated values. Malformed tokens are never an error, just a miss.
        """
        token = utils.parse_token(token)
        if token is None:
            return False
        return utils.strings_equal(token, self.generate_otp(counter, len(token)))

    @staticmethod
    def format_num(num: int, digits: int) -> str:
        return str(num).rjust(digits, "0")

    def __repr__(self) -> str:
        return "<{} algorithm={} digits={}>".format(type(self).__name__, self.algorithm.name, self.digits)
