from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import Algorithm as Algorithm
from .totp import TOTP as TOTP

__all__ = ["Algorithm", "HOTP", "OTP", "TOTP"]
