import re
import secrets
import string
from datetime import datetime, timezone

# Optional country code followed by a 10 digit subscriber number,
# e.g. 9876543210, 919876543210, +919876543210
PHONE_NUMBER_RE = re.compile(r"^\+?(\d{1,3})?\d{10}$")

def generate_otp(length: int = 4) -> str:
    """Numeric one-time code of exactly ``length`` digits."""
    if length < 1:
        raise ValueError("OTP length must be positive")
    return ''.join(secrets.choice(string.digits) for _ in range(length))

def is_valid_phone_number(phone_number) -> bool:
    if not isinstance(phone_number, str):
        return False
    return PHONE_NUMBER_RE.match(phone_number) is not None

def utcnow() -> datetime:
    return datetime.now(timezone.utc)
