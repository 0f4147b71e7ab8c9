"""
Contact details used for cross-device attribution.

Emails match case-insensitively. Phones match on their last ten digits, so
"+1 (404) 555-0100" and "404.555.0100" are the same number.
"""

import re
from typing import Optional

PHONE_MATCH_DIGITS = 10

_NON_DIGITS = re.compile(r"\D")


def normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    email = email.strip().lower()
    if "@" not in email:
        return None
    return email


def phone_digits(phone: Optional[str]) -> Optional[str]:
    """Digits of a phone number, or None when it has fewer than ten."""
    if not phone:
        return None
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) < PHONE_MATCH_DIGITS:
        return None
    return digits


def phone_match_key(phone: Optional[str]) -> Optional[str]:
    digits = phone_digits(phone)
    return digits[-PHONE_MATCH_DIGITS:] if digits else None
