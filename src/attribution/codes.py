"""
Tracking code rules.

A candidate code is only looked up when it is well formed and not a
reserved path segment. Anything else is "not found", never an error.
"""

import re
from dataclasses import dataclass
from typing import Optional


# Path segments that must never be read as a vanity/referral code.
RESERVED_CODES = frozenset({
    "admin",
    "api",
    "dashboard",
    "auth",
    "test",
    "demo",
    "support",
    "help",
    "app",
    "login",
    "logout",
    "signin",
    "signup",
    "settings",
    "static",
    "_next",
    "ref",
    "go",
    "book",
    "store",
    "preparer",
    "affiliate",
    "client",
    "lead",
    "forbidden",
    "not-found",
    "about",
    "contact",
    "terms",
    "privacy",
    "blog",
    "services",
    "start-filing",
    "account",
})

MIN_CODE_LENGTH = 2
MAX_CODE_LENGTH = 50

MIN_CUSTOM_CODE_LENGTH = 3
MAX_CUSTOM_CODE_LENGTH = 20

_WELL_FORMED = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_CUSTOM_CHARS = re.compile(r"^[A-Za-z0-9_-]+$")


def normalize_code(raw: Optional[str]) -> Optional[str]:
    """Strip whitespace; empty or missing input becomes None."""
    if raw is None:
        return None
    code = raw.strip()
    return code or None


def is_reserved_code(code: str) -> bool:
    return code.strip().lower() in RESERVED_CODES


def is_well_formed_code(code: str) -> bool:
    return (
        MIN_CODE_LENGTH <= len(code) <= MAX_CODE_LENGTH
        and _WELL_FORMED.match(code) is not None
    )


def is_lookup_candidate(raw: Optional[str]) -> Optional[str]:
    """Return the normalized code if it may be looked up, else None."""
    code = normalize_code(raw)
    if code is None or is_reserved_code(code) or not is_well_formed_code(code):
        return None
    return code


@dataclass(frozen=True)
class CodeValidation:
    valid: bool
    error: Optional[str] = None


def validate_custom_tracking_code(code: str) -> CodeValidation:
    """
    Check a user-chosen tracking code.

    Availability across the three namespaces is checked separately by the
    profile repository.
    """
    if not code or len(code) < MIN_CUSTOM_CODE_LENGTH:
        return CodeValidation(False, f"Code must be at least {MIN_CUSTOM_CODE_LENGTH} characters")

    if len(code) > MAX_CUSTOM_CODE_LENGTH:
        return CodeValidation(False, f"Code must be at most {MAX_CUSTOM_CODE_LENGTH} characters")

    if not _CUSTOM_CHARS.match(code):
        return CodeValidation(False, "Code can only contain letters, numbers, hyphens, and underscores")

    if code[0] in "-_" or code[-1] in "-_":
        return CodeValidation(False, "Code cannot start or end with a hyphen or underscore")

    if code.isdigit():
        return CodeValidation(False, "Code cannot be only numbers")

    if is_reserved_code(code):
        return CodeValidation(False, "This code is reserved and cannot be used")

    return CodeValidation(True)
