"""
Input validators.

Plain predicate functions for contact data, money amounts, URLs and video
durations.
Services turn a False result into a ValidationError with a user-facing message.

Dependencies: math, re, urllib (stdlib)
System role: Form-level validation rules
"""

import math
import re
from urllib.parse import urlparse

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DURATION_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
_NON_DIGITS = re.compile(r"\D")
_UNSAFE_CHARS = re.compile(r"[<>\"']")


def only_digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email.strip().lower()))


def validate_phone(phone: str) -> bool:
    """Brazilian phone: 10 (landline) or 11 (mobile) digits once formatting is stripped."""
    return 10 <= len(only_digits(phone)) <= 11


def validate_cpf(cpf: str) -> bool:
    """CPF length check (11 digits); check digits are not verified."""
    return len(only_digits(cpf)) == 11


def validate_url(url: str) -> bool:
    """Absolute URL with a scheme and a host."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def validate_duration(duration: str) -> bool:
    """Video duration in MM:SS form (first part 0-23, second 00-59)."""
    return bool(DURATION_PATTERN.match(duration.strip()))


def sanitize_input(value: str) -> str:
    """Strip characters that could break out of HTML attributes."""
    return _UNSAFE_CHARS.sub("", value)


def validate_amount(value: object) -> bool:
    """Finite number greater than zero (NaN and infinity rejected)."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(amount) and amount > 0
