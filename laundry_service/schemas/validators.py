"""
Shared field validators
"""
import re
from typing import Optional

_TEN_DIGITS = re.compile(r"^\d{10}$")
_INDIAN_PREFIXED = re.compile(r"^\+91\d{10}$")


def normalize_phone(value: str) -> str:
    """
    Validate a mobile number and normalize it to 10 digits
    
    Accepts 10 digits or +91 followed by 10 digits; spaces, dashes and
    brackets are ignored.
    
    Raises:
        ValueError: If the number has any other shape
    """
    cleaned = re.sub(r"[^0-9+]", "", value.strip())
    if not (_TEN_DIGITS.match(cleaned) or _INDIAN_PREFIXED.match(cleaned)):
        raise ValueError("Phone must be 10 digits or +91 followed by 10 digits")
    return cleaned[3:] if cleaned.startswith("+91") else cleaned


def normalize_optional_phone(value: Optional[str]) -> str:
    """Like normalize_phone, but an empty value stays empty"""
    if value is None or value.strip() == "":
        return ""
    return normalize_phone(value)


def strip_text(value):
    return value.strip() if isinstance(value, str) else value
