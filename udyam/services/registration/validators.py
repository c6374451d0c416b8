"""Registration validators - identity, tax and contact formats."""

import re
from typing import Any, Dict


AADHAAR_PATTERN = re.compile(r'[0-9]{12}')
PAN_PATTERN = re.compile(r'[A-Z]{5}[0-9]{4}[A-Z]')
MOBILE_PATTERN = re.compile(r'[0-9]{10}')
EMAIL_PATTERN = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')

ENTREPRENEUR_NAME_MAX_LENGTH = 100

ORGANIZATION_TYPES: Dict[str, str] = {
    '1': 'Proprietorship',
    '2': 'Partnership',
    '3': 'Hindu Undivided Family',
    '4': 'Private Limited Company',
    '5': 'Public Limited Company',
    '6': 'Limited Liability Partnership',
    '7': 'Cooperative Society',
    '8': 'Society',
    '9': 'Trust',
    '10': 'Self Help Group',
    '11': 'Others',
}


def _strip_whitespace(value: str) -> str:
    return re.sub(r'\s+', '', value)


def clean_aadhaar(value: str) -> str:
    """Remove all whitespace from an Aadhaar number."""
    return _strip_whitespace(value)


def clean_pan(value: str) -> str:
    """Upper-case a PAN and remove all whitespace."""
    return _strip_whitespace(value).upper()


def validate_aadhaar(value: Any) -> bool:
    """True if value is exactly 12 ASCII digits, ignoring whitespace.

    Examples:
        >>> validate_aadhaar("1234 5678 9012")
        True
        >>> validate_aadhaar("abcd56789012")
        False
    """
    if not value or not isinstance(value, str):
        return False
    return bool(AADHAAR_PATTERN.fullmatch(clean_aadhaar(value)))


def validate_pan(value: Any) -> bool:
    """True if value, upper-cased and without whitespace, looks like AAAAA9999A."""
    if not value or not isinstance(value, str):
        return False
    return bool(PAN_PATTERN.fullmatch(clean_pan(value)))


def validate_entrepreneur_name(value: Any) -> bool:
    """True for a non-blank name of at most 100 characters."""
    return (
        isinstance(value, str)
        and len(value.strip()) > 0
        and len(value) <= ENTREPRENEUR_NAME_MAX_LENGTH
    )


def validate_mobile(value: Any) -> bool:
    """True if value is exactly 10 digits, ignoring whitespace."""
    if not value or not isinstance(value, str):
        return False
    return bool(MOBILE_PATTERN.fullmatch(_strip_whitespace(value)))


def validate_email(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return bool(EMAIL_PATTERN.fullmatch(value))


def validate_organization_type(value: Any) -> bool:
    """True if value is one of the known organization-type codes."""
    return str(value).strip() in ORGANIZATION_TYPES if value is not None else False


def parse_consent(value: Any) -> bool:
    """Interpret a consent flag from JSON (bool) or a form post (string)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower().strip() in ('y', 'yes', 'true', '1', 'on')
    return False
