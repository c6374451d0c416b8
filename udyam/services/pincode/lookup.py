"""Postal-code lookup - parses responses from the India Post PIN code API.

The API answers GET /pincode/<code> with a one-element list:

    [{"Status": "Success", "PostOffice": [{"Name": ..., "District": ..., "State": ...}]}]

A failed lookup carries Status "Error" (or "404") and a null PostOffice.
"""

import re
from typing import Any, List
from pydantic import BaseModel, ConfigDict


PINCODE_LENGTH = 6


class Location(BaseModel):
    """A candidate location for a postal code."""

    model_config = ConfigDict(frozen=True)

    pincode: str
    city: str
    district: str
    state: str


def clean_pincode(value: Any) -> str:
    """Strip every non-digit character.

    Examples:
        >>> clean_pincode("560 001")
        '560001'
    """
    return re.sub(r'\D', '', str(value))


def is_valid_pincode(value: str) -> bool:
    """True if value is exactly six ASCII digits."""
    return bool(re.fullmatch(r'[0-9]{6}', value or ''))


def parse_post_offices(payload: Any, pincode: str) -> List[Location]:
    """Turn an API payload into candidate locations.

    Args:
        payload: Decoded JSON body from the lookup API
        pincode: The code that was looked up

    Returns:
        One Location per post office, or an empty list when the API reports failure
    """
    if not isinstance(payload, list) or not payload:
        return []

    entry = payload[0]
    if not isinstance(entry, dict) or entry.get('Status') != 'Success':
        return []

    offices = entry.get('PostOffice') or []
    return [
        Location(
            pincode=pincode,
            city=office.get('Name', ''),
            district=office.get('District', ''),
            state=office.get('State', ''),
        )
        for office in offices
        if isinstance(office, dict)
    ]
