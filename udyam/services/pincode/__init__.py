"""Postal-code (PIN) lookup service module."""

from .lookup import Location, parse_post_offices, is_valid_pincode, clean_pincode

__all__ = [
    'Location',
    'parse_post_offices',
    'is_valid_pincode',
    'clean_pincode',
]
