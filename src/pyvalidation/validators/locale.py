"""
Locale validators for mainland China formats.

All functions are pure predicates that return ``False`` for anything that
is not a string. Patterns are compiled through the default regex cache.

Functions:
    cn_name: Chinese personal name (letters, digits, CJK, middle dot; 1-10 chars)
    id_number: Resident identity card number (15 digits, or 18 with checksum)
    mobile: Mobile phone number (11 digits, 13x-19x)
    zip_code: Postal code (6 digits)
    plate_number: Vehicle plate, conventional (7) or new-energy (8)
"""

from __future__ import annotations

from typing import Any

from ..cache.manager import get_regex_cache
from . import patterns

_ID_WEIGHTS = (7, 9, 10, 5, 8, 4, 2, 1, 6, 3, 7, 9, 10, 5, 8, 4, 2)
_ID_CHECK_CHARS = "10x98765432"


def _matches(pattern: str, value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return get_regex_cache().get(pattern).fullmatch(value) is not None


def cn_name(value: Any) -> bool:
    return _matches(patterns.CN_NAME, value)


def id_number(value: Any) -> bool:
    """
    Validate a resident identity card number.

    15-digit (first generation) numbers are accepted on format alone; 18-digit
    numbers must also carry the right GB 11643 check character (``X`` in any
    case).
    """
    if not isinstance(value, str):
        return False
    if _matches(patterns.ID_NUMBER_15, value):
        return True
    if not _matches(patterns.ID_NUMBER_18, value):
        return False
    total = sum(int(digit) * weight for digit, weight in zip(value[:17], _ID_WEIGHTS))
    return _ID_CHECK_CHARS[total % 11] == value[17].lower()


def mobile(value: Any) -> bool:
    return _matches(patterns.MOBILE, value)


def zip_code(value: Any) -> bool:
    return _matches(patterns.ZIP_CODE, value)


def plate_number(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    if len(value) == 7:
        return _matches(patterns.PLATE_NUMBER, value)
    if len(value) == 8:
        return _matches(patterns.PLATE_NUMBER_NEW_ENERGY, value)
    return False
