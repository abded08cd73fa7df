"""
Validation predicates.

Modules:
    patterns: Locale regular expressions
    locale: Chinese name, ID number, mobile, zip code, plate number
    builtin: Email, phone, IP, URL, hash, comparison and membership checks
    functions: Cached registry of all predicates and ``validator_funcs``
"""

from .builtin import (
    contains,
    equals,
    gt,
    gte,
    is_date,
    is_email,
    is_hash,
    is_in,
    is_ip,
    is_not_empty,
    is_not_in,
    is_phone_number,
    is_url,
    length,
    lt,
    lte,
    not_equals,
    to_number,
)
from .functions import FUNCTION_VALIDATORS, get_validator, validator_funcs
from .locale import cn_name, id_number, mobile, plate_number, zip_code

__all__ = [
    "contains",
    "equals",
    "gt",
    "gte",
    "is_date",
    "is_email",
    "is_hash",
    "is_in",
    "is_ip",
    "is_not_empty",
    "is_not_in",
    "is_phone_number",
    "is_url",
    "length",
    "lt",
    "lte",
    "not_equals",
    "to_number",
    "FUNCTION_VALIDATORS",
    "get_validator",
    "validator_funcs",
    "cn_name",
    "id_number",
    "mobile",
    "plate_number",
    "zip_code",
]
