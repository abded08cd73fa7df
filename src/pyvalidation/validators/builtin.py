"""
General-purpose validators.

Thin predicates over established libraries: email addresses go through
``email-validator`` (syntax only, no DNS), phone numbers through
``phonenumbers``, IP addresses through :mod:`ipaddress` and URLs through
:mod:`urllib.parse`. The comparison and membership helpers are plain Python.

Every predicate returns ``False`` instead of raising on input of the wrong
type.
"""

from __future__ import annotations

import datetime as dt
import ipaddress
import math
from collections.abc import Collection, Iterable, Sized
from typing import Any
from urllib.parse import urlsplit

import phonenumbers
from email_validator import EmailNotValidError, validate_email

from ..cache.manager import get_regex_cache
from ..core.params import convert_params_type
from ..core.types import EmailOptions, HashAlgorithm, Undefined, URLOptions

_MAX_URL_LENGTH = 2083
_DISPLAY_NAME = r"^\s*(?:\"[^\"]*\"|[^<>\"]*?)\s*<([^<>]+)>\s*$"
_HOST_LABEL = r"^[a-z0-9\u00a1-\uffff-]{1,63}$"
_HOST_LABEL_UNDERSCORE = r"^[a-z0-9\u00a1-\uffff_-]{1,63}$"
_TLD = r"^(?:[a-z\u00a1-\uffff]{2,}|xn--[a-z0-9-]{2,})$"


def to_number(value: Any) -> float | int:
    """Numeric value of ``value``; ``nan`` when it is not numeric."""
    number = convert_params_type(value, "number")
    return number if isinstance(number, (int, float)) else math.nan


def is_email(value: Any, options: EmailOptions | None = None) -> bool:
    if not isinstance(value, str):
        return False
    options = options or EmailOptions()
    address = value
    if options.allow_display_name:
        match = get_regex_cache().get(_DISPLAY_NAME).match(value)
        if match is not None:
            address = match.group(1)
    try:
        validate_email(
            address,
            check_deliverability=False,
            allow_smtputf8=options.allow_utf8_local_part,
            globally_deliverable=options.require_tld,
        )
    except EmailNotValidError:
        return False
    return True


def is_phone_number(value: Any, region: str | None = None) -> bool:
    """Check a phone number; without ``region`` it must be in +E.164 form."""
    if not isinstance(value, str):
        return False
    try:
        number = phonenumbers.parse(value, region)
    except phonenumbers.NumberParseException:
        return False
    return phonenumbers.is_valid_number(number)


def is_ip(value: Any, version: int | str | None = None) -> bool:
    if not isinstance(value, str):
        return False
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return False
    if version in (None, "", 0):
        return True
    return str(address.version) == str(version)


def _is_fqdn(host: str, options: URLOptions) -> bool:
    if options.allow_trailing_dot and host.endswith("."):
        host = host[:-1]
    labels = host.split(".")
    regex_cache = get_regex_cache()
    if options.require_tld:
        if len(labels) < 2 or not regex_cache.get(_TLD).match(labels[-1]):
            return False
    label_pattern = regex_cache.get(
        _HOST_LABEL_UNDERSCORE if options.allow_underscores else _HOST_LABEL
    )
    for label in labels:
        if not label_pattern.match(label) or label.startswith("-") or label.endswith("-"):
            return False
    return True


def is_url(value: Any, options: URLOptions | None = None) -> bool:
    if not isinstance(value, str) or not value or len(value) > _MAX_URL_LENGTH:
        return False
    if any(ch.isspace() for ch in value):
        return False
    options = options or URLOptions()

    if "://" in value:
        scheme = value.split("://", 1)[0].lower()
        if scheme not in options.protocols:
            return False
        to_parse = value
    elif options.require_protocol:
        return False
    else:
        to_parse = f"http://{value.removeprefix('//')}"

    try:
        parts = urlsplit(to_parse)
        _ = parts.port
    except ValueError:
        return False

    if not options.allow_query_components and (parts.query or "?" in value):
        return False

    host = parts.hostname
    if not host:
        return False
    if options.host_whitelist and host not in options.host_whitelist:
        return False
    if host in options.host_blacklist:
        return False

    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    return _is_fqdn(host, options)


def is_hash(value: Any, algorithm: HashAlgorithm | str) -> bool:
    if not isinstance(value, str):
        return False
    name = algorithm.value if isinstance(algorithm, HashAlgorithm) else str(algorithm)
    try:
        length = HashAlgorithm(name.lower()).hex_length
    except ValueError:
        return False
    return get_regex_cache().get(rf"^[a-f0-9]{{{length}}}$", "i").fullmatch(value) is not None


def is_date(value: Any) -> bool:
    """Accept ``date``/``datetime`` objects and ISO 8601 strings."""
    if isinstance(value, (dt.date, dt.datetime)):
        return True
    if not isinstance(value, str) or not value:
        return False
    try:
        dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def is_not_empty(value: Any) -> bool:
    """``None``, missing values, blank strings and empty containers are empty."""
    if value is None or isinstance(value, Undefined):
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Sized) and not isinstance(value, (bytes, bytearray)):
        return len(value) > 0
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def equals(value: Any, comparison: Any) -> bool:
    """Strict equality: ``1`` equals ``1.0`` but not ``True`` or ``"1"``."""
    if _is_number(value) and _is_number(comparison):
        return value == comparison
    return type(value) is type(comparison) and value == comparison


def not_equals(value: Any, comparison: Any) -> bool:
    return not equals(value, comparison)


def contains(value: Any, seed: Any) -> bool:
    return isinstance(value, str) and isinstance(seed, str) and seed in value


def is_in(value: Any, possible_values: Iterable[Any]) -> bool:
    if isinstance(possible_values, str):
        return False
    return any(equals(value, candidate) for candidate in possible_values)


def is_not_in(value: Any, possible_values: Iterable[Any]) -> bool:
    if isinstance(possible_values, str):
        return False
    return not is_in(value, possible_values)


def length(value: Any, min_length: int, max_length: int | None = None) -> bool:
    if not isinstance(value, Collection):
        return False
    size = len(value)
    if size < min_length:
        return False
    return max_length is None or size <= max_length


def gt(value: Any, bound: Any) -> bool:
    return to_number(value) > to_number(bound)


def gte(value: Any, bound: Any) -> bool:
    return to_number(value) >= to_number(bound)


def lt(value: Any, bound: Any) -> bool:
    return to_number(value) < to_number(bound)


def lte(value: Any, bound: Any) -> bool:
    return to_number(value) <= to_number(bound)
