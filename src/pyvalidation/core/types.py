"""
Core types for pyvalidation.

Classes:
    Undefined: Type of the ``UNDEFINED`` sentinel (a field that was never set)
    ValidRule: Names of the function validators in the registry
    HashAlgorithm: Hash algorithms understood by ``is_hash``
    EmailOptions: Options for email validation
    URLOptions: Options for URL validation

Type Aliases:
    ValidatorFunction: ``(value, *args) -> bool``
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Undefined:
    """
    Marker for a value that is missing, as opposed to explicitly ``None``.

    There is exactly one instance, :data:`UNDEFINED`; it is falsy.
    """

    _instance: Undefined | None = None

    def __new__(cls) -> Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = Undefined()

ValidatorFunction = Callable[..., bool]


class ValidRule(str, Enum):
    """Names of the function validators available to ``validator_funcs``."""

    IS_NOT_EMPTY = "IsNotEmpty"
    IS_DATE = "IsDate"
    IS_EMAIL = "IsEmail"
    IS_IP = "IsIP"
    IS_PHONE_NUMBER = "IsPhoneNumber"
    IS_URL = "IsUrl"
    IS_HASH = "IsHash"
    IS_CN_NAME = "IsCnName"
    IS_ID_NUMBER = "IsIdNumber"
    IS_ZIP_CODE = "IsZipCode"
    IS_MOBILE = "IsMobile"
    IS_PLATE_NUMBER = "IsPlateNumber"
    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    CONTAINS = "Contains"
    IS_IN = "IsIn"
    IS_NOT_IN = "IsNotIn"
    MIN = "Min"
    MAX = "Max"
    GT = "Gt"
    GTE = "Gte"
    LT = "Lt"
    LTE = "Lte"
    LENGTH = "Length"


class HashAlgorithm(str, Enum):
    """Hash algorithms and their hex digest lengths."""

    MD4 = "md4"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    RIPEMD128 = "ripemd128"
    RIPEMD160 = "ripemd160"
    TIGER128 = "tiger128"
    TIGER160 = "tiger160"
    TIGER192 = "tiger192"
    CRC32 = "crc32"
    CRC32B = "crc32b"

    @property
    def hex_length(self) -> int:
        return _HASH_LENGTHS[self]


_HASH_LENGTHS: dict[HashAlgorithm, int] = {
    HashAlgorithm.MD4: 32,
    HashAlgorithm.MD5: 32,
    HashAlgorithm.SHA1: 40,
    HashAlgorithm.SHA256: 64,
    HashAlgorithm.SHA384: 96,
    HashAlgorithm.SHA512: 128,
    HashAlgorithm.RIPEMD128: 32,
    HashAlgorithm.RIPEMD160: 40,
    HashAlgorithm.TIGER128: 32,
    HashAlgorithm.TIGER160: 40,
    HashAlgorithm.TIGER192: 48,
    HashAlgorithm.CRC32: 8,
    HashAlgorithm.CRC32B: 8,
}


@dataclass(frozen=True, slots=True)
class EmailOptions:
    allow_display_name: bool = False
    allow_utf8_local_part: bool = True
    require_tld: bool = True


@dataclass(frozen=True, slots=True)
class URLOptions:
    protocols: tuple[str, ...] = ("http", "https", "ftp")
    require_protocol: bool = False
    require_tld: bool = True
    allow_underscores: bool = False
    allow_trailing_dot: bool = False
    allow_query_components: bool = True
    host_whitelist: tuple[str, ...] = field(default_factory=tuple)
    host_blacklist: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "protocols": list(self.protocols),
            "require_protocol": self.require_protocol,
            "require_tld": self.require_tld,
            "allow_underscores": self.allow_underscores,
            "allow_trailing_dot": self.allow_trailing_dot,
            "allow_query_components": self.allow_query_components,
            "host_whitelist": list(self.host_whitelist),
            "host_blacklist": list(self.host_blacklist),
        }
