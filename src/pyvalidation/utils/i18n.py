"""
Localized validation error messages.

Message templates exist in Chinese (``zh``, the default) and English
(``en``). Templates use ``{field}``, ``{value}`` and constraint-specific
placeholders such as ``{min}`` or ``{possibleValues}``.

Classes:
    ErrorMessageFormatter: Renders templates for a chosen language

Functions:
    set_validation_language: Switch the default formatter's language
    create_validation_error: Build a ValidationErrorDetail
    create_validation_errors: Build a ValidationFailedError from several failures

Example:
    >>> formatter = ErrorMessageFormatter("en")
    >>> formatter.format_message("Gt", "age", 3, {"min": 18})
    'age must be greater than 18'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import orjson

from .error_handling import ValidationErrorDetail, ValidationFailedError

SUPPORTED_LANGUAGES = ("zh", "en")

ERROR_MESSAGES: dict[str, dict[str, str]] = {
    "zh": {
        "IsCnName": "必须是有效的中文姓名",
        "IsIdNumber": "必须是有效的身份证号码",
        "IsZipCode": "必须是有效的邮政编码",
        "IsMobile": "必须是有效的手机号码",
        "IsPlateNumber": "必须是有效的车牌号码",
        "IsNotEmpty": "不能为空",
        "IsDate": "必须是有效的日期",
        "IsEmail": "必须是有效的邮箱地址",
        "IsIP": "必须是有效的IP地址",
        "IsPhoneNumber": "必须是有效的电话号码",
        "IsUrl": "必须是有效的URL地址",
        "IsHash": "必须是有效的哈希值",
        "IsDefined": "必须定义",
        "Equals": "必须等于 {comparison}",
        "NotEquals": "不能等于 {comparison}",
        "Contains": "必须包含 {seed}",
        "IsIn": "必须是以下值之一: {possibleValues}",
        "IsNotIn": "不能是以下值之一: {possibleValues}",
        "Gt": "必须大于 {min}",
        "Gte": "必须大于或等于 {min}",
        "Lt": "必须小于 {max}",
        "Lte": "必须小于或等于 {max}",
        "Min": "不能小于 {min}",
        "Max": "不能大于 {max}",
        "Length": "长度必须在 {min} 到 {max} 之间",
        "invalidParameter": "参数 {field} 无效",
        "validationFailed": "验证失败",
    },
    "en": {
        "IsCnName": "must be a valid Chinese name",
        "IsIdNumber": "must be a valid ID number",
        "IsZipCode": "must be a valid zip code",
        "IsMobile": "must be a valid mobile number",
        "IsPlateNumber": "must be a valid plate number",
        "IsNotEmpty": "should not be empty",
        "IsDate": "must be a valid date",
        "IsEmail": "must be a valid email",
        "IsIP": "must be a valid IP address",
        "IsPhoneNumber": "must be a valid phone number",
        "IsUrl": "must be a valid URL",
        "IsHash": "must be a valid hash",
        "IsDefined": "should be defined",
        "Equals": "must equal to {comparison}",
        "NotEquals": "should not equal to {comparison}",
        "Contains": "must contain {seed}",
        "IsIn": "must be one of the following values: {possibleValues}",
        "IsNotIn": "should not be one of the following values: {possibleValues}",
        "Gt": "must be greater than {min}",
        "Gte": "must be greater than or equal to {min}",
        "Lt": "must be less than {max}",
        "Lte": "must be less than or equal to {max}",
        "Min": "must not be less than {min}",
        "Max": "must not be greater than {max}",
        "Length": "length must be between {min} and {max}",
        "invalidParameter": "invalid parameter {field}",
        "validationFailed": "validation failed",
    },
}


def format_value(value: Any) -> str:
    """Render a value for inclusion in a message."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, (list, tuple)):
        return f"[{', '.join(format_value(v) for v in value)}]"
    try:
        return orjson.dumps(value, option=orjson.OPT_NON_STR_KEYS).decode()
    except (orjson.JSONEncodeError, RecursionError):
        return "[Circular Reference]"


class ErrorMessageFormatter:
    """Formats constraint messages in one language."""

    def __init__(self, language: str = "zh") -> None:
        self.language = "zh"
        self.set_language(language)

    def set_language(self, language: str) -> None:
        if language not in ERROR_MESSAGES:
            raise ValueError(
                f"Unsupported language: {language} (expected one of {', '.join(SUPPORTED_LANGUAGES)})"
            )
        self.language = language

    def has_message(self, constraint: str) -> bool:
        return constraint in ERROR_MESSAGES[self.language]

    def format_message(
        self,
        constraint: str,
        field: str,
        value: Any = None,
        context: Mapping[str, Any] | None = None,
    ) -> str:
        """
        Render the message for ``constraint`` on ``field``.

        Unknown constraints fall back to the generic "invalid parameter"
        message. Context values replace their ``{key}`` placeholders; lists
        are joined with ", ".
        """
        messages = ERROR_MESSAGES[self.language]
        template = messages.get(constraint) or messages["invalidParameter"]

        message = template.replace("{field}", field)
        for key, replacement in (context or {}).items():
            if isinstance(replacement, (list, tuple, set, frozenset)):
                rendered = ", ".join(str(item) for item in replacement)
            else:
                rendered = str(replacement)
            message = message.replace(f"{{{key}}}", rendered)
        if "{value}" in message:
            message = message.replace("{value}", format_value(value))

        if "{field}" not in template and field:
            message = f"{field} {message}"
        return message


_default_formatter = ErrorMessageFormatter()


def get_error_formatter() -> ErrorMessageFormatter:
    return _default_formatter


def set_validation_language(language: str) -> None:
    """Set the language used for messages that are not customized."""
    _default_formatter.set_language(language)


def create_validation_error(
    field: str,
    value: Any,
    constraint: str,
    custom_message: str | None = None,
    context: Mapping[str, Any] | None = None,
) -> ValidationErrorDetail:
    message = custom_message or _default_formatter.format_message(constraint, field, value, context)
    return ValidationErrorDetail(
        field=field, value=value, constraints={constraint: message}, message=message
    )


def create_validation_errors(
    errors: Iterable[Mapping[str, Any]],
) -> ValidationFailedError:
    """
    Build a :class:`ValidationFailedError` from failure descriptions.

    Each item needs ``field``, ``value`` and ``constraint`` and may carry
    ``message`` and ``context``.
    """
    details = [
        create_validation_error(
            item["field"],
            item.get("value"),
            item["constraint"],
            item.get("message"),
            item.get("context"),
        )
        for item in errors
    ]
    return ValidationFailedError(details)
