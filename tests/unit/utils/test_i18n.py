"""Tests for pyvalidation.utils.i18n module."""

from __future__ import annotations

import pytest

from pyvalidation.utils.error_handling import ValidationFailedError
from pyvalidation.utils.i18n import (
    ERROR_MESSAGES,
    ErrorMessageFormatter,
    create_validation_error,
    create_validation_errors,
    format_value,
    get_error_formatter,
    set_validation_language,
)


class TestFormatValue:
    def test_scalars(self):
        assert format_value(None) == "null"
        assert format_value(True) == "true"
        assert format_value(3) == "3"
        assert format_value("a") == '"a"'

    def test_list(self):
        assert format_value([1, "a"]) == '[1, "a"]'

    def test_mapping(self):
        assert format_value({"a": 1}) == '{"a":1}'

    def test_circular(self):
        cyclic: dict = {}
        cyclic["self"] = cyclic
        assert format_value(cyclic) == "[Circular Reference]"


class TestErrorMessageFormatter:
    """Tests for ErrorMessageFormatter class."""

    def test_languages_have_the_same_keys(self):
        assert set(ERROR_MESSAGES["zh"]) == set(ERROR_MESSAGES["en"])

    def test_default_language_is_chinese(self):
        formatter = ErrorMessageFormatter()
        assert formatter.language == "zh"
        assert formatter.format_message("IsMobile", "phone") == "phone 必须是有效的手机号码"

    def test_english(self):
        formatter = ErrorMessageFormatter("en")
        assert formatter.format_message("IsMobile", "phone") == "phone must be a valid mobile number"

    def test_context_placeholders(self):
        formatter = ErrorMessageFormatter("en")
        assert formatter.format_message("Gt", "age", 3, {"min": 18}) == "age must be greater than 18"
        assert (
            formatter.format_message("Length", "name", "x", {"min": 2, "max": 10})
            == "name length must be between 2 and 10"
        )

    def test_list_context_is_joined(self):
        formatter = ErrorMessageFormatter("en")
        message = formatter.format_message("IsIn", "role", "x", {"possibleValues": ["a", "b"]})
        assert message == "role must be one of the following values: a, b"

    def test_unknown_constraint_falls_back(self):
        formatter = ErrorMessageFormatter("en")
        assert formatter.format_message("IsBanana", "fruit") == "invalid parameter fruit"
        assert not formatter.has_message("IsBanana")

    def test_unsupported_language(self):
        formatter = ErrorMessageFormatter()
        with pytest.raises(ValueError):
            formatter.set_language("fr")
        assert formatter.language == "zh"


class TestModuleFunctions:
    def test_set_validation_language(self):
        set_validation_language("en")
        assert get_error_formatter().language == "en"

    def test_create_validation_error(self, english_messages):
        detail = create_validation_error("age", 3, "Gte", context={"min": 18})
        assert detail.field == "age"
        assert detail.value == 3
        assert detail.constraints == {"Gte": "age must be greater than or equal to 18"}
        assert detail.message == "age must be greater than or equal to 18"

    def test_custom_message_wins(self):
        detail = create_validation_error("age", 3, "Gte", custom_message="too young")
        assert detail.message == "too young"

    def test_create_validation_errors(self, english_messages):
        exc = create_validation_errors(
            [
                {"field": "phone", "value": "1", "constraint": "IsMobile"},
                {"field": "age", "value": 3, "constraint": "Gt", "context": {"min": 18}},
            ]
        )
        assert isinstance(exc, ValidationFailedError)
        assert [e.field for e in exc.errors] == ["phone", "age"]
        assert exc.message == "phone must be a valid mobile number"
