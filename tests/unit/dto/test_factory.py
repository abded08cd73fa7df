"""Tests for pyvalidation.dto.factory module."""

from __future__ import annotations

import pytest

from pyvalidation.cache.manager import get_validation_cache
from pyvalidation.dto.factory import (
    Constraint,
    create_parameterized_rule,
    create_simple_rule,
    create_validation_rule,
)
from pyvalidation.dto.rules import Gt, Length

IsEven = create_simple_rule("IsEven", lambda value: value % 2 == 0, "$property must be even")
DivisibleBy = create_parameterized_rule(
    "DivisibleBy",
    lambda value, n: value % n == 0,
    "$property must be divisible by $constraint1, got $value",
)


class TestConstraint:
    """Tests for Constraint."""

    def test_check(self):
        assert IsEven().check(4) is True
        assert IsEven().check(3) is False

    def test_raising_predicate_fails(self):
        assert IsEven().check("text") is False

    def test_args(self):
        constraint = DivisibleBy(3)
        assert constraint.args == (3,)
        assert constraint.check(9)
        assert not constraint.check(10)

    def test_context(self):
        assert Length(2, 10).context() == {"min": 2, "max": 10}
        assert Gt(1).context() == {"min": 1}

    def test_instances_are_not_merged(self):
        assert Gt(1) != Gt(1)


class TestMessages:
    def test_default_template(self):
        assert IsEven().render_message("count", 3) == "count must be even"
        assert (
            DivisibleBy(3).render_message("count", 10)
            == "count must be divisible by 3, got 10"
        )

    def test_custom_message_wins(self):
        assert IsEven(message="$property: $value is odd").render_message("n", 3) == "n: 3 is odd"

    def test_string_values_are_quoted(self):
        assert IsEven(message="got $value").render_message("n", "x") == 'got "x"'

    def test_high_placeholders_first(self):
        Many = create_validation_rule("Many", lambda value, *args: False)
        constraint = Many(*range(1, 11), message="$constraint10-$constraint1")
        assert constraint.render_message("x") == "10-1"

    def test_localized_fallback(self):
        assert Gt(18).render_message("age", 3) == "age 必须大于 18"

    def test_localized_fallback_english(self, english_messages):
        assert Gt(18).render_message("age", 3) == "age must be greater than 18"
        assert Length(2, 4).render_message("name") == "name length must be between 2 and 4"

    def test_generic_fallback(self):
        Unknown = create_simple_rule("IsBanana", lambda value: False)
        assert Unknown().render_message("fruit") == "Invalid value for fruit"


class TestFactories:
    def test_factory_metadata(self):
        assert IsEven.__name__ == "IsEven"
        assert IsEven.rule_name == "IsEven"
        assert isinstance(IsEven(), Constraint)

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            create_validation_rule("", lambda value: True)

    def test_parameterized_rule_requires_value(self):
        with pytest.raises(TypeError):
            DivisibleBy()

    def test_simple_rule_is_uncached_by_default(self):
        IsEven().check(4)
        assert len(get_validation_cache()) == 0

    def test_cached_rule(self):
        IsOdd = create_simple_rule("IsOdd", lambda value: value % 2 == 1, cache=True)
        assert IsOdd().check(3)
        assert IsOdd().check(3)
        stats = get_validation_cache().get_stats()
        assert stats.hits == 1
        assert stats.misses == 1
