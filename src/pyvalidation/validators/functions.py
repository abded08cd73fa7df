"""
Function validator registry.

``FUNCTION_VALIDATORS`` maps every :class:`ValidRule` name to a cached
predicate, so repeated checks of the same value are answered from the
validation cache. :func:`validator_funcs` applies one or more of them to a
function parameter and raises :class:`ParamValidationError` on failure.

Example:
    >>> from pyvalidation.validators.functions import FUNCTION_VALIDATORS, validator_funcs
    >>> FUNCTION_VALIDATORS["IsMobile"]("13812345678")
    True
    >>> FUNCTION_VALIDATORS["Gt"](5, 3)
    True
    >>> validator_funcs("phone", "123", str, "IsNotEmpty,IsMobile")
    Traceback (most recent call last):
        ...
    ParamValidationError: ValidatorError: invalid arguments[phone].
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Union

from ..cache.manager import with_cache
from ..core.params import check_params_type
from ..core.types import ValidatorFunction, ValidRule
from ..utils.error_handling import ConfigurationError, ParamValidationError
from . import builtin, locale

_PREDICATES: dict[ValidRule, Callable[..., bool]] = {
    ValidRule.IS_NOT_EMPTY: builtin.is_not_empty,
    ValidRule.IS_DATE: builtin.is_date,
    ValidRule.IS_EMAIL: builtin.is_email,
    ValidRule.IS_IP: builtin.is_ip,
    ValidRule.IS_PHONE_NUMBER: builtin.is_phone_number,
    ValidRule.IS_URL: builtin.is_url,
    ValidRule.IS_HASH: builtin.is_hash,
    ValidRule.IS_CN_NAME: locale.cn_name,
    ValidRule.IS_ID_NUMBER: locale.id_number,
    ValidRule.IS_ZIP_CODE: locale.zip_code,
    ValidRule.IS_MOBILE: locale.mobile,
    ValidRule.IS_PLATE_NUMBER: locale.plate_number,
    ValidRule.EQUALS: builtin.equals,
    ValidRule.NOT_EQUALS: builtin.not_equals,
    ValidRule.CONTAINS: builtin.contains,
    ValidRule.IS_IN: builtin.is_in,
    ValidRule.IS_NOT_IN: builtin.is_not_in,
    ValidRule.MIN: builtin.gte,
    ValidRule.MAX: builtin.lte,
    ValidRule.GT: builtin.gt,
    ValidRule.GTE: builtin.gte,
    ValidRule.LT: builtin.lt,
    ValidRule.LTE: builtin.lte,
    ValidRule.LENGTH: builtin.length,
}

FUNCTION_VALIDATORS: dict[str, ValidatorFunction] = {
    rule.value: with_cache(rule.value, predicate) for rule, predicate in _PREDICATES.items()
}

# A rule is a predicate, a registry name, a comma separated list of names,
# a (name, *args) tuple, or a list mixing these.
RuleLike = Union[ValidatorFunction, str, tuple, Iterable[Any]]


def get_validator(name: str | ValidRule) -> ValidatorFunction:
    """Look up a cached registry validator by name."""
    key = name.value if isinstance(name, ValidRule) else name
    try:
        return FUNCTION_VALIDATORS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown validation rule: {key}",
            context={"rule": key, "available": sorted(FUNCTION_VALIDATORS)},
        ) from None


def _expand_rules(rule: Any) -> list[tuple[ValidatorFunction, tuple[Any, ...]]]:
    if callable(rule) and not isinstance(rule, ValidRule):
        return [(rule, ())]
    if isinstance(rule, (str, ValidRule)):
        names = [n.strip() for n in str(getattr(rule, "value", rule)).split(",") if n.strip()]
        return [(get_validator(n), ()) for n in names]
    if isinstance(rule, tuple) and rule and isinstance(rule[0], (str, ValidRule)):
        return [(get_validator(rule[0]), tuple(rule[1:]))]
    if isinstance(rule, Mapping):
        raise ConfigurationError("Validation rules cannot be mappings", context={"rule": rule})
    expanded: list[tuple[ValidatorFunction, tuple[Any, ...]]] = []
    for item in rule:
        expanded.extend(_expand_rules(item))
    return expanded


def validator_funcs(
    name: str,
    value: Any,
    type_: Any,
    rule: RuleLike,
    message: str | None = None,
    check_type: bool = True,
) -> None:
    """
    Validate one parameter value.

    Args:
        name: Parameter name, used in error messages
        value: Value to check
        type_: Expected type (see :mod:`pyvalidation.core.params`)
        rule: Rule(s) to apply
        message: Message for a failed rule, replacing the default
        check_type: Check ``type_`` before applying the rules

    Raises:
        ParamValidationError: If the type check or any rule fails (status 400)
        ConfigurationError: If a rule name is not in the registry
    """
    if check_type and not check_params_type(value, type_):
        raise ParamValidationError(f"TypeError: invalid arguments '{name}'.", param_name=name)

    for validator, args in _expand_rules(rule):
        if not validator(value, *args):
            raise ParamValidationError(
                message or f"ValidatorError: invalid arguments[{name}].", param_name=name
            )
