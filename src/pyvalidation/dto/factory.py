"""
Rule factory for DTO field constraints.

A rule is attached to a field through ``typing.Annotated``::

    class UserDTO:
        phone: Annotated[str, IsMobile()]
        age: Annotated[int, Gte(18, message="adults only")]

Each call such as ``IsMobile()`` or ``Gte(18)`` returns a :class:`Constraint`
holding the predicate, its arguments and the message settings. The factory
functions here build those callables so new rules need one line::

    IsEven = create_simple_rule("IsEven", lambda v: v % 2 == 0, "$property must be even")
    DivisibleBy = create_parameterized_rule(
        "DivisibleBy", lambda v, n: v % n == 0, "$property must be divisible by $constraint1"
    )

Message resolution, first match wins:
    1. ``message=`` given when the rule is used
    2. the rule's default message template
    3. the localized message for the rule name (see :mod:`pyvalidation.utils.i18n`)
    4. ``"Invalid value for <field>"``

Templates may use ``$property``, ``$value`` and ``$constraint1`` ... ``$constraintN``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..cache.manager import with_cache
from ..utils.i18n import format_value, get_error_formatter
from ..utils.logging_config import get_logger


@dataclass(frozen=True, eq=False)
class Constraint:
    """One validation rule bound to its arguments."""

    name: str
    validator: Callable[..., Any]
    args: tuple[Any, ...] = ()
    message: str | None = None
    default_message: str | None = None
    # names of the i18n placeholders filled from ``args``, in order
    context_keys: tuple[str, ...] = ()

    def check(self, value: Any) -> bool:
        """Run the predicate. A predicate that raises counts as a failure."""
        try:
            return bool(self.validator(value, *self.args))
        except Exception as exc:
            get_logger().debug(
                f"Validator {self.name} raised {type(exc).__name__}: {exc}",
                operation="validator_error",
                validator=self.name,
            )
            return False

    def context(self) -> dict[str, Any]:
        return dict(zip(self.context_keys, self.args))

    def render_message(self, field: str, value: Any = None) -> str:
        template = self.message or self.default_message
        if template:
            rendered = template.replace("$property", field).replace("$value", format_value(value))
            # highest index first so $constraint1 does not eat $constraint10
            for index in range(len(self.args), 0, -1):
                rendered = rendered.replace(f"$constraint{index}", str(self.args[index - 1]))
            return rendered

        formatter = get_error_formatter()
        if formatter.has_message(self.name):
            return formatter.format_message(self.name, field, value, self.context())
        return f"Invalid value for {field}"


RuleFactory = Callable[..., Constraint]


def create_validation_rule(
    name: str,
    validator: Callable[..., Any],
    default_message: str | None = None,
    requires_value: bool = False,
    context_keys: tuple[str, ...] = (),
    cache: bool = False,
) -> RuleFactory:
    """
    Build a rule factory.

    Args:
        name: Rule name, used for messages and as the cache key prefix
        validator: ``(value, *args) -> bool``
        default_message: Message template (see module docs)
        requires_value: Whether the rule needs at least one argument
        context_keys: Names of the message placeholders filled from the arguments
        cache: Route the validator through the validation result cache
    """
    if not name:
        raise ValueError("Rule name must be a non-empty string")
    checked = with_cache(name, validator) if cache else validator

    def factory(*args: Any, message: str | None = None) -> Constraint:
        if requires_value and not args:
            raise TypeError(f"{name}() requires a constraint value")
        return Constraint(
            name=name,
            validator=checked,
            args=args,
            message=message,
            default_message=default_message,
            context_keys=context_keys,
        )

    factory.__name__ = name
    factory.__qualname__ = name
    factory.__doc__ = f"Create a {name} constraint."
    factory.rule_name = name  # type: ignore[attr-defined]
    return factory


def create_simple_rule(
    name: str,
    validator: Callable[[Any], Any],
    default_message: str | None = None,
    cache: bool = False,
) -> RuleFactory:
    """Rule whose validator only takes the value."""
    return create_validation_rule(name, validator, default_message, cache=cache)


def create_parameterized_rule(
    name: str,
    validator: Callable[..., Any],
    default_message: str | None = None,
    context_keys: tuple[str, ...] = (),
    cache: bool = False,
) -> RuleFactory:
    """Rule that needs at least one argument besides the value."""
    return create_validation_rule(
        name,
        validator,
        default_message,
        requires_value=True,
        context_keys=context_keys,
        cache=cache,
    )
