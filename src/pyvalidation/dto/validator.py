"""
DTO conversion and validation.

Classes:
    ClassValidator: Validate DTO instances or raw mappings

Functions:
    plain_to_class: Build a DTO instance from a mapping
    validated: Decorator validating DTO-typed and ``Valid``-annotated parameters

Example:
    >>> from typing import Annotated
    >>> from pyvalidation.dto import ClassValidator, IsMobile, IsNotEmpty
    >>>
    >>> class UserDTO:
    ...     name: Annotated[str, IsNotEmpty()]
    ...     phone: Annotated[str, IsMobile()]
    >>>
    >>> user = ClassValidator.valid(UserDTO, {"name": "li", "phone": "13812345678"})
    >>> user.phone
    '13812345678'
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import typing
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from ..cache.manager import CacheManager
from ..core.params import convert_params_type
from ..core.types import UNDEFINED, Undefined
from ..utils.error_handling import (
    ParamValidationError,
    ValidationErrorDetail,
    ValidationFailedError,
)
from ..utils.i18n import get_error_formatter
from ..validators.functions import validator_funcs
from .registry import get_class_rules, is_dto_class, split_annotation
from .rules import ValidMarker

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


def _dataclass_defaults(cls: type) -> dict[str, Callable[[], Any]]:
    if not dataclasses.is_dataclass(cls):
        return {}
    return {
        f.name: f.default_factory
        for f in dataclasses.fields(cls)
        if f.default_factory is not dataclasses.MISSING
    }


def plain_to_class(
    cls: type[T],
    data: Any,
    convert: bool = False,
    manager: CacheManager | None = None,
) -> T:
    """
    Build an instance of ``cls`` from ``data`` without calling ``__init__``.

    Declared fields present in ``data`` are copied (and converted to their
    annotated type when ``convert`` is set). Missing fields keep their class
    default, if any. Instances of ``cls`` are returned unchanged.

    Raises:
        ParamValidationError: If ``data`` is neither a mapping nor an instance of ``cls``
    """
    if isinstance(data, cls):
        return data
    if not isinstance(data, Mapping):
        raise ParamValidationError(
            f"TypeError: invalid arguments '{cls.__name__}'.", param_name=cls.__name__
        )

    instance = cls.__new__(cls)
    factories = _dataclass_defaults(cls)
    for name, rules in get_class_rules(cls, manager).items():
        if name in data:
            value = data[name]
            if convert:
                value = convert_params_type(value, rules.annotation)
            object.__setattr__(instance, name, value)
        elif name in factories:
            object.__setattr__(instance, name, factories[name]())
    return instance


class ClassValidator:
    """Validates DTO instances against their annotated field rules."""

    @staticmethod
    def validate(
        obj: Any,
        skip_missing: bool = False,
        manager: CacheManager | None = None,
    ) -> list[ValidationErrorDetail]:
        """
        Check every field of ``obj``.

        ``None`` and missing fields are skipped when ``skip_missing`` is set,
        except for fields marked ``IsDefined()``. Each failing field yields one
        detail listing every failed constraint.
        """
        errors: list[ValidationErrorDetail] = []
        for name, rules in get_class_rules(type(obj), manager).items():
            value = getattr(obj, name, UNDEFINED)
            missing = value is None or isinstance(value, Undefined)
            reported = None if isinstance(value, Undefined) else value

            if rules.required and missing:
                message = rules.required_message or get_error_formatter().format_message(
                    "IsDefined", name
                )
                errors.append(
                    ValidationErrorDetail(
                        field=name,
                        value=reported,
                        constraints={"IsDefined": message},
                        message=message,
                    )
                )
                continue
            if missing and skip_missing:
                continue

            failed = {
                constraint.name: constraint.render_message(name, reported)
                for constraint in rules.constraints
                if not constraint.check(value)
            }
            if failed:
                errors.append(
                    ValidationErrorDetail(
                        field=name,
                        value=reported,
                        constraints=failed,
                        message=next(iter(failed.values())),
                    )
                )
        return errors

    @classmethod
    def collect(
        cls,
        dto_cls: type[T],
        data: Any,
        convert: bool = False,
        manager: CacheManager | None = None,
    ) -> tuple[T, list[ValidationErrorDetail]]:
        """Convert ``data`` and return the instance with its failures."""
        obj = plain_to_class(dto_cls, data, convert=convert, manager=manager)
        return obj, cls.validate(obj, skip_missing=not convert, manager=manager)

    @classmethod
    def valid(
        cls,
        dto_cls: type[T],
        data: Any,
        convert: bool = False,
        manager: CacheManager | None = None,
    ) -> T:
        """
        Convert and validate ``data``, returning the DTO instance.

        Without ``convert`` missing values are skipped (partial updates);
        with it every field is checked.

        Raises:
            ValidationFailedError: With every failure; the message is the first one
        """
        obj, errors = cls.collect(dto_cls, data, convert=convert, manager=manager)
        if errors:
            raise ValidationFailedError(errors)
        return obj


def _build_plan(func: Callable[..., Any]) -> list[tuple[str, Any, list[ValidMarker], bool]]:
    hints = typing.get_type_hints(func, include_extras=True)
    plan = []
    for name in inspect.signature(func).parameters:
        if name not in hints:
            continue
        base, metadata = split_annotation(hints[name])
        markers = [m for m in metadata if isinstance(m, ValidMarker)]
        is_dto = is_dto_class(base)
        if markers or is_dto:
            plan.append((name, base, markers, is_dto))
    return plan


def validated(func: F | None = None, *, convert: bool = True) -> Any:
    """
    Validate a function's arguments before calling it.

    Parameters annotated with a DTO class are converted from mappings and
    validated; all of their failures are raised together as a
    :class:`ValidationFailedError`. Parameters annotated with
    ``Annotated[T, Valid(rule)]`` go through :func:`validator_funcs` and raise
    :class:`ParamValidationError`. Works for plain and ``async`` functions.
    """

    def decorator(fn: F) -> F:
        signature = inspect.signature(fn)
        plan: list[tuple[str, Any, list[ValidMarker], bool]] | None = None

        def check(args: tuple[Any, ...], kwargs: dict[str, Any]) -> inspect.BoundArguments:
            nonlocal plan
            if plan is None:
                # resolved lazily so DTOs defined after the function still work
                plan = _build_plan(fn)
            bound = signature.bind(*args, **kwargs)
            errors: list[ValidationErrorDetail] = []
            for name, base, markers, is_dto in plan:
                if name not in bound.arguments:
                    continue
                value = bound.arguments[name]
                if is_dto:
                    obj, failures = ClassValidator.collect(base, value, convert=convert)
                    errors.extend(failures)
                    bound.arguments[name] = obj
                for marker in markers:
                    validator_funcs(name, value, base, marker.rule, marker.message)
            if errors:
                raise ValidationFailedError(errors)
            return bound

        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                bound = check(args, kwargs)
                return await fn(*bound.args, **bound.kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = check(args, kwargs)
            return fn(*bound.args, **bound.kwargs)

        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorator(func)
    return decorator
