"""
Per-class rule extraction.

Reads ``Annotated`` field annotations (including inherited ones) into
:class:`FieldRules` records and keeps them in the manager's metadata cache,
so a class is only inspected once.
"""

from __future__ import annotations

import types
import typing
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..cache.manager import CacheManager, get_cache_manager
from .factory import Constraint
from .rules import DefinedMarker, ExposeMarker

_RULES_KEY = "field_rules"


@dataclass
class FieldRules:
    name: str
    annotation: Any
    constraints: list[Constraint] = field(default_factory=list)
    exposed: bool = False
    required: bool = False
    required_message: str | None = None

    @property
    def has_rules(self) -> bool:
        return bool(self.constraints) or self.required


def split_annotation(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """
    Split a type hint into its base type and its ``Annotated`` metadata.

    ``Optional[Annotated[T, ...]]`` (produced for fields defaulting to
    ``None`` on older interpreters) becomes ``(Optional[T], metadata)``.
    """
    if typing.get_origin(hint) is typing.Annotated:
        return typing.get_args(hint)[0], tuple(hint.__metadata__)
    is_union = typing.get_origin(hint) in (typing.Union, types.UnionType)
    members = typing.get_args(hint) if is_union else ()
    for member in members:
        if typing.get_origin(member) is typing.Annotated:
            base = typing.get_args(member)[0]
            others = tuple(base if m is member else m for m in members)
            return typing.Union[others], tuple(member.__metadata__)
    return hint, ()


def _extract(cls: type) -> dict[str, FieldRules]:
    hints = typing.get_type_hints(cls, include_extras=True)
    rules: dict[str, FieldRules] = {}
    for name, hint in hints.items():
        if name.startswith("_") or typing.get_origin(hint) is ClassVar:
            continue
        base, metadata = split_annotation(hint)
        record = FieldRules(name=name, annotation=base)
        for item in metadata:
            if isinstance(item, Constraint):
                record.constraints.append(item)
            elif isinstance(item, ExposeMarker):
                record.exposed = True
            elif isinstance(item, DefinedMarker):
                record.required = True
                record.required_message = item.message
        rules[name] = record
    return rules


def get_class_rules(cls: type, manager: CacheManager | None = None) -> dict[str, FieldRules]:
    """Get the field rules of ``cls``, extracting them on first use."""
    metadata = (manager or get_cache_manager()).metadata_cache
    rules = metadata.get_metadata(cls, _RULES_KEY)
    if rules is None:
        rules = _extract(cls)
        metadata.set_metadata(cls, _RULES_KEY, rules)
    return rules


def is_dto_class(cls: Any, manager: CacheManager | None = None) -> bool:
    """Whether ``cls`` is a user class with at least one constrained field."""
    if not isinstance(cls, type) or cls.__module__ == "builtins":
        return False
    return any(r.has_rules or r.exposed for r in get_class_rules(cls, manager).values())
