"""
DTO validation.

Modules:
    factory: Constraint and the rule factories
    rules: Built-in rules and markers
    registry: Per-class rule extraction
    validator: plain_to_class, ClassValidator and @validated
"""

from .factory import (
    Constraint,
    create_parameterized_rule,
    create_simple_rule,
    create_validation_rule,
)
from .registry import FieldRules, get_class_rules, is_dto_class
from .rules import (
    Contains,
    Equals,
    Expose,
    Gt,
    Gte,
    IsCnName,
    IsDate,
    IsDefined,
    IsEmail,
    IsHash,
    IsIdNumber,
    IsIn,
    IsIP,
    IsMobile,
    IsNotEmpty,
    IsNotIn,
    IsPhoneNumber,
    IsPlateNumber,
    IsUrl,
    IsZipCode,
    Length,
    Lt,
    Lte,
    Max,
    Min,
    NotEquals,
    Valid,
)
from .validator import ClassValidator, plain_to_class, validated

__all__ = [
    "Constraint",
    "create_parameterized_rule",
    "create_simple_rule",
    "create_validation_rule",
    "FieldRules",
    "get_class_rules",
    "is_dto_class",
    "Contains",
    "Equals",
    "Expose",
    "Gt",
    "Gte",
    "IsCnName",
    "IsDate",
    "IsDefined",
    "IsEmail",
    "IsHash",
    "IsIdNumber",
    "IsIn",
    "IsIP",
    "IsMobile",
    "IsNotEmpty",
    "IsNotIn",
    "IsPhoneNumber",
    "IsPlateNumber",
    "IsUrl",
    "IsZipCode",
    "Length",
    "Lt",
    "Lte",
    "Max",
    "Min",
    "NotEquals",
    "Valid",
    "ClassValidator",
    "plain_to_class",
    "validated",
]
