"""Runtime type helpers shared by operators and the matcher."""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Real
from typing import Any

from .errors import InvalidOperandError


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def is_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_operator_map(condition: Any) -> bool:
    """True for a non-empty mapping whose keys are all ``$``-prefixed."""
    return (
        isinstance(condition, Mapping)
        and bool(condition)
        and all(isinstance(key, str) and key.startswith("$") for key in condition)
    )


def is_mixed_map(condition: Any) -> bool:
    """A mapping that combines operator keys with plain field keys."""
    if not isinstance(condition, Mapping) or is_operator_map(condition):
        return False
    return any(isinstance(key, str) and key.startswith("$") for key in condition)


def type_name(value: Any) -> str:
    """Map a document value onto the ``$type`` vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_collection(value):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def values_equal(left: Any, right: Any) -> bool:
    """Equality where 1 == 1.0 but booleans never equal numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(values_equal(left[k], right[k]) for k in left)
    if is_collection(left) and is_collection(right):
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    return left == right


def orderable(left: Any, right: Any) -> bool:
    """Both numbers or both strings."""
    if is_number(left) and is_number(right):
        return True
    return isinstance(left, str) and isinstance(right, str)


def require_flag(operand: Any) -> bool:
    """Validate a ``$exists`` operand."""
    if not isinstance(operand, bool):
        raise InvalidOperandError(f"$exists expects a boolean operand, got {type_name(operand)}")
    return operand
