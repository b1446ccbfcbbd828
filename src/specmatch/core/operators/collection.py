"""Collection membership and shape operators."""

from __future__ import annotations

from typing import Any, Sequence

from ..errors import InvalidOperandError
from ..values import is_collection, type_name, values_equal


def _require_list(operand: Any, operator: str) -> Sequence[Any]:
    if not is_collection(operand):
        raise InvalidOperandError(f"{operator} expects a list operand, got {type_name(operand)}")
    return operand


def _member_of(value: Any, options: Sequence[Any]) -> bool:
    return any(values_equal(value, option) for option in options)


def is_in(value: Any, operand: Any) -> bool:
    return _member_of(value, _require_list(operand, "$in"))


def not_in(value: Any, operand: Any) -> bool:
    return not _member_of(value, _require_list(operand, "$nin"))


def contains_all(value: Any, operand: Any) -> bool:
    """Set containment: duplicates in the operand need only one occurrence in the value."""
    required = _require_list(operand, "$all")
    if not is_collection(value):
        return False
    return all(_member_of(item, value) for item in required)


def size(value: Any, operand: Any) -> bool:
    if not isinstance(operand, int) or isinstance(operand, bool):
        raise InvalidOperandError(f"$size expects an integer operand, got {type_name(operand)}")
    if not is_collection(value):
        return False
    return len(value) == operand
