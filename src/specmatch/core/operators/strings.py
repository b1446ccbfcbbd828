"""Case-sensitive string operators. Any type mismatch is a plain non-match."""

from __future__ import annotations

from typing import Any

from ..values import is_collection, values_equal


def contains(value: Any, operand: Any) -> bool:
    if is_collection(value):
        return any(values_equal(item, operand) for item in value)
    if isinstance(value, str) and isinstance(operand, str):
        return operand in value
    return False


def starts_with(value: Any, operand: Any) -> bool:
    if isinstance(value, str) and isinstance(operand, str):
        return value.startswith(operand)
    return False


def ends_with(value: Any, operand: Any) -> bool:
    if isinstance(value, str) and isinstance(operand, str):
        return value.endswith(operand)
    return False
