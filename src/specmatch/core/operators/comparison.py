"""Comparison and range operators."""

from __future__ import annotations

from typing import Any

from ..errors import TypeMismatchError
from ..values import is_collection, orderable, type_name, values_equal


def _require_orderable(value: Any, operand: Any, operator: str) -> None:
    if not orderable(value, operand):
        raise TypeMismatchError(
            f"{operator} cannot compare {type_name(value)} with {type_name(operand)}"
        )


def eq(value: Any, operand: Any) -> bool:
    return values_equal(value, operand)


def ne(value: Any, operand: Any) -> bool:
    return not values_equal(value, operand)


def gt(value: Any, operand: Any) -> bool:
    _require_orderable(value, operand, "$gt")
    return value > operand


def gte(value: Any, operand: Any) -> bool:
    _require_orderable(value, operand, "$gte")
    return value >= operand


def lt(value: Any, operand: Any) -> bool:
    _require_orderable(value, operand, "$lt")
    return value < operand


def lte(value: Any, operand: Any) -> bool:
    _require_orderable(value, operand, "$lte")
    return value <= operand


def between(value: Any, operand: Any) -> bool:
    """Inclusive ``[low, high]`` range; malformed bounds or mixed types never match."""
    if not is_collection(operand) or len(operand) != 2:
        return False
    low, high = operand
    if not (orderable(value, low) and orderable(value, high)):
        return False
    return low <= value <= high
