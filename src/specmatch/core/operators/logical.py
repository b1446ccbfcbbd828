"""Logical composition and element matching over a single resolved value."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..errors import InvalidOperandError
from ..values import is_collection, is_mixed_map, is_operator_map, type_name

if TYPE_CHECKING:
    from ..matching import ValueMatcher


class LogicalOperators:
    """``$and``, ``$or``, ``$not`` and ``$elemMatch`` bound to a matcher.

    Every branch is evaluated before combining so that an undetermined
    branch is never hidden by a sibling's result.
    """

    def __init__(self, matcher: "ValueMatcher") -> None:
        self._matcher = matcher

    def all_of(self, value: Any, operand: Any) -> bool:
        if not is_collection(operand):
            return False
        outcomes = [self._matcher.match(value, condition) for condition in operand]
        return all(outcomes)

    def any_of(self, value: Any, operand: Any) -> bool:
        if not is_collection(operand):
            return False
        outcomes = [self._matcher.match(value, condition) for condition in operand]
        return any(outcomes)

    def negate(self, value: Any, operand: Any) -> bool:
        if not isinstance(operand, Mapping) or not operand:
            return False
        return not self._matcher.match(value, operand)

    def elem_match(self, value: Any, operand: Any) -> bool:
        if not isinstance(operand, Mapping) or not operand:
            raise InvalidOperandError(
                f"$elemMatch expects a query object, got {type_name(operand)}"
            )
        if is_mixed_map(operand):
            raise InvalidOperandError("$elemMatch query mixes operators and fields")
        if not is_collection(value):
            return False
        if is_operator_map(operand):
            outcomes = [self._matcher.match(element, operand) for element in value]
        else:
            outcomes = [self._matcher.match_document(element, operand) for element in value]
        return any(outcomes)
