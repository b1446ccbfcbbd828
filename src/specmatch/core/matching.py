"""Recursive matching of operator maps against a single value."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .errors import InvalidOperandError, UnknownOperatorError
from .paths import Found, resolve
from .values import is_mixed_map, is_operator_map, require_flag, values_equal

if TYPE_CHECKING:
    from .operators.registry import OperatorRegistry

EXISTS = "$exists"


def is_presence_only(condition: Any) -> bool:
    """True when a field condition only asks whether the field exists.

    Such a condition is decided on an absent path instead of recording the
    path as missing: ``$exists: false`` matches and ``$exists: true`` does not.
    Every other condition on an absent path makes the predicate undetermined.
    """
    return is_operator_map(condition) and set(condition) == {EXISTS}


def check_condition_shape(condition: Any) -> None:
    """Reject mappings that mix operator keys with plain keys."""
    if is_mixed_map(condition):
        keys = ", ".join(sorted(str(key) for key in condition))
        raise InvalidOperandError(f"Condition mixes operators and fields: {keys}")


class ValueMatcher:
    """Evaluate conditions against the current value.

    The same entry point serves top-level fields, ``$and/$or/$not``
    branches and ``$elemMatch`` elements. Undecidable clauses raise an
    ``EvaluationError`` subclass instead of returning a boolean.
    """

    def __init__(self, registry: "OperatorRegistry") -> None:
        self._registry = registry

    def match(self, value: Any, condition: Any) -> bool:
        check_condition_shape(condition)
        if not is_operator_map(condition):
            return values_equal(value, condition)
        # No short-circuit: an unknown operator after a false clause must still surface.
        outcomes = [self.apply(name, value, operand) for name, operand in condition.items()]
        return all(outcomes)

    def apply(self, name: str, value: Any, operand: Any) -> bool:
        handler = self._registry.lookup(name)
        if handler is None:
            raise UnknownOperatorError(name)
        return bool(handler(value, operand))

    def match_absent(self, condition: Mapping[str, Any]) -> bool:
        """Evaluate a presence-only condition for a path that did not resolve."""
        return not require_flag(condition[EXISTS])

    def match_document(self, document: Any, query: Mapping[str, Any]) -> bool:
        """Match a sub-document (an ``$elemMatch`` element); unresolved paths do not match."""
        if not isinstance(document, Mapping):
            return False
        outcomes = []
        for path, condition in query.items():
            resolution = resolve(document, path)
            if isinstance(resolution, Found):
                outcomes.append(self.match(resolution.value, condition))
            elif is_presence_only(condition):
                outcomes.append(self.match_absent(condition))
            else:
                outcomes.append(False)
        return all(outcomes)
