"""Operator table: built-in operator kinds plus an extension point."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import pendulum

from ..errors import RegistryFrozenError
from ..matching import ValueMatcher
from . import collection, comparison, existence, strings
from .dates import DateComparator
from .logical import LogicalOperators
from .pattern import PatternCache, RegexOperator

OperatorHandler = Callable[[Any, Any], bool]


class OperatorFamily(str, Enum):
    COMPARISON = "comparison"
    COLLECTION = "collection"
    EXISTENCE = "existence"
    PATTERN = "pattern"
    STRUCTURAL = "structural"
    LOGICAL = "logical"
    RANGE = "range"
    DATE = "date"
    STRING = "string"
    CUSTOM = "custom"


class BuiltinOperator(str, Enum):
    """Closed set of operators shipped with the table."""

    EQ = "$eq"
    NE = "$ne"
    GT = "$gt"
    GTE = "$gte"
    LT = "$lt"
    LTE = "$lte"
    IN = "$in"
    NIN = "$nin"
    ALL = "$all"
    SIZE = "$size"
    EXISTS = "$exists"
    TYPE = "$type"
    REGEX = "$regex"
    ELEM_MATCH = "$elemMatch"
    AND = "$and"
    OR = "$or"
    NOT = "$not"
    BETWEEN = "$between"
    DATE_BEFORE = "$dateBefore"
    DATE_AFTER = "$dateAfter"
    CONTAINS = "$contains"
    STARTS_WITH = "$startsWith"
    ENDS_WITH = "$endsWith"

    @property
    def family(self) -> OperatorFamily:
        return _FAMILIES[self]


_FAMILIES: dict[BuiltinOperator, OperatorFamily] = {
    BuiltinOperator.EQ: OperatorFamily.COMPARISON,
    BuiltinOperator.NE: OperatorFamily.COMPARISON,
    BuiltinOperator.GT: OperatorFamily.COMPARISON,
    BuiltinOperator.GTE: OperatorFamily.COMPARISON,
    BuiltinOperator.LT: OperatorFamily.COMPARISON,
    BuiltinOperator.LTE: OperatorFamily.COMPARISON,
    BuiltinOperator.IN: OperatorFamily.COLLECTION,
    BuiltinOperator.NIN: OperatorFamily.COLLECTION,
    BuiltinOperator.ALL: OperatorFamily.COLLECTION,
    BuiltinOperator.SIZE: OperatorFamily.COLLECTION,
    BuiltinOperator.EXISTS: OperatorFamily.EXISTENCE,
    BuiltinOperator.TYPE: OperatorFamily.EXISTENCE,
    BuiltinOperator.REGEX: OperatorFamily.PATTERN,
    BuiltinOperator.ELEM_MATCH: OperatorFamily.STRUCTURAL,
    BuiltinOperator.AND: OperatorFamily.LOGICAL,
    BuiltinOperator.OR: OperatorFamily.LOGICAL,
    BuiltinOperator.NOT: OperatorFamily.LOGICAL,
    BuiltinOperator.BETWEEN: OperatorFamily.RANGE,
    BuiltinOperator.DATE_BEFORE: OperatorFamily.DATE,
    BuiltinOperator.DATE_AFTER: OperatorFamily.DATE,
    BuiltinOperator.CONTAINS: OperatorFamily.STRING,
    BuiltinOperator.STARTS_WITH: OperatorFamily.STRING,
    BuiltinOperator.ENDS_WITH: OperatorFamily.STRING,
}


@dataclass(frozen=True, slots=True)
class OperatorDefinition:
    name: str
    family: OperatorFamily
    handler: OperatorHandler


class OperatorRegistry:
    """Maps operator names to handlers.

    Registration is open until the first lookup; after that the table is
    frozen and read concurrently without locking.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, OperatorDefinition] = {}
        self._frozen = False
        self._lock = threading.Lock()

    @classmethod
    def with_defaults(
        cls,
        *,
        pattern_cache: PatternCache | None = None,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
    ) -> "OperatorRegistry":
        registry = cls()
        regex = RegexOperator(pattern_cache)
        dates = DateComparator(now_provider=now_provider)
        logical = LogicalOperators(ValueMatcher(registry))

        handlers: dict[BuiltinOperator, OperatorHandler] = {
            BuiltinOperator.EQ: comparison.eq,
            BuiltinOperator.NE: comparison.ne,
            BuiltinOperator.GT: comparison.gt,
            BuiltinOperator.GTE: comparison.gte,
            BuiltinOperator.LT: comparison.lt,
            BuiltinOperator.LTE: comparison.lte,
            BuiltinOperator.IN: collection.is_in,
            BuiltinOperator.NIN: collection.not_in,
            BuiltinOperator.ALL: collection.contains_all,
            BuiltinOperator.SIZE: collection.size,
            BuiltinOperator.EXISTS: existence.exists,
            BuiltinOperator.TYPE: existence.type_matches,
            BuiltinOperator.REGEX: regex,
            BuiltinOperator.ELEM_MATCH: logical.elem_match,
            BuiltinOperator.AND: logical.all_of,
            BuiltinOperator.OR: logical.any_of,
            BuiltinOperator.NOT: logical.negate,
            BuiltinOperator.BETWEEN: comparison.between,
            BuiltinOperator.DATE_BEFORE: dates.before,
            BuiltinOperator.DATE_AFTER: dates.after,
            BuiltinOperator.CONTAINS: strings.contains,
            BuiltinOperator.STARTS_WITH: strings.starts_with,
            BuiltinOperator.ENDS_WITH: strings.ends_with,
        }
        for operator, handler in handlers.items():
            registry._definitions[operator.value] = OperatorDefinition(
                name=operator.value,
                family=operator.family,
                handler=handler,
            )
        return registry

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, name: str, handler: OperatorHandler, *, replace: bool = False) -> None:
        """Add a custom operator. Must happen before the first lookup."""
        if not name.startswith("$"):
            raise ValueError(f"Operator names must start with '$': {name!r}")
        if not callable(handler):
            raise TypeError(f"Handler for {name!r} is not callable")
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"Cannot register {name!r}: registry is frozen")
            if name in self._definitions and not replace:
                raise ValueError(f"Operator already registered: {name!r}")
            self._definitions[name] = OperatorDefinition(
                name=name,
                family=OperatorFamily.CUSTOM,
                handler=handler,
            )

    def freeze(self) -> None:
        with self._lock:
            self._frozen = True

    def lookup(self, name: str) -> OperatorHandler | None:
        if not self._frozen:
            self.freeze()
        definition = self._definitions.get(name)
        return definition.handler if definition else None

    def definition(self, name: str) -> OperatorDefinition | None:
        return self._definitions.get(name)

    def names(self) -> list[str]:
        return list(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions
