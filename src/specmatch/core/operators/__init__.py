"""Operator table and built-in handlers."""

from __future__ import annotations

from .dates import DateComparator
from .pattern import PatternCache, RegexOperator
from .registry import (
    BuiltinOperator,
    OperatorDefinition,
    OperatorFamily,
    OperatorHandler,
    OperatorRegistry,
)

__all__ = [
    "BuiltinOperator",
    "DateComparator",
    "OperatorDefinition",
    "OperatorFamily",
    "OperatorHandler",
    "OperatorRegistry",
    "PatternCache",
    "RegexOperator",
]
