"""Predicate evaluation engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .errors import (
    EvaluationError,
    InvalidOperandError,
    RegistryFrozenError,
    TypeMismatchError,
    UnknownOperatorError,
)
from .operators import (
    BuiltinOperator,
    OperatorFamily,
    OperatorHandler,
    OperatorRegistry,
    PatternCache,
)
from .paths import Found, Missing, resolve
from .predicate import PredicateEvaluator
from .results import (
    EvaluationOutcome,
    EvaluationState,
    EvaluationSummary,
    GroupResult,
    PredicateResult,
)
from .specification import SpecificationEvaluator

__all__ = [
    "BuiltinOperator",
    "EvaluationError",
    "EvaluationOutcome",
    "EvaluationState",
    "EvaluationSummary",
    "Found",
    "GroupResult",
    "InvalidOperandError",
    "Missing",
    "OperatorFamily",
    "OperatorHandler",
    "OperatorRegistry",
    "PatternCache",
    "PredicateEvaluator",
    "PredicateResult",
    "RegistryFrozenError",
    "SpecificationEvaluator",
    "TypeMismatchError",
    "UnknownOperatorError",
    "resolve",
]
