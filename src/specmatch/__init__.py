"""Tri-state evaluation of MongoDB-style predicates over nested documents."""

from __future__ import annotations

__version__ = "0.1.0"

from .core import (  # noqa: E402
    EvaluationOutcome,
    EvaluationState,
    OperatorRegistry,
    PredicateEvaluator,
    SpecificationEvaluator,
)
from .schemas import Junction, Predicate, PredicateGroup, Specification  # noqa: E402

__all__ = [
    "__version__",
    "EvaluationOutcome",
    "EvaluationState",
    "Junction",
    "OperatorRegistry",
    "Predicate",
    "PredicateEvaluator",
    "PredicateGroup",
    "Specification",
    "SpecificationEvaluator",
]
