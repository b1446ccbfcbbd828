"""Failures raised while matching a clause.

These never leave the predicate evaluator: each one is converted into an
UNDETERMINED result carrying ``reason``.
"""

from __future__ import annotations


class EvaluationError(Exception):
    """Base class for clause-level failures that make a predicate undetermined."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class UnknownOperatorError(EvaluationError):
    """Raised when an operator name is absent from the registry."""

    def __init__(self, operator: str) -> None:
        super().__init__(f"Unknown operator: {operator}")
        self.operator = operator


class InvalidOperandError(EvaluationError):
    """Raised for malformed operands such as a broken regex pattern."""


class TypeMismatchError(EvaluationError):
    """Raised when operand and value types cannot be compared."""


class RegistryFrozenError(RuntimeError):
    """Raised when registering an operator after the registry was first used."""
