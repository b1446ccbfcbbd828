"""Field presence and runtime type operators."""

from __future__ import annotations

from typing import Any

from ..errors import InvalidOperandError
from ..values import require_flag, type_name

TYPE_NAMES = frozenset({"string", "number", "boolean", "array", "object", "null"})


def exists(value: Any, operand: Any) -> bool:
    # Only called for resolved paths; absent paths are handled by the matcher.
    return require_flag(operand)


def type_matches(value: Any, operand: Any) -> bool:
    if not isinstance(operand, str) or operand not in TYPE_NAMES:
        raise InvalidOperandError(
            f"$type expects one of {', '.join(sorted(TYPE_NAMES))}, got {operand!r}"
        )
    return type_name(value) == operand
