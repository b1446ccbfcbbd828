"""Regular expression operator backed by a bounded compiled-pattern cache."""

from __future__ import annotations

import re
import threading
from collections import OrderedDict
from typing import Any

from ..errors import InvalidOperandError
from ..values import type_name

DEFAULT_CACHE_SIZE = 256


class PatternCache:
    """Thread-safe LRU cache of compiled patterns.

    Compilation happens outside the lock, so two threads missing on the same
    pattern may both compile it; the later insert wins and both results are
    equivalent.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._patterns: OrderedDict[str, re.Pattern[str]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, pattern: str) -> re.Pattern[str]:
        """Return the compiled pattern, compiling on a miss. Raises ``re.error``."""
        with self._lock:
            compiled = self._patterns.get(pattern)
            if compiled is not None:
                self._patterns.move_to_end(pattern)
                return compiled

        compiled = re.compile(pattern)

        with self._lock:
            self._patterns[pattern] = compiled
            self._patterns.move_to_end(pattern)
            while len(self._patterns) > self._max_size:
                self._patterns.popitem(last=False)
        return compiled

    def clear(self) -> None:
        with self._lock:
            self._patterns.clear()

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._patterns

    def __len__(self) -> int:
        with self._lock:
            return len(self._patterns)


class RegexOperator:
    """``$regex``: partial match (``re.search``) against string values."""

    def __init__(self, cache: PatternCache | None = None) -> None:
        self._cache = cache if cache is not None else PatternCache()

    def __call__(self, value: Any, operand: Any) -> bool:
        if not isinstance(operand, str):
            raise InvalidOperandError(f"Invalid pattern: expected string, got {type_name(operand)}")
        try:
            compiled = self._cache.get(operand)
        except re.error as exc:
            raise InvalidOperandError(f"Invalid pattern {operand!r}: {exc}") from exc
        if not isinstance(value, str):
            return False
        return compiled.search(value) is not None
