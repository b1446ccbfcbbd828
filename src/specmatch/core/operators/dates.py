"""Strict date comparison operators."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable

import pendulum
from pendulum.parsing import parse_iso8601
from pendulum.parsing.exceptions import ParserError

NOW_TOKEN = "now"


class DateComparator:
    """Parse both sides into instants and compare them strictly.

    Accepted inputs: ISO dates, ISO date-times, epoch milliseconds, the
    literal ``"now"`` and ``date``/``datetime`` objects. Anything else makes
    the clause a non-match.
    """

    def __init__(self, *, now_provider: Callable[[], pendulum.DateTime] | None = None) -> None:
        self._now_provider = now_provider or pendulum.now

    def before(self, value: Any, operand: Any) -> bool:
        instants = self._instants(value, operand)
        return instants is not None and instants[0] < instants[1]

    def after(self, value: Any, operand: Any) -> bool:
        instants = self._instants(value, operand)
        return instants is not None and instants[0] > instants[1]

    def _instants(
        self, value: Any, operand: Any
    ) -> tuple[pendulum.DateTime, pendulum.DateTime] | None:
        left = self.to_instant(value)
        right = self.to_instant(operand)
        if left is None or right is None:
            return None
        return left, right

    def to_instant(self, raw: Any) -> pendulum.DateTime | None:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, datetime):
            return pendulum.instance(raw)
        if isinstance(raw, date):
            return pendulum.datetime(raw.year, raw.month, raw.day)
        if isinstance(raw, (int, float)):
            try:
                return pendulum.from_timestamp(raw / 1000)
            except (OverflowError, OSError, ValueError):
                return None
        if isinstance(raw, str):
            return self._parse(raw.strip())
        return None

    def _parse(self, text: str) -> pendulum.DateTime | None:
        if text.lower() == NOW_TOKEN:
            return self._now_provider()
        # ISO 8601 only; bare times and durations are not instants.
        try:
            parsed = parse_iso8601(text)
        except (ValueError, ParserError):
            return None
        if isinstance(parsed, datetime):
            return pendulum.instance(parsed)
        if isinstance(parsed, date):
            return pendulum.datetime(parsed.year, parsed.month, parsed.day)
        return None
