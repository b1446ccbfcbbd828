"""Single-predicate evaluation with per-predicate fault isolation."""

from __future__ import annotations

from typing import Any

import structlog

from ..schemas import Predicate
from .errors import EvaluationError, UnknownOperatorError
from .matching import ValueMatcher, is_presence_only
from .operators import OperatorRegistry
from .paths import Found, Missing, Resolution, resolve
from .results import EvaluationState, PredicateResult


class PredicateEvaluator:
    """Evaluate one predicate's query against one document.

    Fields are combined with implicit AND. Missing data takes precedence
    over clause failures; no exception escapes :meth:`evaluate`.
    """

    def __init__(self, *, registry: OperatorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else OperatorRegistry.with_defaults()
        self._matcher = ValueMatcher(self._registry)
        self._logger = structlog.get_logger(__name__)

    @property
    def registry(self) -> OperatorRegistry:
        return self._registry

    def evaluate(self, document: Any, predicate: Predicate) -> PredicateResult:
        try:
            return self._evaluate(document, predicate)
        except Exception as exc:  # noqa: BLE001
            self._logger.exception(
                "predicate.internal_error",
                predicate_id=predicate.id,
                error=type(exc).__name__,
            )
            return PredicateResult(
                predicate_id=predicate.id,
                state=EvaluationState.UNDETERMINED,
                failure_reason=f"Internal error during evaluation: {type(exc).__name__}",
            )

    def _evaluate(self, document: Any, predicate: Predicate) -> PredicateResult:
        if not predicate.query:
            self._logger.warning("predicate.not_found", predicate_id=predicate.id)
            return PredicateResult.not_found(predicate.id)

        fields: list[tuple[Resolution, Any]] = []
        missing: list[str] = []
        for path, condition in predicate.query.items():
            resolution = resolve(document, path)
            if isinstance(resolution, Missing) and not is_presence_only(condition):
                missing.append(path)
            fields.append((resolution, condition))

        if missing:
            self._logger.debug(
                "predicate.missing_data",
                predicate_id=predicate.id,
                missing_paths=missing,
            )
            return PredicateResult(
                predicate_id=predicate.id,
                state=EvaluationState.UNDETERMINED,
                missing_paths=tuple(missing),
            )

        matched = True
        for resolution, condition in fields:
            try:
                if isinstance(resolution, Found):
                    field_matched = self._matcher.match(resolution.value, condition)
                else:
                    field_matched = self._matcher.match_absent(condition)
            except UnknownOperatorError as exc:
                self._logger.warning(
                    "predicate.unknown_operator",
                    predicate_id=predicate.id,
                    operator=exc.operator,
                )
                return self._undetermined(predicate, exc.reason)
            except EvaluationError as exc:
                self._logger.warning(
                    "predicate.undetermined",
                    predicate_id=predicate.id,
                    reason=exc.reason,
                )
                return self._undetermined(predicate, exc.reason)
            matched = matched and field_matched

        return PredicateResult(
            predicate_id=predicate.id,
            state=EvaluationState.MATCHED if matched else EvaluationState.NOT_MATCHED,
        )

    @staticmethod
    def _undetermined(predicate: Predicate, reason: str) -> PredicateResult:
        return PredicateResult(
            predicate_id=predicate.id,
            state=EvaluationState.UNDETERMINED,
            failure_reason=reason,
        )
