"""Specification orchestration: concurrent predicates, cached group evaluation, summary."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import structlog

from ..schemas import Junction, Predicate, PredicateGroup, Specification
from .predicate import PredicateEvaluator
from .results import (
    EvaluationOutcome,
    EvaluationState,
    EvaluationSummary,
    GroupResult,
    PredicateResult,
)


class SpecificationEvaluator:
    """Evaluate every predicate and group of a specification against one document."""

    def __init__(
        self,
        predicate_evaluator: PredicateEvaluator | None = None,
        *,
        max_workers: int | None = None,
    ) -> None:
        self._predicates = predicate_evaluator or PredicateEvaluator()
        self._max_workers = max_workers
        self._logger = structlog.get_logger(__name__)

    def evaluate(self, document: Any, specification: Specification) -> EvaluationOutcome:
        self._logger.info(
            "specification.started",
            specification_id=specification.id,
            predicate_count=len(specification.predicates),
            group_count=len(specification.groups),
        )

        with ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="specmatch",
        ) as executor:
            # Phase 1 completes (every future collected) before any group reads the mapping.
            evaluated = self._evaluate_predicates(executor, document, specification.predicates)
            group_results = self._evaluate_groups(executor, document, specification.groups, evaluated)

        summary = EvaluationSummary.from_results(evaluated.values())
        self._logger.info(
            "specification.completed",
            specification_id=specification.id,
            total=summary.total,
            matched=summary.matched,
            not_matched=summary.not_matched,
            undetermined=summary.undetermined,
            fully_determined=summary.fully_determined,
        )
        return EvaluationOutcome(
            specification_id=specification.id,
            predicate_results=tuple(evaluated.values()),
            group_results=tuple(group_results),
            summary=summary,
        )

    def _evaluate_predicates(
        self,
        executor: ThreadPoolExecutor,
        document: Any,
        predicates: Iterable[Predicate],
    ) -> Mapping[str, PredicateResult]:
        futures = [
            (predicate, executor.submit(self._predicates.evaluate, document, predicate))
            for predicate in predicates
        ]
        results: dict[str, PredicateResult] = {}
        for predicate, future in futures:
            result = self._collect_predicate(predicate, future)
            if predicate.id in results:
                self._logger.warning("predicate.duplicate_id", predicate_id=predicate.id)
                continue
            results[predicate.id] = result
        return MappingProxyType(results)

    def _collect_predicate(self, predicate: Predicate, future: Future) -> PredicateResult:
        try:
            return future.result()
        except Exception:  # noqa: BLE001
            self._logger.exception("predicate.internal_error", predicate_id=predicate.id)
            return PredicateResult(
                predicate_id=predicate.id,
                state=EvaluationState.UNDETERMINED,
                failure_reason="Internal error during evaluation",
            )

    def _evaluate_groups(
        self,
        executor: ThreadPoolExecutor,
        document: Any,
        groups: Iterable[PredicateGroup],
        evaluated: Mapping[str, PredicateResult],
    ) -> list[GroupResult]:
        futures = [
            (group, executor.submit(self._evaluate_group, document, group, evaluated))
            for group in groups
        ]
        results: list[GroupResult] = []
        for group, future in futures:
            try:
                results.append(future.result())
            except Exception:  # noqa: BLE001
                self._logger.exception("group.failed", group_id=group.id)
                results.append(
                    GroupResult(
                        group_id=group.id,
                        junction=group.junction,
                        member_results=(),
                        matched=False,
                    )
                )
        return results

    def _evaluate_group(
        self,
        document: Any,
        group: PredicateGroup,
        evaluated: Mapping[str, PredicateResult],
    ) -> GroupResult:
        member_results: list[PredicateResult] = []
        for member in group.members:
            result = evaluated.get(member.id)
            if result is None:
                result = self._predicates.evaluate(document, member)
            member_results.append(result)

        if group.junction is Junction.AND:
            matched = all(result.matched for result in member_results)
        else:
            matched = any(result.matched for result in member_results)

        return GroupResult(
            group_id=group.id,
            junction=group.junction,
            member_results=tuple(member_results),
            matched=matched,
        )
