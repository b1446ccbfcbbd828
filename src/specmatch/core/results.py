"""Result types produced by one evaluation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from ..schemas import Junction


class EvaluationState(str, Enum):
    """Tri-state verdict of a single predicate."""

    MATCHED = "MATCHED"
    NOT_MATCHED = "NOT_MATCHED"
    UNDETERMINED = "UNDETERMINED"


NOT_FOUND_REASON = "Predicate definition not found"


@dataclass(frozen=True, slots=True)
class PredicateResult:
    """Outcome of evaluating one predicate against one document."""

    predicate_id: str
    state: EvaluationState
    missing_paths: tuple[str, ...] = ()
    failure_reason: str | None = None

    def __post_init__(self) -> None:
        if self.state is EvaluationState.MATCHED and (self.missing_paths or self.failure_reason):
            raise ValueError("A matched predicate cannot carry missing paths or a failure reason.")

    @classmethod
    def not_found(cls, predicate_id: str) -> "PredicateResult":
        return cls(
            predicate_id=predicate_id,
            state=EvaluationState.UNDETERMINED,
            failure_reason=NOT_FOUND_REASON,
        )

    @property
    def matched(self) -> bool:
        return self.state is EvaluationState.MATCHED

    @property
    def is_determined(self) -> bool:
        return self.state is not EvaluationState.UNDETERMINED

    @property
    def reason(self) -> str | None:
        """Human-readable explanation; ``None`` when matched."""
        if self.state is EvaluationState.MATCHED:
            return None
        if self.missing_paths:
            return "Missing data at: " + ", ".join(self.missing_paths)
        if self.state is EvaluationState.UNDETERMINED:
            return self.failure_reason or "Evaluation failed"
        return "Non-matching values"


@dataclass(frozen=True, slots=True)
class GroupResult:
    """Outcome of an AND/OR predicate group."""

    group_id: str
    junction: Junction
    member_results: tuple[PredicateResult, ...]
    matched: bool

    @property
    def reason(self) -> str:
        return ", ".join(r.reason for r in self.member_results if r.reason)


@dataclass(frozen=True, slots=True)
class EvaluationSummary:
    """Counts over individual predicate results (groups excluded)."""

    total: int = 0
    matched: int = 0
    not_matched: int = 0
    undetermined: int = 0
    fully_determined: bool = True

    @classmethod
    def from_results(cls, results: Iterable[PredicateResult]) -> "EvaluationSummary":
        counts = {state: 0 for state in EvaluationState}
        for result in results:
            counts[result.state] += 1
        undetermined = counts[EvaluationState.UNDETERMINED]
        return cls(
            total=sum(counts.values()),
            matched=counts[EvaluationState.MATCHED],
            not_matched=counts[EvaluationState.NOT_MATCHED],
            undetermined=undetermined,
            fully_determined=undetermined == 0,
        )


@dataclass(frozen=True, slots=True)
class EvaluationOutcome:
    """Complete, immutable payload of one ``evaluate(document, specification)`` call."""

    specification_id: str
    predicate_results: tuple[PredicateResult, ...] = ()
    group_results: tuple[GroupResult, ...] = ()
    summary: EvaluationSummary = field(default_factory=EvaluationSummary)

    def result_for(self, predicate_id: str) -> PredicateResult | None:
        for result in self.predicate_results:
            if result.predicate_id == predicate_id:
                return result
        return None

    def group_for(self, group_id: str) -> GroupResult | None:
        for result in self.group_results:
            if result.group_id == group_id:
                return result
        return None
