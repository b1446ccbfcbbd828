"""Loading, evaluation and serialisation around the core engine."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

import pendulum
import structlog
import yaml
from pydantic import ValidationError

from . import __version__
from .core import (
    EvaluationOutcome,
    EvaluationState,
    GroupResult,
    PredicateResult,
    SpecificationEvaluator,
)
from .schemas import Specification


class SpecificationLoadError(ValueError):
    """Raised when a specification or document file cannot be used."""


def _read_structured(path: Path) -> Any:
    # YAML is a superset of JSON, so one parser covers both formats.
    with path.open("r", encoding="utf-8") as handle:
        try:
            return yaml.safe_load(handle)
        except UnicodeDecodeError as exc:
            raise SpecificationLoadError(f"{path}: not valid UTF-8 ({exc.reason})") from exc
        except yaml.YAMLError as exc:
            raise SpecificationLoadError(f"{path}: invalid YAML/JSON ({exc})") from exc


class DocumentLoader:
    """Load a document value tree."""

    def load(self, path: Path) -> Any:
        data = _read_structured(path)
        return {} if data is None else data


class SpecificationLoader:
    """Load and validate a specification."""

    def load(self, path: Path) -> Specification:
        data = _read_structured(path)
        if not isinstance(data, dict):
            raise SpecificationLoadError(f"{path}: specification must be a mapping")
        try:
            return Specification.model_validate(data)
        except ValidationError as exc:
            raise SpecificationLoadError(f"{path}: invalid specification ({exc})") from exc


class OutputWriter:
    """Persist evaluation payloads."""

    def write(self, path: Path, payload: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def _predicate_payload(result: PredicateResult) -> dict[str, Any]:
    return {
        "predicate_id": result.predicate_id,
        "state": result.state.value,
        "matched": result.matched,
        "missing_paths": list(result.missing_paths),
        "failure_reason": result.failure_reason,
        "reason": result.reason,
    }


def _group_payload(result: GroupResult) -> dict[str, Any]:
    return {
        "group_id": result.group_id,
        "junction": result.junction.value,
        "matched": result.matched,
        "reason": result.reason or None,
        "member_results": [_predicate_payload(member) for member in result.member_results],
    }


def serialize_outcome(outcome: EvaluationOutcome) -> dict[str, Any]:
    """Convert an outcome into plain JSON-compatible data."""
    return {
        "specification_id": outcome.specification_id,
        "summary": asdict(outcome.summary),
        "predicate_results": [_predicate_payload(result) for result in outcome.predicate_results],
        "group_results": [_group_payload(result) for result in outcome.group_results],
    }


class EvaluationPipeline:
    """Load inputs from disk, evaluate, optionally write the outcome."""

    def __init__(
        self,
        *,
        evaluator: SpecificationEvaluator,
        specification_loader: SpecificationLoader | None = None,
        document_loader: DocumentLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._evaluator = evaluator
        self._specifications = specification_loader or SpecificationLoader()
        self._documents = document_loader or DocumentLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        spec_path: Path,
        document_path: Path,
        output_path: Path | None = None,
    ) -> EvaluationOutcome:
        specification = self._specifications.load(spec_path)
        document = self._documents.load(document_path)

        outcome = self._evaluator.evaluate(document, specification)

        self._logger.info(
            "evaluation.result",
            specification_id=outcome.specification_id,
            document=str(document_path),
            fully_determined=outcome.summary.fully_determined,
            undetermined=[
                result.predicate_id
                for result in outcome.predicate_results
                if not result.is_determined
            ],
        )

        if output_path is not None:
            self._writer.write(
                output_path,
                {
                    "metadata": {
                        "specification": str(spec_path),
                        "document": str(document_path),
                        "timestamp": pendulum.now().to_iso8601_string(),
                        "app_version": __version__,
                    },
                    "outcome": serialize_outcome(outcome),
                },
            )
        return outcome


def render_text(outcome: EvaluationOutcome) -> str:
    """Plain-text rendering used by the CLI."""
    lines = [f"Specification: {outcome.specification_id}"]
    for result in outcome.predicate_results:
        line = f"  [{result.state.value}] {result.predicate_id}"
        if result.reason and result.state is not EvaluationState.NOT_MATCHED:
            line += f" - {result.reason}"
        lines.append(line)
    if outcome.group_results:
        lines.append("Groups:")
        for group in outcome.group_results:
            members = ", ".join(member.predicate_id for member in group.member_results)
            status = "matched" if group.matched else "not matched"
            lines.append(f"  [{status}] {group.group_id} ({group.junction.value}): {members}")
    summary = outcome.summary
    lines.append(
        "Summary: "
        f"total={summary.total} matched={summary.matched} "
        f"not_matched={summary.not_matched} undetermined={summary.undetermined} "
        f"fully_determined={str(summary.fully_determined).lower()}"
    )
    return "\n".join(lines)
