"""Dependency injection container for the evaluation engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .core import OperatorRegistry, PatternCache, PredicateEvaluator, SpecificationEvaluator
from .pipeline import EvaluationPipeline
from .schemas import EvaluationConfig


class EvaluationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    pattern_cache = providers.Singleton(PatternCache)

    operator_registry = providers.Singleton(
        OperatorRegistry.with_defaults,
        pattern_cache=pattern_cache,
    )

    predicate_evaluator = providers.Singleton(
        PredicateEvaluator,
        registry=operator_registry,
    )

    specification_evaluator = providers.Singleton(
        SpecificationEvaluator,
        predicate_evaluator=predicate_evaluator,
    )

    pipeline = providers.Factory(
        EvaluationPipeline,
        evaluator=specification_evaluator,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> EvaluationContainer:
    """Instantiate container with optional overrides."""

    container = EvaluationContainer()

    if not settings:
        return container

    evaluation = EvaluationConfig(**(settings.get("evaluation") or {}))

    if evaluation.regex_cache_size is not None:
        container.pattern_cache.override(
            providers.Singleton(PatternCache, max_size=evaluation.regex_cache_size)
        )

    if evaluation.max_workers is not None:
        container.specification_evaluator.override(
            providers.Singleton(
                SpecificationEvaluator,
                predicate_evaluator=container.predicate_evaluator,
                max_workers=evaluation.max_workers,
            )
        )

    return container
