"""Pydantic schema definitions for specifications and configuration."""

from __future__ import annotations

from .config import AppConfig, EvaluationConfig, LoggingConfig, load_config
from .specification import Junction, Predicate, PredicateGroup, Specification

__all__ = [
    "AppConfig",
    "EvaluationConfig",
    "LoggingConfig",
    "load_config",
    "Junction",
    "Predicate",
    "PredicateGroup",
    "Specification",
]
