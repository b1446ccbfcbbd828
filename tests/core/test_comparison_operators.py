from __future__ import annotations

from typing import Any

import pytest

from specmatch.core import EvaluationState, PredicateEvaluator
from specmatch.schemas import Predicate


def evaluate(document: dict[str, Any], query: dict[str, Any]):
    return PredicateEvaluator().evaluate(document, Predicate(id="test", query=query))


@pytest.mark.parametrize(
    ("value", "condition", "expected"),
    [
        (25, {"$eq": 25}, EvaluationState.MATCHED),
        (25, {"$eq": 25.0}, EvaluationState.MATCHED),
        (25, {"$ne": 30}, EvaluationState.MATCHED),
        (25, {"$gt": 18}, EvaluationState.MATCHED),
        (18, {"$gt": 18}, EvaluationState.NOT_MATCHED),
        (18, {"$gte": 18.0}, EvaluationState.MATCHED),
        (17.5, {"$lt": 18}, EvaluationState.MATCHED),
        (18, {"$lte": 18}, EvaluationState.MATCHED),
        (19, {"$lte": 18}, EvaluationState.NOT_MATCHED),
        ("beta", {"$gt": "alpha"}, EvaluationState.MATCHED),
        ("Beta", {"$gt": "alpha"}, EvaluationState.NOT_MATCHED),
        ("ACTIVE", "ACTIVE", EvaluationState.MATCHED),
        ("ACTIVE", "INACTIVE", EvaluationState.NOT_MATCHED),
    ],
)
def test_comparison_operators(value, condition, expected):
    result = evaluate({"field": value}, {"field": condition})

    assert result.state is expected


def test_booleans_are_not_equal_to_numbers():
    assert evaluate({"flag": True}, {"flag": {"$eq": 1}}).state is EvaluationState.NOT_MATCHED
    assert evaluate({"flag": True}, {"flag": {"$eq": True}}).state is EvaluationState.MATCHED


def test_structured_equality_compares_nested_values():
    document = {"point": {"x": 1, "y": [1, 2]}}

    assert evaluate(document, {"point": {"$eq": {"x": 1.0, "y": [1, 2]}}}).state is EvaluationState.MATCHED
    assert evaluate(document, {"point": {"$eq": {"x": 1}}}).state is EvaluationState.NOT_MATCHED


def test_ordering_type_mismatch_is_undetermined():
    result = evaluate({"age": "25"}, {"age": {"$gte": 18}})

    assert result.state is EvaluationState.UNDETERMINED
    assert "$gte" in result.failure_reason
    assert result.missing_paths == ()


def test_ordering_against_null_is_undetermined():
    result = evaluate({"age": None}, {"age": {"$lt": 18}})

    assert result.state is EvaluationState.UNDETERMINED


@pytest.mark.parametrize(
    ("value", "condition", "expected"),
    [
        ("ACTIVE", {"$in": ["ACTIVE", "PENDING"]}, EvaluationState.MATCHED),
        (3, {"$in": [1.0, 3.0]}, EvaluationState.MATCHED),
        ("BANNED", {"$in": ["ACTIVE", "PENDING"]}, EvaluationState.NOT_MATCHED),
        ("BANNED", {"$nin": ["ACTIVE", "PENDING"]}, EvaluationState.MATCHED),
        ("ACTIVE", {"$nin": ["ACTIVE"]}, EvaluationState.NOT_MATCHED),
        (["admin", "user"], {"$all": ["user", "admin"]}, EvaluationState.MATCHED),
        (["admin"], {"$all": ["admin", "admin"]}, EvaluationState.MATCHED),
        (["admin"], {"$all": ["admin", "root"]}, EvaluationState.NOT_MATCHED),
        (["admin"], {"$all": []}, EvaluationState.MATCHED),
        ("admin", {"$all": ["admin"]}, EvaluationState.NOT_MATCHED),
        (["a", "b"], {"$size": 2}, EvaluationState.MATCHED),
        ([], {"$size": 0}, EvaluationState.MATCHED),
        (["a"], {"$size": 2}, EvaluationState.NOT_MATCHED),
        ("ab", {"$size": 2}, EvaluationState.NOT_MATCHED),
    ],
)
def test_collection_operators(value, condition, expected):
    assert evaluate({"field": value}, {"field": condition}).state is expected


@pytest.mark.parametrize(
    "condition",
    [
        {"$in": "ACTIVE"},
        {"$nin": None},
        {"$all": "admin"},
        {"$size": "2"},
        {"$size": True},
    ],
)
def test_collection_invalid_operands_are_undetermined(condition):
    result = evaluate({"field": ["ACTIVE"]}, {"field": condition})

    assert result.state is EvaluationState.UNDETERMINED
    assert result.failure_reason


@pytest.mark.parametrize(
    ("value", "type_name"),
    [
        ("text", "string"),
        (1, "number"),
        (1.5, "number"),
        (False, "boolean"),
        ([1], "array"),
        ({"a": 1}, "object"),
        (None, "null"),
    ],
)
def test_type_operator_maps_runtime_types(value, type_name):
    assert evaluate({"field": value}, {"field": {"$type": type_name}}).state is EvaluationState.MATCHED


def test_type_operator_does_not_treat_booleans_as_numbers():
    assert evaluate({"field": True}, {"field": {"$type": "number"}}).state is EvaluationState.NOT_MATCHED


def test_type_operator_rejects_unknown_type_names():
    result = evaluate({"field": "x"}, {"field": {"$type": "integer"}})

    assert result.state is EvaluationState.UNDETERMINED


@pytest.mark.parametrize(
    ("value", "operand", "expected"),
    [
        (150, [100, 200], EvaluationState.MATCHED),
        (100, [100, 200], EvaluationState.MATCHED),
        (200, [100, 200], EvaluationState.MATCHED),
        (50, [100, 200], EvaluationState.NOT_MATCHED),
        (4.5, [1.0, 5], EvaluationState.MATCHED),
        ("B", ["A", "C"], EvaluationState.MATCHED),
        (42, [1, 2, 3], EvaluationState.NOT_MATCHED),
        (42, [1], EvaluationState.NOT_MATCHED),
        (42, "not a list", EvaluationState.NOT_MATCHED),
        ("42", [1, 100], EvaluationState.NOT_MATCHED),
    ],
)
def test_between_operator(value, operand, expected):
    assert evaluate({"field": value}, {"field": {"$between": operand}}).state is expected
