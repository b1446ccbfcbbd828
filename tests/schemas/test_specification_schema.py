from __future__ import annotations

import pytest
from pydantic import ValidationError

from specmatch.schemas import Junction, Predicate, PredicateGroup, Specification


def test_specification_validates_nested_structure():
    spec = Specification.model_validate(
        {
            "id": "loan",
            "predicates": [
                {"id": "adult", "query": {"age": {"$gte": 18}}},
                {"id": "employed", "query": {"employment.status": "EMPLOYED"}},
            ],
            "groups": [{"id": "eligible", "junction": "and", "members": ["adult", "employed"]}],
        }
    )

    assert [predicate.id for predicate in spec.predicates] == ["adult", "employed"]
    group = spec.groups[0]
    assert group.junction is Junction.AND
    assert [member.id for member in group.members] == ["adult", "employed"]
    assert group.members[0].query == {}


def test_group_accepts_inline_member_definitions():
    group = PredicateGroup.model_validate(
        {
            "id": "g",
            "junction": " Or ",
            "members": ["known", {"id": "inline", "query": {"x": 1}}],
        }
    )

    assert group.junction is Junction.OR
    assert group.members[1].query == {"x": 1}


def test_group_defaults_to_and_without_members():
    group = PredicateGroup(id="g")

    assert group.junction is Junction.AND
    assert group.members == ()


def test_unknown_junction_is_rejected():
    with pytest.raises(ValidationError):
        PredicateGroup(id="g", junction="XOR")


def test_extra_fields_are_rejected():
    with pytest.raises(ValidationError):
        Predicate(id="p", query={}, description="not part of the model")


def test_models_are_immutable():
    predicate = Predicate(id="p", query={"age": 1})

    with pytest.raises(ValidationError):
        predicate.id = "q"


def test_predicate_requires_id():
    with pytest.raises(ValidationError):
        Predicate.model_validate({"query": {"age": 1}})
