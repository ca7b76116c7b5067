# backend/tests/test_filters_schemas.py

import pytest
from pydantic import ValidationError

from salescrm.filters.schemas import (
    AndGroup,
    FilterCondition,
    OrGroup,
    is_group,
    parse_filter_node,
)


def test_condition_is_parsed_with_alias():
    node = parse_filter_node({"property": "name", "filterOperator": "is", "value": "x"})

    assert isinstance(node, FilterCondition)
    assert node.filter_operator == "is"
    assert not is_group(node)


def test_condition_value_is_optional():
    node = parse_filter_node({"property": "tag", "filterOperator": "is empty"})

    assert node.value is None


def test_groups_are_discriminated_by_key():
    node = parse_filter_node(
        {"and": [{"or": [{"property": "name", "filterOperator": "is", "value": "x"}]}]}
    )

    assert isinstance(node, AndGroup)
    assert isinstance(node.children[0], OrGroup)
    assert isinstance(node.children[0].children[0], FilterCondition)


def test_group_with_both_and_and_or_is_rejected():
    with pytest.raises(ValidationError):
        parse_filter_node({"and": [], "or": []})


def test_condition_without_operator_is_rejected():
    with pytest.raises(ValidationError):
        parse_filter_node({"property": "name"})


def test_group_serializes_with_wire_keys():
    node = parse_filter_node({"or": []})

    assert node.model_dump(by_alias=True) == {"or": []}
