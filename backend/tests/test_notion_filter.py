# backend/tests/test_notion_filter.py

import pytest

from salescrm.filters.errors import UnsupportedOperatorError, UnsupportedPropertyError
from salescrm.filters.notion_filter import is_empty_group, to_notion_filter
from salescrm.filters.schemas import parse_filter_node


def _translate(data):
    return to_notion_filter(parse_filter_node(data))


def _cond(prop, op, value=None):
    return {"property": prop, "filterOperator": op, "value": value}


def test_number_condition_uses_registry_name():
    result = _translate(_cond("estimatedValue", "<=", 250000))

    assert result == {
        "property": "Estimated value",
        "number": {"less_than_or_equal_to": 250000},
    }


@pytest.mark.parametrize(
    "op, clause_key",
    [
        ("=", "equals"),
        ("!=", "does_not_equal"),
        ("<", "less_than"),
        (">", "greater_than"),
        ("<=", "less_than_or_equal_to"),
        (">=", "greater_than_or_equal_to"),
    ],
)
def test_number_operators(op, clause_key):
    result = _translate(_cond("estimatedValue", op, 10))

    assert result["number"] == {clause_key: 10}


def test_number_value_is_coerced_from_string():
    result = _translate(_cond("estimatedValue", ">", "1500.5"))

    assert result["number"] == {"greater_than": 1500.5}


@pytest.mark.parametrize("value", ["abc", "", None, True, "inf"])
def test_number_rejects_non_finite_values(value):
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("estimatedValue", "=", value))


def test_number_supports_emptiness():
    assert _translate(_cond("estimatedValue", "is empty")) == {
        "property": "Estimated value",
        "number": {"is_empty": True},
    }


@pytest.mark.parametrize(
    "op, clause",
    [
        ("is", {"equals": "Larry"}),
        ("is not", {"does_not_equal": "Larry"}),
        ("contains", {"contains": "Larry"}),
        ("does not contain", {"does_not_contain": "Larry"}),
        ("starts with", {"starts_with": "Larry"}),
        ("ends with", {"ends_with": "Larry"}),
        ("is empty", {"is_empty": True}),
        ("is not empty", {"is_not_empty": True}),
    ],
)
def test_title_operators(op, clause):
    assert _translate(_cond("name", op, "Larry")) == {"property": "Name", "title": clause}


def test_rich_text_stringifies_value():
    assert _translate(_cond("company", "contains", 42)) == {
        "property": "Company",
        "rich_text": {"contains": "42"},
    }
    assert _translate(_cond("company", "is", None)) == {
        "property": "Company",
        "rich_text": {"equals": ""},
    }


def test_select_and_status():
    assert _translate(_cond("priority", "is", "High")) == {
        "property": "Priority",
        "select": {"equals": "High"},
    }
    assert _translate(_cond("status", "is not empty")) == {
        "property": "Status",
        "status": {"is_not_empty": True},
    }


@pytest.mark.parametrize("prop", ["priority", "status"])
def test_select_rejects_substring_operators(prop):
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond(prop, "contains", "Hi"))


def test_checkbox_coerces_to_bool():
    assert _translate(_cond("done", "is", 1)) == {"property": "Done", "checkbox": {"equals": True}}
    assert _translate(_cond("done", "is not", False)) == {
        "property": "Done",
        "checkbox": {"does_not_equal": False},
    }


def test_checkbox_rejects_other_operators():
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("done", "contains", True))


@pytest.mark.parametrize(
    "op, clause_key",
    [
        ("is", "equals"),
        ("is before", "before"),
        ("is after", "after"),
        ("is on or before", "on_or_before"),
        ("is on or after", "on_or_after"),
    ],
)
def test_date_operators(op, clause_key):
    assert _translate(_cond("followUpDate", op, "2023-01-10")) == {
        "property": "Follow Up Date",
        "date": {clause_key: "2023-01-10"},
    }


def test_date_requires_non_empty_literal():
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("followUpDate", "is before", ""))


def test_date_emptiness_does_not_need_value():
    assert _translate(_cond("followUpDate", "is empty")) == {
        "property": "Follow Up Date",
        "date": {"is_empty": True},
    }


def test_timestamp_properties_use_timestamp_clause():
    assert _translate(_cond("createdTime", "is after", "2023-01-01")) == {
        "timestamp": "created_time",
        "created_time": {"after": "2023-01-01"},
    }
    assert _translate(_cond("lastEditedTime", "is on or before", "2023-02-01")) == {
        "timestamp": "last_edited_time",
        "last_edited_time": {"on_or_before": "2023-02-01"},
    }


def test_timestamp_rejects_text_operators():
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("createdTime", "contains", "2023"))


def test_multi_select_operators():
    assert _translate(_cond("tag", "contains", "A")) == {
        "property": "Tag",
        "multi_select": {"contains": "A"},
    }
    assert _translate(_cond("tag", "is not empty")) == {
        "property": "Tag",
        "multi_select": {"is_not_empty": True},
    }
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("tag", "is", "A"))


def test_people_operators():
    assert _translate(_cond("accountOwner", "is empty")) == {
        "property": "Account owner",
        "people": {"is_empty": True},
    }
    assert _translate(_cond("accountOwner", "contains", "user-1")) == {
        "property": "Account owner",
        "people": {"contains": "user-1"},
    }


def test_unknown_property_raises():
    with pytest.raises(UnsupportedPropertyError) as exc_info:
        _translate(_cond("nope", "is", "x"))

    assert exc_info.value.property_key == "nope"


def test_unknown_operator_raises():
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("name", "~=", "x"))


def test_groups_are_translated_recursively():
    result = _translate(
        {
            "or": [
                _cond("company", "is", "Nope"),
                {
                    "and": [
                        _cond("estimatedValue", ">", 200000),
                        _cond("done", "is", False),
                    ]
                },
            ]
        }
    )

    assert result == {
        "or": [
            {"property": "Company", "rich_text": {"equals": "Nope"}},
            {
                "and": [
                    {"property": "Estimated value", "number": {"greater_than": 200000}},
                    {"property": "Done", "checkbox": {"equals": False}},
                ]
            },
        ]
    }


def test_unsupported_condition_inside_group_raises():
    with pytest.raises(UnsupportedPropertyError):
        _translate({"and": [_cond("name", "is", "x"), _cond("unknown", "is", "y")]})


def test_is_empty_group():
    assert is_empty_group(None)
    assert is_empty_group(parse_filter_node({"and": []}))
    assert is_empty_group(parse_filter_node({"or": []}))
    assert not is_empty_group(parse_filter_node({"and": [_cond("name", "is", "x")]}))
    assert not is_empty_group(parse_filter_node(_cond("name", "is", "x")))


def test_number_too_large_for_float_is_rejected():
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("estimatedValue", "<", 10**400))

    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("estimatedValue", "<", "1" * 401))


def test_number_string_with_underscore_is_rejected():
    with pytest.raises(UnsupportedOperatorError):
        _translate(_cond("estimatedValue", "=", "1_000"))
