# backend/salescrm/filters/notion_filter.py

"""
複合フィルタツリー → Notion API のフィルタ JSON への変換。

演算子の対応は (セマンティック型, 演算子) をキーにした静的テーブルで管理し、
テーブルに無い組み合わせは UnsupportedOperatorError とする。
"""

import math
from typing import Any, Callable, Dict, Optional

from .errors import UnsupportedOperatorError
from .registry import PropertyType, get_property_spec
from .schemas import AndGroup, FilterCondition, FilterNode, OrGroup

# 比較値 -> Notion の条件句。値が不正な場合は None を返す。
ClauseBuilder = Callable[[Any], Optional[Dict[str, Any]]]


def _stringify(value: Any) -> str:
    return "" if value is None else str(value)


def _to_finite_number(value: Any) -> Optional[float]:
    """数値に変換できない・有限でない場合は None。bool は数値として扱わない。"""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        # "1_000" のような Python 固有の数値表記は受け付けない
        if not text or "_" in text:
            return None
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return None
    if not isinstance(value, (int, float)):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # float に収まらない巨大な整数
        return None
    return value if finite else None


def _text(clause_key: str) -> ClauseBuilder:
    return lambda value: {clause_key: _stringify(value)}


def _flag(clause_key: str) -> ClauseBuilder:
    return lambda value: {clause_key: True}


def _number(clause_key: str) -> ClauseBuilder:
    def build(value: Any) -> Optional[Dict[str, Any]]:
        number = _to_finite_number(value)
        if number is None:
            return None
        return {clause_key: number}

    return build


def _checkbox(clause_key: str) -> ClauseBuilder:
    return lambda value: {clause_key: bool(value)}


def _literal(clause_key: str) -> ClauseBuilder:
    def build(value: Any) -> Optional[Dict[str, Any]]:
        literal = _stringify(value)
        if not literal:
            return None
        return {clause_key: literal}

    return build


_EMPTINESS_OPERATORS: Dict[str, ClauseBuilder] = {
    "is empty": _flag("is_empty"),
    "is not empty": _flag("is_not_empty"),
}

_TEXT_OPERATORS: Dict[str, ClauseBuilder] = {
    "is": _text("equals"),
    "is not": _text("does_not_equal"),
    "contains": _text("contains"),
    "does not contain": _text("does_not_contain"),
    "starts with": _text("starts_with"),
    "ends with": _text("ends_with"),
    **_EMPTINESS_OPERATORS,
}

_SELECT_OPERATORS: Dict[str, ClauseBuilder] = {
    "is": _text("equals"),
    "is not": _text("does_not_equal"),
    **_EMPTINESS_OPERATORS,
}

_NUMBER_OPERATORS: Dict[str, ClauseBuilder] = {
    "=": _number("equals"),
    "!=": _number("does_not_equal"),
    "<": _number("less_than"),
    ">": _number("greater_than"),
    "<=": _number("less_than_or_equal_to"),
    ">=": _number("greater_than_or_equal_to"),
    **_EMPTINESS_OPERATORS,
}

_CHECKBOX_OPERATORS: Dict[str, ClauseBuilder] = {
    "is": _checkbox("equals"),
    "is not": _checkbox("does_not_equal"),
}

_DATE_OPERATORS: Dict[str, ClauseBuilder] = {
    "is": _literal("equals"),
    "is before": _literal("before"),
    "is after": _literal("after"),
    "is on or before": _literal("on_or_before"),
    "is on or after": _literal("on_or_after"),
    **_EMPTINESS_OPERATORS,
}

_MULTI_SELECT_OPERATORS: Dict[str, ClauseBuilder] = {
    "contains": _text("contains"),
    "does not contain": _text("does_not_contain"),
    **_EMPTINESS_OPERATORS,
}

# people の contains は Notion ユーザー ID を比較値に取る
_PEOPLE_OPERATORS: Dict[str, ClauseBuilder] = {
    "contains": _literal("contains"),
    "does not contain": _literal("does_not_contain"),
    **_EMPTINESS_OPERATORS,
}

OPERATOR_TABLE: Dict[PropertyType, Dict[str, ClauseBuilder]] = {
    PropertyType.TITLE: _TEXT_OPERATORS,
    PropertyType.RICH_TEXT: _TEXT_OPERATORS,
    PropertyType.STATUS: _SELECT_OPERATORS,
    PropertyType.SELECT: _SELECT_OPERATORS,
    PropertyType.NUMBER: _NUMBER_OPERATORS,
    PropertyType.CHECKBOX: _CHECKBOX_OPERATORS,
    PropertyType.DATE: _DATE_OPERATORS,
    PropertyType.TIMESTAMP: _DATE_OPERATORS,
    PropertyType.MULTI_SELECT: _MULTI_SELECT_OPERATORS,
    PropertyType.PEOPLE: _PEOPLE_OPERATORS,
}


def _build_clause(property_type: PropertyType, operator: str, value: Any) -> Dict[str, Any]:
    builder = OPERATOR_TABLE[property_type].get(operator)
    clause = builder(value) if builder is not None else None
    if clause is None:
        raise UnsupportedOperatorError(property_type.value, operator)
    return clause


def _condition_to_notion(condition: FilterCondition) -> Dict[str, Any]:
    spec = get_property_spec(condition.property)
    clause = _build_clause(spec.type, condition.filter_operator, condition.value)

    if spec.type is PropertyType.TIMESTAMP:
        return {"timestamp": spec.timestamp, spec.timestamp: clause}

    return {"property": spec.notion_name, spec.type.value: clause}


def is_empty_group(node: Optional[FilterNode]) -> bool:
    """
    フィルタ無しと同等かどうか。

    - None
    - 子ノードが 0 件のグループ（{"and": []} / {"or": []}）
    """
    if node is None:
        return True
    if isinstance(node, (AndGroup, OrGroup)):
        return not node.children
    return False


def to_notion_filter(node: FilterNode) -> Dict[str, Any]:
    """
    FilterNode を Notion の filter オブジェクトに変換する。

    :raises UnsupportedPropertyError: レジストリに無いプロパティキー
    :raises UnsupportedOperatorError: 型に対して定義されていない演算子 / 不正な比較値
    """
    if isinstance(node, (AndGroup, OrGroup)):
        key = "and" if isinstance(node, AndGroup) else "or"
        mapped = [to_notion_filter(child) for child in node.children]
        return {key: [clause for clause in mapped if clause]}

    return _condition_to_notion(node)
