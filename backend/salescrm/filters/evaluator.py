# backend/salescrm/filters/evaluator.py

"""
フラット化済みの行に対して複合フィルタを評価するモジュール。

Notion に問い合わせずにローカルで同じ条件を判定するためのもので、
notion_filter.py の変換結果と同じ意味になるように実装している。

任意の行データを相手にするため、未定義の型・演算子の組み合わせや
パースできない値は例外にせず False（不一致）として扱う。
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .schemas import AndGroup, FilterCondition, FilterNode, OrGroup

Row = Dict[str, Any]


def _normalize_string(value: Any) -> str:
    return ("" if value is None else str(value)).lower()


def _value_for_compare(cell: Any) -> Tuple[str, Any]:
    """セルを (比較種別, 比較値) に変換する。"""
    if not isinstance(cell, dict):
        return "unknown", None

    cell_type = cell.get("type")

    if cell_type == "number":
        number = cell.get("number")
        if isinstance(number, (int, float)) and not isinstance(number, bool):
            return "number", number
        return "number", None

    if cell_type == "checkbox":
        return "checkbox", bool(cell.get("checkbox"))

    if cell_type == "date":
        date = cell.get("date")
        start = date.get("start") if isinstance(date, dict) else None
        return "date", start or None

    if cell_type in ("created_time", "last_edited_time"):
        return "date", cell.get(cell_type) or None

    if cell_type == "multi_select":
        options = cell.get("multi_select")
        return "multi_select", options if isinstance(options, list) else []

    if cell_type == "people":
        people = cell.get("people")
        return "people", people if isinstance(people, list) else []

    plain_value = cell.get("plainValue")
    return "string", "" if plain_value is None else plain_value


def _is_empty_value(kind: str, value: Any) -> bool:
    """
    種別ごとの空判定。

    数値は None 以外は空とみなさない（0 は空ではない）。
    """
    if value is None:
        return True
    if kind == "string":
        return len(_normalize_string(value)) == 0
    if kind in ("multi_select", "people"):
        return len(value) == 0 if isinstance(value, list) else True
    if kind == "date":
        return not value
    return False


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        # "1_000" のような Python 固有の数値表記は受け付けない
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_timestamp(value: Any) -> Optional[float]:
    """ISO 形式の日付 / 日時文字列を UNIX 時刻に変換する。タイムゾーン無しは UTC 扱い。"""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _compare_number(op: str, left: float, right: float) -> bool:
    if op == "=":
        return left == right
    if op == "!=":
        return left != right
    if op == "<":
        return left < right
    if op == ">":
        return left > right
    if op == "<=":
        return left <= right
    if op == ">=":
        return left >= right
    return False


def _compare_date(op: str, left: float, right: float) -> bool:
    if op == "is":
        return left == right
    if op == "is before":
        return left < right
    if op == "is after":
        return left > right
    if op == "is on or before":
        return left <= right
    if op == "is on or after":
        return left >= right
    return False


def _compare_string(op: str, left: str, right: str) -> bool:
    if op == "is":
        return left == right
    if op == "is not":
        return left != right
    if op == "contains":
        return right in left
    if op == "does not contain":
        return right not in left
    if op == "starts with":
        return left.startswith(right)
    if op == "ends with":
        return left.endswith(right)
    return False


def matches_condition(row: Row, condition: FilterCondition) -> bool:
    """1 つの条件ノードを行に対して評価する。"""
    cell = (row or {}).get(condition.property)
    kind, value = _value_for_compare(cell)
    op = condition.filter_operator

    if op == "is empty":
        return _is_empty_value(kind, value)
    if op == "is not empty":
        return not _is_empty_value(kind, value)

    if kind == "number":
        left = _to_number(value)
        right = _to_number(condition.value)
        if left is None or right is None:
            return False
        return _compare_number(op, left, right)

    if kind == "checkbox":
        expected = bool(condition.value)
        if op == "is":
            return value == expected
        if op == "is not":
            return value != expected
        return False

    if kind == "multi_select":
        names = [
            _normalize_string(option.get("name") if isinstance(option, dict) else option)
            for option in value
        ]
        needle = _normalize_string(condition.value)
        if op == "contains":
            return any(needle in name for name in names)
        if op == "does not contain":
            return not any(needle in name for name in names)
        return False

    if kind == "people":
        # Notion の people フィルタと同じくユーザー ID の完全一致で判定する
        ids = [person.get("id") for person in value if isinstance(person, dict)]
        user_id = "" if condition.value is None else str(condition.value)
        if not user_id:
            return False
        if op == "contains":
            return user_id in ids
        if op == "does not contain":
            return user_id not in ids
        return False

    if kind == "date":
        left = _to_timestamp(value)
        right = _to_timestamp(condition.value)
        if left is None or right is None:
            return False
        return _compare_date(op, left, right)

    return _compare_string(op, _normalize_string(value), _normalize_string(condition.value))


def matches_compound_filter(row: Row, node: FilterNode) -> bool:
    """
    複合フィルタを行に対して評価する。

    - AND: 全子ノードが一致（子が 0 件なら True）
    - OR: いずれかの子ノードが一致（子が 0 件なら False）
    """
    if isinstance(node, AndGroup):
        return all(matches_compound_filter(row, child) for child in node.children)
    if isinstance(node, OrGroup):
        return any(matches_compound_filter(row, child) for child in node.children)
    return matches_condition(row, node)


def apply_compound_filter(rows: Optional[Iterable[Row]], node: FilterNode) -> List[Row]:
    """一致する行だけを元の順序のまま返す。入力は変更しない。"""
    return [row for row in (rows or []) if matches_compound_filter(row, node)]
