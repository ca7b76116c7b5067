# backend/salescrm/notion/parser.py

"""
Notion のページオブジェクトを表示用のフラットな行に変換するモジュール。

- プロパティ名 "Follow Up Date" -> 内部キー "followUpDate"
- 各プロパティに表示用の plainValue と元のプロパティ名 columnName を付与する

欠損しているフィールドは空値として扱い、例外は投げない。
"""

from typing import Any, Dict

Row = Dict[str, Any]


def parse_key(key: str) -> str:
    """Notion のプロパティ名を camelCase の内部キーに変換する。"""
    words = (key or "").lower().split(" ")
    return words[0] + "".join(word[:1].upper() + word[1:] for word in words[1:])


def _existing_plain_value(value: Dict[str, Any], default: Any) -> Any:
    """
    フラット化済みの行を再度通した場合に備え、既存の plainValue を返す。
    """
    existing = value.get("plainValue")
    return default if existing is None else existing


def _extract_text(value: Dict[str, Any], key: str) -> str:
    runs = value.get(key)
    if not isinstance(runs, list):
        return _existing_plain_value(value, "")
    if not runs or not isinstance(runs[0], dict):
        return ""

    first = runs[0]
    text = first.get("text") or {}
    return first.get("plain_text") or text.get("content") or ""


def _format_number(value: Dict[str, Any]) -> str:
    if "number" not in value:
        return _existing_plain_value(value, "0.00")
    number = value.get("number")
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        return "0.00"
    return f"{number:,.2f}"


def _extract_option_name(value: Dict[str, Any], key: str) -> str:
    option = value.get(key)
    if isinstance(option, dict):
        return option.get("name") or ""
    return _existing_plain_value(value, "") if key not in value else ""


def _extract_first_person(value: Dict[str, Any]) -> str:
    people = value.get("people")
    if not isinstance(people, list):
        return _existing_plain_value(value, "")
    if people and isinstance(people[0], dict):
        return people[0].get("name") or ""
    return ""


def parse_plain_value(prop_type: str, value: Any) -> Any:
    """
    プロパティ型ごとに表示用の値を取り出す。

    未知の型は値をそのまま返す。
    """
    if not isinstance(value, dict):
        return value

    if prop_type in ("title", "rich_text"):
        return _extract_text(value, prop_type)
    if prop_type == "number":
        return _format_number(value)
    if prop_type == "people":
        return _extract_first_person(value)
    if prop_type in ("select", "status"):
        return _extract_option_name(value, prop_type)
    if prop_type == "checkbox":
        if "checkbox" in value:
            return bool(value.get("checkbox"))
        return bool(_existing_plain_value(value, False))
    if prop_type == "multi_select":
        options = value.get("multi_select")
        if isinstance(options, list):
            return options
        return _existing_plain_value(value, [])
    if prop_type == "date":
        if "date" in value:
            return value.get("date")
        return value.get("plainValue")
    if prop_type in ("created_time", "last_edited_time"):
        return value.get(prop_type) or value.get("plainValue")

    return value


def flatten_page(page: Any) -> Row:
    """
    Notion のページオブジェクト 1 件を行（内部キー -> セル）に変換する。

    セルは元のプロパティペイロードに plainValue と columnName を追加したもの。
    """
    properties = page.get("properties") if isinstance(page, dict) else None
    if not isinstance(properties, dict):
        return {}

    row: Row = {}
    for column_name, value in properties.items():
        payload = value if isinstance(value, dict) else {}
        row[parse_key(column_name)] = {
            **payload,
            "plainValue": parse_plain_value(payload.get("type"), payload),
            "columnName": column_name,
        }
    return row
