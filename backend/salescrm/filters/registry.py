# backend/salescrm/filters/registry.py

"""
論理プロパティキーと Notion 側プロパティ（表示名・型）の対応表。

UI / フィルタで使うキーは camelCase、Notion 側はデータベース上の表示名。
このテーブルはプロセス全体で共有する静的設定であり、ユーザーデータではない。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .errors import UnsupportedPropertyError


class PropertyType(str, Enum):
    """フィルタ演算子の可否を決めるセマンティック型。"""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    STATUS = "status"
    SELECT = "select"
    NUMBER = "number"
    MULTI_SELECT = "multi_select"
    CHECKBOX = "checkbox"
    DATE = "date"
    PEOPLE = "people"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class PropertySpec:
    """レジストリの 1 エントリ。"""

    key: str
    type: PropertyType
    # Notion 上のプロパティ名。timestamp 型では None。
    notion_name: Optional[str] = None
    # timestamp 型のみ: created_time / last_edited_time
    timestamp: Optional[str] = None


PROPERTY_REGISTRY: Dict[str, PropertySpec] = {
    spec.key: spec
    for spec in (
        PropertySpec("name", PropertyType.TITLE, "Name"),
        PropertySpec("company", PropertyType.RICH_TEXT, "Company"),
        PropertySpec("status", PropertyType.STATUS, "Status"),
        PropertySpec("priority", PropertyType.SELECT, "Priority"),
        PropertySpec("estimatedValue", PropertyType.NUMBER, "Estimated value"),
        PropertySpec("tag", PropertyType.MULTI_SELECT, "Tag"),
        PropertySpec("done", PropertyType.CHECKBOX, "Done"),
        PropertySpec("followUpDate", PropertyType.DATE, "Follow Up Date"),
        PropertySpec("accountOwner", PropertyType.PEOPLE, "Account owner"),
        PropertySpec("createdTime", PropertyType.TIMESTAMP, timestamp="created_time"),
        PropertySpec("lastEditedTime", PropertyType.TIMESTAMP, timestamp="last_edited_time"),
    )
}


def get_property_spec(key: str) -> PropertySpec:
    """
    論理キーに対応する PropertySpec を返す。

    未登録のキーは黙って無視せず UnsupportedPropertyError とする。
    """
    spec = PROPERTY_REGISTRY.get(key)
    if spec is None:
        raise UnsupportedPropertyError(key)
    return spec
