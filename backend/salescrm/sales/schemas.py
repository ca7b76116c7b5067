# backend/salescrm/sales/schemas.py

"""
/api/sales 用の Pydantic スキーマ定義。

- Request: ソート条件と複合フィルタ
- Response: フラット化した行の配列（モデル無し、そのまま返す）
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from salescrm.filters.schemas import FilterNode


class SortDirection(str, Enum):
    """ソート方向。"""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class SortSpec(BaseModel):
    """
    ソート条件 1 件。

    direction が未指定・未知の値の場合は descending として扱う。
    """

    property: str = Field(..., description="プロパティ名。'_' は空白に置き換えて Notion に渡す。")
    direction: SortDirection = Field(SortDirection.DESCENDING, description="ascending / descending")

    @field_validator("direction", mode="before")
    @classmethod
    def _default_direction(cls, value: Any) -> SortDirection:
        if value == SortDirection.ASCENDING.value:
            return SortDirection.ASCENDING
        return SortDirection.DESCENDING


class SalesQueryRequest(BaseModel):
    """/api/sales のリクエストボディ。"""

    sorts: List[SortSpec] = Field(default_factory=list)
    filter: Optional[FilterNode] = Field(
        None,
        description="AND/OR の複合フィルタ。null または {\"and\": []} はフィルタ無し。",
    )

    @field_validator("sorts", mode="before")
    @classmethod
    def _none_sorts_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value
