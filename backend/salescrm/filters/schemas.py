# backend/salescrm/filters/schemas.py

"""
複合フィルタ（AND/OR ツリー）のスキーマ定義。

UI から送られてくる JSON は次の 3 種類のノードのいずれか:

- 条件ノード:   {"property": "company", "filterOperator": "contains", "value": "reach"}
- AND グループ: {"and": [<ノード>, ...]}
- OR グループ:  {"or": [<ノード>, ...]}

ノード種別は "and" / "or" キーの有無で判定する。"and" を先に判定し、
グループは余分なキーを許可しないため、"and" と "or" を両方持つ入力は
バリデーションエラーになる。
"""

from __future__ import annotations

from typing import Annotated, Any, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
)


class FilterCondition(BaseModel):
    """プロパティ 1 つに対する条件（ツリーの葉）。"""

    model_config = ConfigDict(populate_by_name=True)

    property: str = Field(..., description="論理プロパティキー（例: name, estimatedValue）")
    filter_operator: str = Field(
        ...,
        alias="filterOperator",
        description="演算子（例: is, contains, <=, is before）",
    )
    value: Optional[Any] = Field(
        None,
        description="比較値。is empty / is not empty では省略可能。",
    )


class AndGroup(BaseModel):
    """子ノードすべてを満たす場合に一致するグループ。"""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    and_: List["FilterNode"] = Field(..., alias="and")

    @property
    def children(self) -> List["FilterNode"]:
        return self.and_


class OrGroup(BaseModel):
    """子ノードのいずれかを満たす場合に一致するグループ。"""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    or_: List["FilterNode"] = Field(..., alias="or")

    @property
    def children(self) -> List["FilterNode"]:
        return self.or_


FilterGroup = Union[AndGroup, OrGroup]


def _node_kind(value: Any) -> str:
    """生の dict / モデルインスタンスからノード種別タグを返す。"""
    if isinstance(value, dict):
        if "and" in value or "and_" in value:
            return "and"
        if "or" in value or "or_" in value:
            return "or"
        return "condition"
    if isinstance(value, AndGroup):
        return "and"
    if isinstance(value, OrGroup):
        return "or"
    return "condition"


FilterNode = Annotated[
    Union[
        Annotated[AndGroup, Tag("and")],
        Annotated[OrGroup, Tag("or")],
        Annotated[FilterCondition, Tag("condition")],
    ],
    Discriminator(_node_kind),
]

AndGroup.model_rebuild()
OrGroup.model_rebuild()

_filter_node_adapter: TypeAdapter = TypeAdapter(FilterNode)


def parse_filter_node(data: Any) -> Union[AndGroup, OrGroup, FilterCondition]:
    """
    dict 形式のフィルタを FilterNode モデルに変換する。

    主にテストやサービス層の直接呼び出し用。
    """
    return _filter_node_adapter.validate_python(data)


def is_group(node: Any) -> bool:
    """ノードが AND/OR グループかどうか。"""
    return isinstance(node, (AndGroup, OrGroup))
