# backend/salescrm/filters/validation.py

"""
複合フィルタのネスト深さチェック。
"""

from .errors import DepthExceededError
from .schemas import FilterNode, is_group


def validate_compound_filter_depth(node: FilterNode, max_depth: int) -> None:
    """
    フィルタツリーを前順で走査し、max_depth より深いグループがあれば例外を投げる。

    - ルートのグループが深さ 1、子グループは親 + 1
    - 条件ノード自体は深さチェックの対象外
    - 最初に見つかった深すぎるグループで即座に DepthExceededError を投げる
    """

    def walk(current: FilterNode, depth: int) -> None:
        if not is_group(current):
            return
        if depth > max_depth:
            raise DepthExceededError(max_depth)
        for child in current.children:
            walk(child, depth + 1)

    walk(node, 1)
