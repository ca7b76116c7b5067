# backend/salescrm/filters/errors.py

"""
複合フィルタ処理で発生する例外。

ルーター側でこれらを 400 番台のレスポンスに変換する。
"""


class FilterError(ValueError):
    """フィルタ関連の例外の基底クラス。"""

    kind = "filter_error"


class DepthExceededError(FilterError):
    """フィルタのネストが最大深さを超えた場合の例外。"""

    kind = "depth_exceeded"

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Filter nesting exceeds max depth {max_depth}")
        self.max_depth = max_depth


class UnsupportedPropertyError(FilterError):
    """プロパティレジストリに存在しないキーが指定された場合の例外。"""

    kind = "unsupported_property"

    def __init__(self, property_key: str) -> None:
        super().__init__(f"Unsupported filter property: {property_key}")
        self.property_key = property_key


class UnsupportedOperatorError(FilterError):
    """プロパティ型と演算子の組み合わせ（または比較値）が不正な場合の例外。"""

    kind = "unsupported_operator"

    def __init__(self, property_type: str, operator: str) -> None:
        super().__init__(f"Unsupported {property_type} operator: {operator}")
        self.property_type = property_type
        self.operator = operator
