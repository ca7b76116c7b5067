# backend/salescrm/sales/config.py

"""
/api/sales のクエリ設定（フィルタ最大深さ・ページサイズ）。
"""

from dataclasses import dataclass
from functools import lru_cache

from salescrm.utils.config import get_env_int

DEFAULT_MAX_FILTER_DEPTH = 2
DEFAULT_PAGE_SIZE = 100


class InvalidConfigError(RuntimeError):
    """設定値が不正な場合の例外。"""


@dataclass(frozen=True)
class SalesQueryConfig:
    """セールス一覧クエリ用の設定値コンテナ。"""

    max_filter_depth: int = DEFAULT_MAX_FILTER_DEPTH
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.max_filter_depth < 1:
            raise InvalidConfigError(
                f"max_filter_depth must be a positive integer, got {self.max_filter_depth}."
            )
        if not 1 <= self.page_size <= 100:
            raise InvalidConfigError(
                f"page_size must be between 1 and 100, got {self.page_size}."
            )


@lru_cache()
def get_sales_query_config() -> SalesQueryConfig:
    """
    環境変数からクエリ設定を読み込む。

    任意:
      - MAX_FILTER_DEPTH (デフォルト: 2。未設定・数値でない場合もデフォルト)
      - SALES_PAGE_SIZE  (デフォルト: 100。Notion の上限も 100)

    0 以下の値は InvalidConfigError とする。
    """
    return SalesQueryConfig(
        max_filter_depth=get_env_int("MAX_FILTER_DEPTH", DEFAULT_MAX_FILTER_DEPTH),
        page_size=get_env_int("SALES_PAGE_SIZE", DEFAULT_PAGE_SIZE),
    )
