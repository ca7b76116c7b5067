# backend/salescrm/sales/service.py

"""
UI からのソート・フィルタ要求を Notion の query に変換するサービス層。

- ソート条件の変換
- 複合フィルタの深さチェック → Notion フィルタへの変換
- Notion のページオブジェクト → フラットな行への変換
"""

import json
import logging
from typing import Any, Dict, List, Optional

from salescrm.filters.notion_filter import is_empty_group, to_notion_filter
from salescrm.filters.schemas import FilterNode
from salescrm.filters.validation import validate_compound_filter_depth
from salescrm.notion.client import NotionClient
from salescrm.notion.parser import flatten_page

from .config import SalesQueryConfig, get_sales_query_config
from .schemas import SalesQueryRequest, SortDirection, SortSpec

logger = logging.getLogger(__name__)


def build_notion_sorts(sorts: List[SortSpec]) -> Optional[List[Dict[str, Any]]]:
    """
    ソート条件を Notion の sorts 形式に変換する。空の場合は None。
    """
    notion_sorts = [
        {
            "property": sort.property.replace("_", " "),
            "direction": (
                SortDirection.ASCENDING.value
                if sort.direction == SortDirection.ASCENDING
                else SortDirection.DESCENDING.value
            ),
        }
        for sort in sorts
    ]
    return notion_sorts or None


def build_notion_filter(node: Optional[FilterNode], max_depth: int) -> Optional[Dict[str, Any]]:
    """
    複合フィルタを検証し、Notion の filter に変換する。

    - ネストが深すぎる場合は DepthExceededError
    - None / 空グループはフィルタ無し（None）として扱い、変換しない
    """
    if node is None:
        return None

    validate_compound_filter_depth(node, max_depth)

    if is_empty_group(node):
        return None
    return to_notion_filter(node)


class SalesService:
    """
    NotionClient を利用して、セールス一覧をフラットな行として返すサービス。
    """

    def __init__(
        self,
        client: Optional[NotionClient] = None,
        config: Optional[SalesQueryConfig] = None,
    ) -> None:
        self._client = client
        self._config = config

    @property
    def client(self) -> NotionClient:
        # NotionClient は生成時に環境変数を読むため、初回利用時に生成する
        if self._client is None:
            self._client = NotionClient()
        return self._client

    @property
    def config(self) -> SalesQueryConfig:
        if self._config is None:
            self._config = get_sales_query_config()
        return self._config

    def query_sales(self, request: SalesQueryRequest) -> List[Dict[str, Any]]:
        """
        ソート・フィルタを適用してセールス一覧を取得する。

        先頭ページ（page_size 件）のみ取得し、ページングは行わない。
        """
        sorts = build_notion_sorts(request.sorts)
        notion_filter = build_notion_filter(request.filter, self.config.max_filter_depth)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Notion filter: %s", json.dumps(notion_filter, ensure_ascii=False))

        pages = self.client.query_data_source(
            sorts=sorts,
            filter=notion_filter,
            page_size=self.config.page_size,
        )
        return [flatten_page(page) for page in pages]
