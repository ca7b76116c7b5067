# backend/salescrm/notion/client.py

"""
Notion API との通信を担当するクライアントモジュール。
"""

from typing import Any, Dict, List, Optional

import httpx

from .config import NotionConfig, get_notion_config


class NotionClientError(RuntimeError):
    """Notion クライアント全般の例外。"""


class NotionAuthError(NotionClientError):
    """認証・権限関連のエラー。"""


class NotionAPIError(NotionClientError):
    """その他 Notion API 呼び出し時のエラー。"""


class NotionClient:
    """
    Notion API の薄いラッパークライアント。

    - データソースの query（先頭ページのみ）
    """

    def __init__(self, config: Optional[NotionConfig] = None, timeout: float = 10.0) -> None:
        self.config = config or get_notion_config()
        self._timeout = timeout

    def _build_headers(self) -> Dict[str, str]:
        """
        Notion API 呼び出しに必要なヘッダーを構築。
        """
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Notion-Version": self.config.api_version,
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        """
        HTTP レスポンスコードに応じて適切な例外を投げる。
        """
        if response.status_code == 401:
            raise NotionAuthError("Unauthorized. Check NOTION_TOKEN.")
        if response.status_code == 403:
            raise NotionAuthError("Forbidden. Check Notion integration permissions.")
        if response.status_code >= 400:
            raise NotionAPIError(
                f"Notion API error: {response.status_code} {response.text}"
            )

    def query_data_source(
        self,
        *,
        sorts: Optional[List[Dict[str, Any]]] = None,
        filter: Optional[Dict[str, Any]] = None,
        page_size: int = 100,
    ) -> List[Dict[str, Any]]:
        """
        データソースを query し、先頭ページのページオブジェクトを返す。

        sorts / filter が None の場合はリクエストボディに含めない。
        返り値は Notion API の生のページオブジェクトのリスト。
        行へのフラット化は上位レイヤー（parser.py）で行う。
        """
        url = f"{self.config.api_base_url}/data_sources/{self.config.data_source_id}/query"

        payload: Dict[str, Any] = {"page_size": page_size}
        if sorts:
            payload["sorts"] = sorts
        if filter:
            payload["filter"] = filter

        try:
            response = httpx.post(
                url,
                headers=self._build_headers(),
                json=payload,
                timeout=self._timeout,
            )
        except httpx.RequestError as exc:
            raise NotionClientError(f"Failed to call Notion API: {exc}") from exc

        self._raise_for_status(response)

        data = response.json()
        if not isinstance(data, dict):
            raise NotionAPIError("Unexpected Notion API response format: body is not an object.")

        results = data.get("results", [])
        if not isinstance(results, list):
            raise NotionAPIError("Unexpected Notion API response format: 'results' is not a list.")

        return results
