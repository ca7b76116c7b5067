# backend/salescrm/sales/router.py

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, status

from salescrm.filters.errors import FilterError
from salescrm.notion.client import NotionAuthError, NotionClientError

from .schemas import SalesQueryRequest
from .service import SalesService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sales"])

# アプリケーション全体で共有する SalesService インスタンス
_service = SalesService()


@router.get("/", summary="API 稼働確認")
def api_root() -> dict:
    return {"message": "BE API is running"}


@router.post(
    "/sales",
    response_model=List[Dict[str, Any]],
    summary="セールス一覧の取得",
    description=(
        "ソート条件と AND/OR の複合フィルタを Notion の query に変換し、"
        "先頭ページの結果をフラットな行として返す。"
    ),
)
def query_sales(request: SalesQueryRequest) -> List[Dict[str, Any]]:
    """
    セールス一覧を取得するエンドポイント。

    レスポンスは行（内部キー -> セル）の配列そのもの。

    - フィルタのネスト超過・未対応プロパティ・未対応演算子: 400
    - Notion の認証エラー / API エラー: 502
    - 予期しない例外: 500（詳細はログ側で確認）
    """
    try:
        items = _service.query_sales(request)
    except FilterError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": exc.kind, "message": str(exc)},
        ) from exc
    except NotionAuthError as exc:
        logger.error("Notion authentication failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Notion rejected the integration credentials.",
        ) from exc
    except NotionClientError as exc:
        logger.error("Notion query failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch sales from Notion.",
        ) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while querying sales.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch sales.",
        ) from exc

    return items
