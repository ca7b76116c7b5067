# backend/salescrm/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /api/sales エンドポイントを公開する
- UI からのクロスオリジン呼び出しを許可する（ALLOWED_URLS）
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salescrm.sales.router import router as sales_router
from salescrm.utils.config import get_env


def _allowed_origins() -> list:
    raw = get_env("ALLOWED_URLS", default="*", required=False)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - セールス一覧エンドポイント (/api/sales)
    - ヘルスチェックエンドポイント (/health)
    - Swagger UI は FastAPI 標準の /docs
    """
    app = FastAPI(title="Sales CRM Notion API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # ルーター登録
    app.include_router(sales_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
