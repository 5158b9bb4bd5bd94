"""Cloud Run用HTTPサーバー（FastAPI）"""
from functools import lru_cache
from typing import Any

from fastapi import Body, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .features.geocoding.services.factory import create_geocoding_service
from .features.geocoding.services.geocoding_service import GeocodingService
from .infrastructure.config.settings import Settings
from .shared.logging.config import get_logger, setup_logging

# 設定を読み込み
settings = Settings()

# ロギングを設定
setup_logging(
    level=settings.log_level,
    enable_cloud_logging=settings.gcp_logging_enabled,
    project_id=settings.gcp_project_id,
)
logger = get_logger(__name__)

app = FastAPI(
    title="住所ロカリティ解決サービス",
    description="自由入力の住所をLocationIQでジオコーディングし、都市名・正規化住所・Place IDを返す",
    version="1.0.0",
)


@lru_cache(maxsize=1)
def get_geocoding_service() -> GeocodingService:
    """プロセス内で共有するGeocodingService（状態を持たない）"""
    return create_geocoding_service(settings)


def _extract_address(payload: Any) -> Any:
    """
    リクエストボディから location.address を取り出す

    イベント作成・更新時と同じ {"location": {"address": ...}} の形を想定する。
    ボディなし・location がオブジェクトでない場合はNone（サービス側でinvalid_inputになる）。
    """
    if not isinstance(payload, dict):
        return None

    location = payload.get("location")
    if not isinstance(location, dict):
        return None

    return location.get("address")


@app.on_event("startup")
async def startup_event() -> None:
    """起動時の処理"""
    logger.info("Application starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Project: {settings.project_name}")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """シャットダウン時の処理"""
    logger.info("Application shutting down")

    # 作成済みのサービスがあればHTTPセッションを閉じる
    if get_geocoding_service.cache_info().currsize:
        get_geocoding_service().close()
        get_geocoding_service.cache_clear()


@app.get("/")
async def root() -> dict[str, Any]:
    """ルートエンドポイント"""
    return {
        "service": "住所ロカリティ解決サービス",
        "version": "1.0.0",
        "status": "running",
        "environment": settings.environment,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント"""
    return {"status": "healthy"}


@app.post("/geocode")
def geocode(
    payload: Any = Body(None),
    service: GeocodingService = Depends(get_geocoding_service),
) -> JSONResponse:
    """
    住所から都市名・正規化住所・Place IDを解決

    ブロッキングI/Oのため同期関数（スレッドプールで実行）。

    Returns:
        JSONResponse: 成功時 {"city", "address", "placeId"}、
        失敗時 {"error", "kind"}（ステータスは失敗種別に応じる）
    """
    address = _extract_address(payload)
    result = service.resolve(address)

    if result.location is not None:
        return JSONResponse(status_code=200, content=result.location.to_dict())

    failure = result.failure
    logger.info(f"Geocode request failed: kind={failure.kind.value}")
    return JSONResponse(status_code=failure.kind.http_status, content=failure.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """グローバル例外ハンドラー"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "detail": str(exc)},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
