"""LocationIQ Geocoding API実装"""
from typing import Any

from ....shared.exceptions.errors import (
    AddressNotResolvableError,
    GeocodingError,
    HTTPError,
    RateLimitedError,
    UnauthorizedCredentialError,
)
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ..domain.models import ProviderResult

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://us1.locationiq.com/v1"


class LocationIQGeocoder:
    """LocationIQ Forward Geocoding（/search）クライアント"""

    def __init__(self, http_client: HTTPClient, base_url: str = DEFAULT_BASE_URL) -> None:
        """
        Args:
            http_client: HTTPクライアント（タイムアウト設定済み・リトライなし）
            base_url: APIのベースURL
        """
        self.http_client = http_client
        self.search_url = f"{base_url.rstrip('/')}/search"
        logger.info(f"LocationIQGeocoder initialized: {self.search_url}")

    def close(self) -> None:
        """HTTPセッションをクローズ"""
        self.http_client.close()

    def search(self, query: str, api_key: str) -> list[ProviderResult]:
        """
        住所を検索（1回のGETリクエストのみ）

        Args:
            query: 住所文字列（前後の空白除去済み）
            api_key: LocationIQ APIキー

        Returns:
            list[ProviderResult]: 検索結果（最大1件）

        Raises:
            AddressNotResolvableError: 400/404
            RateLimitedError: 429
            UnauthorizedCredentialError: 401/403
            GeocodingError: 通信エラー・その他のステータス・不正なレスポンス
        """
        params = {
            "key": api_key,
            "q": query,
            "format": "json",
            "limit": 1,
            "normalizeaddress": 1,
            "addressdetails": 1,
        }

        logger.debug(f"Geocoding address: {query}")

        try:
            response = self.http_client.get(
                self.search_url,
                params=params,
                sensitive_params=("key",),
            )
        except HTTPError as e:
            raise self._translate_error(e) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise GeocodingError(f"Invalid JSON response from LocationIQ: {e}") from e

        results = self._parse_results(payload)
        logger.debug(f"LocationIQ returned {len(results)} result(s) for: {query}")
        return results

    @staticmethod
    def _translate_error(error: HTTPError) -> GeocodingError:
        """HTTPエラーをステータスコードに応じたジオコーディング例外に変換"""
        status = error.status_code

        if status in (400, 404):
            return AddressNotResolvableError(f"LocationIQ could not resolve address (status={status})")
        if status == 429:
            return RateLimitedError("LocationIQ rate limit exceeded")
        if status in (401, 403):
            return UnauthorizedCredentialError(f"LocationIQ rejected the API key (status={status})")

        return GeocodingError(f"LocationIQ request failed: {error}")

    @staticmethod
    def _parse_results(payload: Any) -> list[ProviderResult]:
        """レスポンス（JSON配列）をProviderResultのリストに変換"""
        if payload is None:
            return []

        if not isinstance(payload, list):
            raise GeocodingError(
                f"Unexpected LocationIQ response type: {type(payload).__name__}"
            )

        return [ProviderResult.from_dict(item) for item in payload if isinstance(item, dict)]
