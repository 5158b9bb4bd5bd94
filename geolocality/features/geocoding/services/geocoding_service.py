"""住所→都市名 解決サービス"""

from typing import Any, Optional

from ....shared.exceptions.errors import (
    AddressNotResolvableError,
    GeocodingError,
    RateLimitedError,
    UnauthorizedCredentialError,
)
from ....shared.logging.config import get_logger
from ..domain.models import FailureKind, GeocodedLocation, ResolutionResult
from ..providers.locationiq_geocoder import LocationIQGeocoder
from .locality_classifier import LocalityClassifier

logger = get_logger(__name__)

MESSAGE_INVALID_INPUT = "Provide a valid address in location.address"
MESSAGE_MISSING_CREDENTIAL = "LocationIQ API key is missing from environment"
MESSAGE_NO_RESULTS = (
    "Unable to geocode the provided address. Please check the address and try again."
)
MESSAGE_NO_CITY = (
    "Could not determine city from the provided address. Please include a clear city name."
)
MESSAGE_RATE_LIMITED = "Rate limit exceeded. Please try again later."
MESSAGE_UNAUTHORIZED = "Invalid LocationIQ API key. Contact the administrator."


class GeocodingService:
    """
    住所解決サービス

    入力検証 → LocationIQ呼び出し（1回のみ・リトライなし） → 都市名判定 の順に処理し、
    結果は常にResolutionResultとして返す（例外は外に出さない）。
    呼び出し間で共有する可変状態はない。
    """

    def __init__(
        self,
        geocoder: LocationIQGeocoder,
        classifier: LocalityClassifier,
        api_key: Optional[str] = None,
    ) -> None:
        """
        Args:
            geocoder: ジオコーディングプロバイダー
            classifier: 都市名分類器
            api_key: デフォルトのLocationIQ APIキー
        """
        self.geocoder = geocoder
        self.classifier = classifier
        self.api_key = api_key

        logger.info(f"GeocodingService initialized: api_key_configured={bool(api_key)}")

    def resolve(self, raw_address: Any, api_key: Optional[str] = None) -> ResolutionResult:
        """
        住所から都市名・正規化住所・Place IDを解決

        Args:
            raw_address: 住所文字列（呼び出し元の入力そのもの）
            api_key: リクエスト単位のAPIキー（省略時はサービスのデフォルト）

        Returns:
            ResolutionResult: 成功時はlocation、失敗時はfailureを保持
        """
        if not isinstance(raw_address, str) or not raw_address.strip():
            logger.info("Invalid address input")
            return ResolutionResult.fail(FailureKind.INVALID_INPUT, MESSAGE_INVALID_INPUT)

        key = api_key or self.api_key
        if not key:
            logger.error("Missing LocationIQ API key")
            return ResolutionResult.fail(
                FailureKind.MISSING_CREDENTIAL, MESSAGE_MISSING_CREDENTIAL
            )

        address = raw_address.strip()

        try:
            results = self.geocoder.search(address, key)
        except AddressNotResolvableError as e:
            logger.warning(f"Address not resolvable: {address!r} ({e})")
            return ResolutionResult.fail(FailureKind.UPSTREAM_NO_RESULTS, MESSAGE_NO_RESULTS)
        except RateLimitedError as e:
            logger.warning(f"Rate limited by provider: {e}")
            return ResolutionResult.fail(FailureKind.RATE_LIMITED, MESSAGE_RATE_LIMITED)
        except UnauthorizedCredentialError as e:
            logger.error(f"Provider rejected credential: {e}")
            return ResolutionResult.fail(
                FailureKind.UNAUTHORIZED_CREDENTIAL, MESSAGE_UNAUTHORIZED
            )
        except GeocodingError as e:
            logger.error(f"Geocoding failed for {address!r}: {e}")
            return ResolutionResult.fail(
                FailureKind.UPSTREAM_TRANSPORT_ERROR, f"Failed to geocode address: {e}"
            )

        if not results:
            logger.info(f"No results for address: {address!r}")
            return ResolutionResult.fail(FailureKind.UPSTREAM_NO_RESULTS, MESSAGE_NO_RESULTS)

        result = results[0]
        city = self.classifier.classify_result(result)

        if not city:
            logger.info(f"Could not determine city: {result.display_name!r}")
            return ResolutionResult.fail(FailureKind.NO_CITY_FOUND, MESSAGE_NO_CITY)

        location = GeocodedLocation(
            city=city,
            address=result.display_name,
            place_id=result.place_id or "",
        )

        logger.info(f"Resolved city {city!r} for address {result.display_name!r}")
        return ResolutionResult.success(location)

    def close(self) -> None:
        """プロバイダーのHTTPセッションをクローズ"""
        self.geocoder.close()
