"""設定からGeocodingServiceを組み立てる（依存性注入）"""

from typing import Optional

from ....infrastructure.config.settings import Settings
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ..domain.exclusions import ExclusionTables
from ..providers.locationiq_geocoder import LocationIQGeocoder
from .geocoding_service import GeocodingService
from .locality_classifier import ClassifierPolicy, LocalityClassifier

logger = get_logger(__name__)


def build_exclusion_tables(settings: Settings) -> ExclusionTables:
    """除外テーブルを構築（設定で上書きされていなければインドのデフォルト）"""
    return ExclusionTables.india(
        region_names=settings.get_region_names(),
        admin_suffixes=settings.get_admin_suffixes(),
    )


def resolve_api_key(settings: Settings) -> Optional[str]:
    """
    LocationIQ APIキーを取得

    直接設定されていればそれを使い、開発環境以外ではSecret Managerを参照する。
    取得できない場合はNone（リクエスト時にmissing_credentialとなる）。
    """
    if settings.locationiq_api_key:
        return settings.locationiq_api_key

    if settings.is_development or not settings.gcp_project_id:
        logger.warning("LocationIQ API key is not configured")
        return None

    from ....infrastructure.gcp.secret_manager import SecretManagerClient

    secret_manager = SecretManagerClient(settings.gcp_project_id)
    return secret_manager.get_secret_or_none(settings.locationiq_api_key_secret_name)


def create_geocoding_service(
    settings: Settings,
    http_client: Optional[HTTPClient] = None,
) -> GeocodingService:
    """
    GeocodingServiceを作成

    Args:
        settings: アプリケーション設定
        http_client: HTTPクライアント（省略時は設定から作成）

    Returns:
        GeocodingService: 住所解決サービス
    """
    if http_client is None:
        http_client = HTTPClient(
            timeout=settings.geocoding_timeout,
            max_retries=0,
            user_agent=settings.geocoding_user_agent,
        )

    geocoder = LocationIQGeocoder(http_client, base_url=settings.locationiq_base_url)
    classifier = LocalityClassifier(
        tables=build_exclusion_tables(settings),
        policy=ClassifierPolicy(country_name=settings.country_name),
    )

    return GeocodingService(
        geocoder=geocoder,
        classifier=classifier,
        api_key=resolve_api_key(settings),
    )
