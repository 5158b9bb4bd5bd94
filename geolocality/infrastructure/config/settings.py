"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="geolocality",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # GCP
    gcp_project_id: Optional[str] = Field(
        default=None,
        description="GCPプロジェクトID（Secret Manager・Cloud Logging使用時に必要）",
    )

    # LocationIQ
    locationiq_api_key: Optional[str] = Field(
        default=None,
        description="LocationIQ API Key（ローカル開発用）",
    )
    locationiq_api_key_secret_name: str = Field(
        default="locationiq-api-key",
        description="LocationIQ API KeyのSecret Manager名",
    )
    locationiq_base_url: str = Field(
        default="https://us1.locationiq.com/v1",
        description="LocationIQ APIのベースURL",
    )
    geocoding_timeout: float = Field(
        default=10.0,
        description="ジオコーディングのタイムアウト（秒）",
    )
    geocoding_user_agent: str = Field(
        default="geolocality/1.0",
        description="ジオコーディングのUser-Agent",
    )

    # Locality classification
    country_name: str = Field(
        default="India",
        description="表示名末尾の国名",
    )
    exclusion_region_names: Optional[str] = Field(
        default=None,
        description="都市名として扱わない州名（カンマ区切り）。未設定時はインドの州一覧",
    )
    exclusion_admin_suffixes: Optional[str] = Field(
        default=None,
        description="行政区分接尾辞（カンマ区切り）。未設定時はDistrict/Tehsil等",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    gcp_logging_enabled: bool = Field(
        default=False,
        description="Cloud Loggingを有効にするか",
    )

    # Cloud Run
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    def get_region_names(self) -> Optional[list[str]]:
        """除外州名のリストを取得（未設定時はNone）"""
        return _split_csv(self.exclusion_region_names)

    def get_admin_suffixes(self) -> Optional[list[str]]:
        """行政区分接尾辞のリストを取得（未設定時はNone）"""
        return _split_csv(self.exclusion_admin_suffixes)

    @property
    def is_development(self) -> bool:
        """開発環境かどうか"""
        return self.environment.lower() == "development"


def _split_csv(value: Optional[str]) -> Optional[list[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]
