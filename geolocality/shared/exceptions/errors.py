"""カスタム例外定義"""
from typing import Optional


class GeolocalityError(Exception):
    """geolocality基底例外"""

    pass


class HTTPError(GeolocalityError):
    """HTTP関連のエラー"""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Args:
            message: エラーメッセージ
            status_code: HTTPステータスコード（レスポンスがない場合はNone）
        """
        super().__init__(message)
        self.status_code = status_code


class GeocodingError(GeolocalityError):
    """ジオコーディングエラー（通信エラー・想定外のレスポンス）"""

    pass


class AddressNotResolvableError(GeocodingError):
    """プロバイダーが住所を解決できなかった（400/404）"""

    pass


class RateLimitedError(GeocodingError):
    """プロバイダーのレート制限（429）"""

    pass


class UnauthorizedCredentialError(GeocodingError):
    """APIキーが拒否された（401/403）"""

    pass


class ConfigurationError(GeolocalityError):
    """設定エラー"""

    pass

