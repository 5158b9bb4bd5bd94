"""ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class AddressDetails:
    """プロバイダーの住所構成要素（本機能で使用するフィールドのみ）"""

    city: Optional[str] = None
    county: Optional[str] = None
    suburb: Optional[str] = None
    city_district: Optional[str] = None
    town: Optional[str] = None
    village: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "AddressDetails":
        """
        APIレスポンスの address オブジェクトから生成

        未知のフィールドは無視する。オブジェクト以外（配列・文字列など）は空として扱う。
        """
        if not isinstance(data, dict):
            return cls()

        def _text(key: str) -> Optional[str]:
            value = data.get(key)
            return value if isinstance(value, str) and value else None

        return cls(
            city=_text("city"),
            county=_text("county"),
            suburb=_text("suburb"),
            city_district=_text("city_district"),
            town=_text("town"),
            village=_text("village"),
        )


@dataclass(frozen=True)
class ProviderResult:
    """ジオコーディングAPIの検索結果1件"""

    display_name: str  # 詳細→広域の順のカンマ区切り住所
    place_id: Optional[str] = None
    address_details: AddressDetails = field(default_factory=AddressDetails)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProviderResult":
        """APIレスポンスの要素から生成"""
        place_id = data.get("place_id")
        return cls(
            display_name=str(data.get("display_name") or ""),
            place_id=str(place_id) if place_id not in (None, "") else None,
            address_details=AddressDetails.from_dict(data.get("address")),
        )


@dataclass(frozen=True)
class GeocodedLocation:
    """解決済みの所在地（呼び出し元が保存する）"""

    city: str
    address: str  # プロバイダーの display_name そのもの
    place_id: str = ""

    def to_dict(self) -> dict[str, str]:
        """APIレスポンス用の辞書に変換"""
        return {
            "city": self.city,
            "address": self.address,
            "placeId": self.place_id,
        }


class FailureKind(str, Enum):
    """解決失敗の種別"""

    INVALID_INPUT = "invalid_input"
    MISSING_CREDENTIAL = "missing_credential"
    UPSTREAM_NO_RESULTS = "upstream_no_results"
    NO_CITY_FOUND = "no_city_found"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED_CREDENTIAL = "unauthorized_credential"
    UPSTREAM_TRANSPORT_ERROR = "upstream_transport_error"

    @property
    def http_status(self) -> int:
        """呼び出し元へ返すHTTPステータス"""
        return FAILURE_HTTP_STATUS[self]


FAILURE_HTTP_STATUS: dict[FailureKind, int] = {
    FailureKind.INVALID_INPUT: 400,
    FailureKind.MISSING_CREDENTIAL: 500,
    FailureKind.UPSTREAM_NO_RESULTS: 400,
    FailureKind.NO_CITY_FOUND: 400,
    FailureKind.RATE_LIMITED: 429,
    FailureKind.UNAUTHORIZED_CREDENTIAL: 500,
    FailureKind.UPSTREAM_TRANSPORT_ERROR: 500,
}


@dataclass(frozen=True)
class ResolutionFailure:
    """解決失敗（種別とメッセージ）"""

    kind: FailureKind
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "kind": self.kind.value}


@dataclass(frozen=True)
class ResolutionResult:
    """
    住所解決の結果

    location と failure のどちらか一方のみが設定される
    """

    location: Optional[GeocodedLocation] = None
    failure: Optional[ResolutionFailure] = None

    @property
    def is_success(self) -> bool:
        return self.location is not None

    @classmethod
    def success(cls, location: GeocodedLocation) -> "ResolutionResult":
        return cls(location=location)

    @classmethod
    def fail(cls, kind: FailureKind, message: str) -> "ResolutionResult":
        return cls(failure=ResolutionFailure(kind=kind, message=message))
