"""ジオコーディング結果から「都市名」を選ぶ分類器"""

from dataclasses import dataclass, field
from typing import Optional

from ....shared.logging.config import get_logger
from ....shared.utils.text import index_ignoring_case, split_display_name, split_words
from ..domain.exclusions import ExclusionTables
from ..domain.models import AddressDetails, ProviderResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClassifierPolicy:
    """
    表示名トークンの位置に関する判定ポリシー

    末尾2トークンは州・国、末尾3トークン目より前は都市より細かい地域
    （suburb相当）とみなす。地理的な保証ではなく経験則のため調整可能にしている。
    """

    city_tail_reserve: int = 2  # 都市名として採用できない末尾トークン数
    suburb_tail_reserve: int = 3  # これより前の位置ならsuburb相当とみなす
    country_name: str = "India"  # 表示名末尾に現れる国名


@dataclass(frozen=True)
class LocalityClassifier:
    """
    ロカリティ分類器

    入力のみから結果が決まる純粋な処理（I/Oなし・内部状態なし）。
    以下の順で候補を試し、最初に有効と判定された候補を返す:

    1. address.city
    2. address.county（末尾の行政区分接尾辞を除去）
    3. address.city_district / town / village の最初の非空値
    4. display_name を末尾（国名を除く）から先頭へ走査

    suburb判定・行政区分判定はヒューリスティックであり、
    曖昧な住所では誤った都市名が選ばれうる（信頼度は返さない）。
    """

    tables: ExclusionTables
    policy: ClassifierPolicy = field(default_factory=ClassifierPolicy)

    def classify_result(self, result: ProviderResult) -> Optional[str]:
        """ProviderResultから都市名を判定"""
        return self.classify(result.address_details, split_display_name(result.display_name))

    def classify(self, details: AddressDetails, tokens: list[str]) -> Optional[str]:
        """
        都市名を判定

        Args:
            details: プロバイダーの住所構成要素
            tokens: display_name のトークン列（詳細→広域）

        Returns:
            Optional[str]: 都市名（判定できない場合はNone）
        """
        # 1. city フィールド
        if details.city and self.is_valid_city(details.city, details, tokens):
            logger.debug(f"Using address.city: {details.city!r}")
            return details.city

        # 2. county フィールド（"Pune District" -> "Pune"）
        if details.county:
            county_city = self._strip_admin_suffix(details.county.strip())
            if county_city is None:
                county_city = details.county.strip()
            if self.is_valid_city(county_city, details, tokens):
                logger.debug(f"Using county: {county_city!r}")
                return county_city

        # 3. city_district / town / village（最初の非空値のみ評価）
        fallback = details.city_district or details.town or details.village
        if fallback:
            if self._passes_name_checks(fallback, details, tokens):
                logger.debug(f"Using fallback field: {fallback!r}")
                return fallback
            logger.debug(f"Discarded fallback field: {fallback!r}")

        # 4. display_name の後方走査（末尾の国名はスキップ）
        for index in range(len(tokens) - 2, -1, -1):
            part = tokens[index]
            if not part:
                continue

            if self.tables.contains_admin_suffix(part):
                candidate = self._strip_admin_suffix(part)
                if candidate and self._passes_name_checks(candidate, details, tokens):
                    logger.debug(f"Admin term parsing: {part!r} -> {candidate!r}")
                    return candidate
                continue

            if part != self.policy.country_name and self._passes_name_checks(
                part, details, tokens
            ):
                logger.debug(f"Display name parsing: {part!r}")
                return part

        logger.debug("Could not determine city")
        return None

    def is_valid_city(self, name: str, details: AddressDetails, tokens: list[str]) -> bool:
        """
        構造化フィールド（city/county）の候補が都市名として有効か

        名前チェックに加え、表示名トークン中に存在し、
        かつ州・国の位置（末尾）より前にあることを要求する。
        """
        if not self._passes_name_checks(name, details, tokens):
            return False

        index = index_ignoring_case(tokens, name)
        return 0 <= index < len(tokens) - self.policy.city_tail_reserve

    def is_suburb_like(self, name: str, details: AddressDetails, tokens: list[str]) -> bool:
        """
        都市より細かい地域（suburb相当）かどうか

        address.suburb と一致するか、表示名トークン中で
        末尾から suburb_tail_reserve 個より前に現れる場合に真。
        """
        if not name:
            return False

        if details.suburb and name.lower() == details.suburb.lower():
            return True

        index = index_ignoring_case(tokens, name)
        return 0 <= index < len(tokens) - self.policy.suburb_tail_reserve

    def _passes_name_checks(self, name: str, details: AddressDetails, tokens: list[str]) -> bool:
        """州名・suburb相当・行政区分接尾辞のいずれにも該当しないか"""
        return (
            not self.tables.is_excluded_region(name)
            and not self.is_suburb_like(name, details, tokens)
            and not self.tables.contains_admin_suffix(name)
        )

    def _strip_admin_suffix(self, text: str) -> Optional[str]:
        """
        末尾の単語が行政区分接尾辞なら除去した残りを返す

        単語が1つしかない、または末尾が接尾辞でない場合はNone
        """
        words = split_words(text)
        if len(words) > 1 and self.tables.is_admin_suffix(words[-1]):
            return " ".join(words[:-1])
        return None
