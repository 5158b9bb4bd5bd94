"""都市名判定から除外する地名・行政区分接尾辞"""
from dataclasses import dataclass
from typing import Iterable, Optional

# インドの州名（都市名として扱わない）
INDIAN_STATES: tuple[str, ...] = (
    "Andhra Pradesh",
    "Arunachal Pradesh",
    "Assam",
    "Bihar",
    "Chhattisgarh",
    "Goa",
    "Gujarat",
    "Haryana",
    "Himachal Pradesh",
    "Jharkhand",
    "Karnataka",
    "Kerala",
    "Madhya Pradesh",
    "Maharashtra",
    "Manipur",
    "Meghalaya",
    "Mizoram",
    "Nagaland",
    "Odisha",
    "Punjab",
    "Rajasthan",
    "Sikkim",
    "Tamil Nadu",
    "Telangana",
    "Tripura",
    "Uttar Pradesh",
    "Uttarakhand",
    "West Bengal",
)

# 行政区分を表す接尾辞（"Pune District" など）
INDIAN_ADMIN_SUFFIXES: tuple[str, ...] = (
    "Tahsil",
    "Tehsil",
    "District",
    "Taluk",
    "Taluka",
    "Mandal",
)


@dataclass(frozen=True)
class ExclusionTables:
    """
    除外テーブル（起動時に一度だけ構築し、以降は変更しない）

    比較はすべて大文字小文字を無視する。保持する値は小文字に正規化済み。
    """

    region_names: frozenset[str]
    admin_suffixes: frozenset[str]

    @classmethod
    def build(
        cls,
        region_names: Iterable[str],
        admin_suffixes: Iterable[str],
    ) -> "ExclusionTables":
        """任意の文字列集合から構築（空白除去・小文字化）"""
        return cls(
            region_names=frozenset(n.strip().lower() for n in region_names if n.strip()),
            admin_suffixes=frozenset(s.strip().lower() for s in admin_suffixes if s.strip()),
        )

    @classmethod
    def india(
        cls,
        region_names: Optional[Iterable[str]] = None,
        admin_suffixes: Optional[Iterable[str]] = None,
    ) -> "ExclusionTables":
        """インド向けのデフォルト（引数で個別に上書き可能）"""
        return cls.build(
            region_names if region_names is not None else INDIAN_STATES,
            admin_suffixes if admin_suffixes is not None else INDIAN_ADMIN_SUFFIXES,
        )

    def is_excluded_region(self, name: str) -> bool:
        """州名などの広域地名かどうか"""
        return name.strip().lower() in self.region_names

    def contains_admin_suffix(self, name: str) -> bool:
        """行政区分接尾辞を部分文字列として含むかどうか"""
        name_lower = name.lower()
        return any(suffix in name_lower for suffix in self.admin_suffixes)

    def is_admin_suffix(self, word: str) -> bool:
        """単語そのものが行政区分接尾辞かどうか"""
        return word.lower() in self.admin_suffixes
