"""都市名分類器のテスト"""

from typing import Optional

import pytest

from geolocality.features.geocoding.domain.exclusions import ExclusionTables
from geolocality.features.geocoding.domain.models import AddressDetails, ProviderResult
from geolocality.features.geocoding.services.locality_classifier import (
    ClassifierPolicy,
    LocalityClassifier,
)
from geolocality.shared.utils.text import split_display_name


def _classify(
    classifier: LocalityClassifier, display_name: str, **details: str
) -> Optional[str]:
    return classifier.classify(AddressDetails(**details), split_display_name(display_name))


def test_suburb_city_field_falls_back_to_display_scan(classifier: LocalityClassifier) -> None:
    """suburbと同じcityはスキップされ、表示名から都市名を選ぶ"""
    city = _classify(
        classifier,
        "Bandra, Mumbai, Maharashtra, India",
        city="Bandra",
        suburb="Bandra",
    )
    assert city == "Mumbai"


def test_county_with_district_suffix_is_stripped(classifier: LocalityClassifier) -> None:
    """county の "District" を除去して都市名とする"""
    city = _classify(
        classifier,
        "Kothrud, Pune, Maharashtra, India",
        county="Pune District",
    )
    assert city == "Pune"


def test_display_token_with_tahsil_is_stripped(classifier: LocalityClassifier) -> None:
    """表示名の "Nashik Tahsil" から "Nashik" を取り出す"""
    city = _classify(classifier, "Gangapur Road, Nashik Tahsil, Maharashtra, India")
    assert city == "Nashik"


def test_city_field_used_when_valid(classifier: LocalityClassifier) -> None:
    """有効なcityはそのまま採用"""
    city = _classify(
        classifier,
        "Bandra West, Mumbai, Maharashtra, India",
        city="Mumbai",
        county="Mumbai Suburban",
    )
    assert city == "Mumbai"


@pytest.mark.parametrize("state", ["Goa", "goa", "GOA"])
def test_city_field_with_state_name_is_rejected(
    classifier: LocalityClassifier, state: str
) -> None:
    """州名のcityは採用しない（大文字小文字を問わない）"""
    city = _classify(classifier, "Panaji, Goa, India", city=state)
    assert city == "Panaji"


def test_city_field_missing_from_display_name_is_rejected(
    classifier: LocalityClassifier,
) -> None:
    """表示名に現れないcityは採用しない"""
    city = _classify(classifier, "Colaba, Mumbai, Maharashtra, India", city="Bombay")
    assert city == "Mumbai"


def test_city_field_in_state_position_is_rejected(classifier: LocalityClassifier) -> None:
    """末尾2トークン（州・国の位置）にあるcityは採用しない"""
    city = _classify(
        classifier,
        "Connaught Place, New Delhi, Delhi, India",
        city="Delhi",
        town="New Delhi",
    )
    assert city == "New Delhi"


def test_town_used_without_position_check(classifier: LocalityClassifier) -> None:
    """town等は位置チェックなしで採用される"""
    city = _classify(classifier, "Beach Road, Raigad, Maharashtra, India", town="Alibag")
    assert city == "Alibag"


def test_only_first_fallback_field_is_considered(classifier: LocalityClassifier) -> None:
    """最初の非空フィールドが無効でも後続フィールドは試さない"""
    city = _classify(
        classifier,
        "Andheri, Mumbai Suburban District, Maharashtra, India",
        city_district="Andheri",
        suburb="Andheri",
        town="Mumbai",
    )
    assert city == "Mumbai Suburban"


def test_county_single_suffix_word_is_not_used(classifier: LocalityClassifier) -> None:
    """接尾辞のみのcountyは除去せず、無効として扱う"""
    city = _classify(classifier, "Shimla, Himachal Pradesh, India", county="District")
    assert city == "Shimla"


def test_admin_candidate_that_is_suburb_keeps_scanning(
    classifier: LocalityClassifier,
) -> None:
    """接尾辞除去後の候補がsuburbなら採用しない"""
    city = _classify(
        classifier,
        "Kothrud, Haveli Taluka, Maharashtra, India",
        suburb="Haveli",
    )
    assert city is None


@pytest.mark.parametrize(
    "display_name",
    [
        "Maharashtra, India",
        "India",
        "India, India",
        "",
    ],
)
def test_undetermined(classifier: LocalityClassifier, display_name: str) -> None:
    """候補がない場合はNone"""
    assert _classify(classifier, display_name) is None


def test_suburb_like_by_position(classifier: LocalityClassifier) -> None:
    """末尾から3つより前のトークンはsuburb相当"""
    tokens = split_display_name("Hill Road, Bandra West, Mumbai, Maharashtra, India")
    details = AddressDetails()

    assert classifier.is_suburb_like("Bandra West", details, tokens)
    assert classifier.is_suburb_like("hill road", details, tokens)
    assert not classifier.is_suburb_like("Mumbai", details, tokens)
    assert not classifier.is_suburb_like("", details, tokens)


def test_custom_exclusion_tables() -> None:
    """注入した除外テーブルが使われる"""
    display_name = "Mysuru Taluk, Karnataka, India"

    default = LocalityClassifier(tables=ExclusionTables.india())
    custom = LocalityClassifier(tables=ExclusionTables.build(["Karnataka"], ["District"]))

    assert _classify(default, display_name) == "Mysuru"
    assert _classify(custom, display_name) == "Mysuru Taluk"


def test_custom_policy_suburb_reserve(tables: ExclusionTables) -> None:
    """suburb判定の位置はポリシーで変更できる"""
    display_name = "Kothrud, Pune, Maharashtra, India"
    strict = LocalityClassifier(tables=tables, policy=ClassifierPolicy(suburb_tail_reserve=2))

    assert _classify(strict, display_name, city="Pune") is None


def test_classify_is_idempotent(classifier: LocalityClassifier) -> None:
    """同じ入力には常に同じ結果"""
    result = ProviderResult(
        display_name="Bandra, Mumbai, Maharashtra, India",
        address_details=AddressDetails(city="Bandra", suburb="Bandra"),
    )

    first = classifier.classify_result(result)
    second = classifier.classify_result(result)

    assert first == second == "Mumbai"
