"""共通フィクスチャ"""

import json
from typing import Any, Optional

import pytest
import requests

from geolocality.features.geocoding.domain.exclusions import ExclusionTables
from geolocality.features.geocoding.services.locality_classifier import LocalityClassifier


def make_response(
    status_code: int = 200,
    body: Any = None,
    url: str = "https://us1.locationiq.com/v1/search",
    reason: Optional[str] = None,
    raw_text: Optional[str] = None,
) -> requests.Response:
    """テスト用のrequests.Responseを作成"""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.reason = reason or ("OK" if status_code < 400 else "Error")
    response.encoding = "utf-8"
    text = raw_text if raw_text is not None else json.dumps(body)
    response._content = text.encode("utf-8")
    return response


@pytest.fixture
def tables() -> ExclusionTables:
    """インド向け除外テーブル"""
    return ExclusionTables.india()


@pytest.fixture
def classifier(tables: ExclusionTables) -> LocalityClassifier:
    """デフォルトポリシーの分類器"""
    return LocalityClassifier(tables=tables)


@pytest.fixture
def response_factory():
    """make_responseをテストから使うためのフィクスチャ"""
    return make_response
