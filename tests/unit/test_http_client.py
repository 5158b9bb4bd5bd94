"""HTTPクライアントのテスト"""

from unittest.mock import patch

import pytest
import requests

from geolocality.shared.exceptions.errors import HTTPError
from geolocality.shared.http.client import HTTPClient


def test_error_keeps_status_code_and_redacts_key(response_factory) -> None:
    """失敗時はステータスコードを保持し、APIキーをメッセージに残さない"""
    client = HTTPClient(timeout=3)
    response = response_factory(
        status_code=429,
        body={"error": "Rate Limited"},
        url="https://us1.locationiq.com/v1/search?key=secret-123&q=Pune",
        reason="Too Many Requests",
    )

    with patch.object(client.session, "get", return_value=response):
        with pytest.raises(HTTPError) as exc_info:
            client.get(
                "https://us1.locationiq.com/v1/search",
                params={"key": "secret-123", "q": "Pune"},
                sensitive_params=("key",),
            )

    assert exc_info.value.status_code == 429
    assert "secret-123" not in str(exc_info.value)
    assert "***" in str(exc_info.value)


def test_connection_error_has_no_status_code() -> None:
    """通信エラーではstatus_codeはNone"""
    client = HTTPClient(timeout=3)

    with patch.object(client.session, "get", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(HTTPError) as exc_info:
            client.get("https://example.invalid/search")

    assert exc_info.value.status_code is None


def test_default_session_does_not_retry() -> None:
    """デフォルトではリトライしない"""
    client = HTTPClient()
    adapter = client.session.get_adapter("https://us1.locationiq.com")

    assert adapter.max_retries.total == 0
    assert client.timeout == 10


def test_context_manager_closes_session() -> None:
    """with文でセッションをクローズ"""
    client = HTTPClient()

    with patch.object(client.session, "close") as mock_close:
        with client:
            pass

    mock_close.assert_called_once()
