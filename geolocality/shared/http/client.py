"""HTTPクライアント（タイムアウト付き・リトライは明示的に設定した場合のみ）"""

from typing import Any, Iterable, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions.errors import HTTPError
from ..logging.config import REDACTED, get_logger

logger = get_logger(__name__)


class HTTPClient:
    """
    HTTPクライアント

    Features:
    - タイムアウト設定（必須）
    - リトライ設定（デフォルトは0回。4xxは対象外）
    - セッション管理
    - エラーメッセージ中の機密パラメータのマスク
    """

    def __init__(
        self,
        timeout: float = 10,
        max_retries: int = 0,
        backoff_factor: float = 0.5,
        status_forcelist: tuple[int, ...] = (500, 502, 503, 504),
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            max_retries: 最大リトライ回数
            backoff_factor: バックオフ係数
            status_forcelist: リトライ対象のステータスコード
            user_agent: User-Agentヘッダー
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor
        self.status_forcelist = status_forcelist
        self.user_agent = user_agent or "geolocality/1.0"

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """セッションを作成"""
        session = requests.Session()

        # 上限到達時は例外ではなくレスポンスを返し、raise_for_statusで判定する
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=self.status_forcelist,
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({"User-Agent": self.user_agent})

        return session

    def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        sensitive_params: Iterable[str] = (),
    ) -> requests.Response:
        """
        GETリクエスト

        Args:
            url: リクエストURL
            params: クエリパラメータ（URLエンコードはrequestsが行う）
            headers: 追加ヘッダー
            sensitive_params: エラーメッセージでマスクするパラメータ名

        Returns:
            レスポンスオブジェクト

        Raises:
            HTTPError: リクエスト失敗時（status_codeにステータスを保持）
        """
        try:
            logger.debug(f"GET request to {url}")
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )

            response.raise_for_status()
            logger.debug(f"GET request successful: {url} (status={response.status_code})")
            return response

        except requests.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            message = self._redact(str(e), params, sensitive_params)
            logger.error(f"GET request failed: {url} - {message}")
            raise HTTPError(f"Failed to GET {url}: {message}", status_code=status_code) from e

    @staticmethod
    def _redact(
        message: str,
        params: Optional[dict[str, Any]],
        sensitive_params: Iterable[str],
    ) -> str:
        """機密パラメータの値をメッセージから除去"""
        if not params:
            return message

        for name in sensitive_params:
            value = params.get(name)
            if value:
                message = message.replace(str(value), REDACTED)
                message = message.replace(requests.utils.quote(str(value), safe=""), REDACTED)

        return message

    def close(self) -> None:
        """セッションをクローズ"""
        if self.session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
