"""ロギング設定"""
import logging
import re
import sys
from typing import Optional

# ロガー設定済みフラグ
_logger_configured = False

# URLのクエリ中のAPIキー（LocationIQは key=...）
_SECRET_QUERY_PATTERN = re.compile(r"(?i)([?&](?:key|api_key|token)=)[^&\s'\"]+")

REDACTED = "***"


class SecretRedactingFilter(logging.Filter):
    """
    ログメッセージ中のAPIキーをマスクするフィルター

    HTTPClientやurllib3のDEBUGログにはリクエストURLがそのまま出るため、
    ハンドラー単位で適用する（どのロガーからのレコードにも効く）。
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def redact_secrets(text: str) -> str:
    """クエリ文字列中のAPIキーの値を置き換える"""
    return _SECRET_QUERY_PATTERN.sub(rf"\g<1>{REDACTED}", text)


def setup_logging(
    level: str = "INFO",
    enable_cloud_logging: bool = False,
    project_id: Optional[str] = None,
) -> None:
    """
    ロギングを設定

    Args:
        level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_cloud_logging: Cloud Loggingを有効にするか（Cloud Run用）
        project_id: GCPプロジェクトID
    """
    global _logger_configured

    if _logger_configured:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    redacting_filter = SecretRedactingFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    console_handler.addFilter(redacting_filter)
    root_logger.addHandler(console_handler)

    if enable_cloud_logging:
        try:
            from google.cloud import logging as cloud_logging

            client = cloud_logging.Client(project=project_id)
            cloud_handler = cloud_logging.handlers.CloudLoggingHandler(client)
            cloud_handler.setLevel(log_level)
            cloud_handler.addFilter(redacting_filter)
            root_logger.addHandler(cloud_handler)

            logging.info("Cloud Logging enabled")
        except Exception as e:
            logging.warning(f"Failed to enable Cloud Logging: {e}")

    # urllib3はDEBUGでクエリ付きURLを出力する
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _logger_configured = True
    logging.info(f"Logging configured with level: {level}")


def get_logger(name: str) -> logging.Logger:
    """ロガーを取得（通常は__name__を指定）"""
    return logging.getLogger(name)
