"""CLIエントリーポイント"""
import argparse
import json
import sys

from .features.geocoding.services.factory import create_geocoding_service
from .infrastructure.config.settings import Settings
from .shared.http.client import HTTPClient
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗）
    """
    parser = argparse.ArgumentParser(
        description="住所から都市名を解決するツール（LocationIQ）"
    )

    parser.add_argument(
        "--address",
        type=str,
        required=True,
        help="解決する住所（例: \"Hill Road, Bandra West, Mumbai\"）",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="結果をJSONで出力",
    )

    args = parser.parse_args()

    try:
        settings = Settings(_env_file=args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(level=settings.log_level)

        with HTTPClient(
            timeout=settings.geocoding_timeout,
            user_agent=settings.geocoding_user_agent,
        ) as http_client:
            service = create_geocoding_service(settings, http_client=http_client)
            result = service.resolve(args.address)

        if result.location is not None:
            if args.json:
                print(json.dumps(result.location.to_dict(), ensure_ascii=False))
            else:
                print(f"City:     {result.location.city}")
                print(f"Address:  {result.location.address}")
                print(f"Place ID: {result.location.place_id}")
            return 0

        if args.json:
            print(json.dumps(result.failure.to_dict(), ensure_ascii=False))
        else:
            print(f"Error ({result.failure.kind.value}): {result.failure.message}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
