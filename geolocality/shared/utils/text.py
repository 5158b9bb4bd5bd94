"""テキスト処理ユーティリティ"""

import re
from typing import Optional


def split_display_name(display_name: Optional[str]) -> list[str]:
    """
    カンマ区切りの表示名をトークン列に分割

    各トークンの前後の空白を除去する。順序（詳細→広域）は保持する。
    """
    if not display_name:
        return []

    return [part.strip() for part in display_name.split(",")]


def split_words(text: str) -> list[str]:
    """空白（連続を含む）で単語に分割"""
    return [word for word in re.split(r"\s+", text.strip()) if word]


def index_ignoring_case(items: list[str], value: str) -> int:
    """
    大文字小文字を無視して最初に一致した位置を返す

    Returns:
        int: 見つからない場合は-1
    """
    value_lower = value.lower()
    for index, item in enumerate(items):
        if item.lower() == value_lower:
            return index
    return -1
