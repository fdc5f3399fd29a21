"""トークン前後の句読点除去。

- 先頭: 開き括弧/引用符 ( [ { ' " の連続を除去
- 末尾: 英数字以外の連続を除去 (. , : ) ' " など)

先頭除去は元のトークンに、末尾除去は先頭除去後の文字列に適用する。
"""
from __future__ import annotations

from .normalize import has_letter, is_alnum

OPENING_CHARS = "([{'\""


def strip_leading(word: str) -> str:
    return word.lstrip(OPENING_CHARS)


def strip_trailing(word: str) -> str:
    end = len(word)
    while end > 0 and not is_alnum(word[end - 1]):
        end -= 1
    return word[:end]


def strip_punctuation(word: str) -> str:
    return strip_trailing(strip_leading(word))


def is_checkable(word: str) -> bool:
    """空文字や英字を含まない語 (123, --, 3.14 など) は検査対象外。"""
    return bool(word) and has_letter(word)


__all__ = ["OPENING_CHARS", "strip_leading", "strip_trailing", "strip_punctuation", "is_checkable"]
