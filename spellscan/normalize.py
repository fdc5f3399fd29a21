"""照合用の正規化と ASCII 文字クラス判定。

方針:
- 大文字小文字の同一視は ASCII の A-Z のみ (C ロケール相当)。
- 非 ASCII 文字は英字とも数字とも見なさない。
- CR/LF が紛れ込んだ場合はそこで打ち切る (辞書行の改行残りなど)。
"""
from __future__ import annotations

import string

_LOWER_TABLE = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_LETTERS = frozenset(string.ascii_letters)
_UPPER = frozenset(string.ascii_uppercase)
_LOWER = frozenset(string.ascii_lowercase)
_ALNUM = frozenset(string.ascii_letters + string.digits)


def normalize(text: str) -> str:
    """ASCII 英字を小文字化した比較キーを返す。最初の CR/LF 以降は捨てる。"""
    if not text:
        return ""
    for i, ch in enumerate(text):
        if ch == "\r" or ch == "\n":
            text = text[:i]
            break
    return text.translate(_LOWER_TABLE)


def is_letter(ch: str) -> bool:
    return ch in _LETTERS


def is_upper(ch: str) -> bool:
    return ch in _UPPER


def is_lower(ch: str) -> bool:
    return ch in _LOWER


def is_alnum(ch: str) -> bool:
    return ch in _ALNUM


def has_letter(text: str) -> bool:
    """英字を1文字でも含むか。数字/記号のみの語は False。"""
    return any(ch in _LETTERS for ch in text)


__all__ = ["normalize", "is_letter", "is_upper", "is_lower", "is_alnum", "has_letter"]
