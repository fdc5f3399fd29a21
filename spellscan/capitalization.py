"""辞書語と入力語の大文字小文字パターンの照合。

pinned (既定):
1. 辞書語が大小混在 (例: Paris, McDonald) かつ入力が全大文字なら不一致
2. それ以外は1文字ずつ比較
   - 英字以外は完全一致
   - 英字は大小無視で一致
   - 辞書側が大文字の位置は入力も大文字でなければならない

insensitive: 長さと正規化形が一致すれば大小を問わない。
"""
from __future__ import annotations

from enum import Enum
from typing import Callable

from .normalize import is_letter, is_lower, is_upper, normalize


class CasePolicy(str, Enum):
    PINNED = "pinned"
    INSENSITIVE = "insensitive"


def is_mixed_case(word: str) -> bool:
    return any(is_lower(ch) for ch in word) and any(is_upper(ch) for ch in word)


def is_all_upper(word: str) -> bool:
    # 英字を含まない語も True (C 実装と同じ扱い)
    return all(is_upper(ch) for ch in word if is_letter(ch))


def accepts(dict_form: str, query_form: str) -> bool:
    if len(dict_form) != len(query_form):
        return False
    if is_mixed_case(dict_form) and is_all_upper(query_form):
        return False
    for d, q in zip(dict_form, query_form):
        if not is_letter(d):
            if d != q:
                return False
            continue
        if normalize(d) != normalize(q):
            return False
        if is_upper(d) and not is_upper(q):
            return False
    return True


def accepts_any_case(dict_form: str, query_form: str) -> bool:
    if len(dict_form) != len(query_form):
        return False
    return normalize(dict_form) == normalize(query_form)


def matcher_for(policy: CasePolicy | str) -> Callable[[str, str], bool]:
    policy = CasePolicy(policy)
    if policy is CasePolicy.INSENSITIVE:
        return accepts_any_case
    return accepts


__all__ = ["CasePolicy", "accepts", "accepts_any_case", "is_mixed_case", "is_all_upper", "matcher_for"]
