"""単語辞書 (ソート済み・読み取り専用) と読み込み処理。

辞書形式:
- プレーンテキスト: 1行1語。\\n / \\r 区切り、空行は無視。行内容はそのまま登録。
- JSON: {"words": ["word", ...]} または ["word", ...]

各語は (original, normalized) で保持し、normalized の昇順に安定ソートする。
照合は二分探索でヒットした位置から同じ正規化形の連続区間全体を取り、
どれか1件でも大文字小文字パターンが受理すれば登録語とみなす。
"""
from __future__ import annotations

import bisect
import json
import logging
import os
import re
from dataclasses import dataclass
from operator import attrgetter
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Tuple

from .capitalization import CasePolicy, matcher_for
from .errors import DictionaryLoadError
from .normalize import normalize
from .tokenizer import MAX_TOKEN_LENGTH, check_encoding, decode_token

log = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(rb"[\r\n]+")


@dataclass(frozen=True)
class DictionaryEntry:
    original: str
    normalized: str

    @classmethod
    def from_word(cls, word: str) -> "DictionaryEntry":
        return cls(original=word, normalized=normalize(word))


class Dictionary:
    """normalized 昇順に並んだ DictionaryEntry の不変コレクション。"""

    def __init__(self, entries: Iterable[DictionaryEntry] = (), policy: CasePolicy | str = CasePolicy.PINNED):
        ordered = sorted(entries, key=attrgetter("normalized"))
        self._entries: Tuple[DictionaryEntry, ...] = tuple(ordered)
        self._keys: Tuple[str, ...] = tuple(e.normalized for e in ordered)
        self._policy = CasePolicy(policy)
        self._accepts = matcher_for(self._policy)

    @classmethod
    def from_words(cls, words: Iterable[str], policy: CasePolicy | str = CasePolicy.PINNED) -> "Dictionary":
        return cls((DictionaryEntry.from_word(w) for w in words), policy=policy)

    @property
    def policy(self) -> CasePolicy:
        return self._policy

    @property
    def entries(self) -> Tuple[DictionaryEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.lookup(word)

    def __repr__(self) -> str:
        return f"Dictionary({len(self)} entries, policy={self._policy.value})"

    def find_run(self, word: str) -> Tuple[DictionaryEntry, ...]:
        """word と同じ正規化形を持つ連続区間を返す (無ければ空)。"""
        key = normalize(word)
        lo = bisect.bisect_left(self._keys, key)
        if lo == len(self._keys) or self._keys[lo] != key:
            return ()
        hi = bisect.bisect_right(self._keys, key, lo)
        return self._entries[lo:hi]

    def lookup(self, word: str) -> bool:
        return any(self._accepts(e.original, word) for e in self.find_run(word))

    def merged(self, other: "Dictionary") -> "Dictionary":
        return Dictionary(self._entries + other.entries, policy=self._policy)


def _words_from_bytes(data: bytes, max_length: int, encoding: str) -> Iterator[str]:
    for raw in _LINE_SPLIT_RE.split(data):
        if raw:
            yield decode_token(raw[:max_length], encoding)


def _words_from_lines(lines: Iterable[Any], max_length: int, encoding: str) -> Iterator[str]:
    for line in lines:
        if isinstance(line, (bytes, bytearray)):
            raw = bytes(line).rstrip(b"\r\n")
            if raw:
                yield decode_token(raw[:max_length], encoding)
            continue
        text = str(line).rstrip("\r\n")
        if not text:
            continue
        raw = text.encode(encoding, errors="surrogateescape")
        if len(raw) > max_length:
            text = decode_token(raw[:max_length], encoding)
        yield text


def _words_from_json(path: Path, data: bytes, max_length: int, encoding: str) -> List[str]:
    try:
        obj = json.loads(data.decode(encoding))
    except (UnicodeDecodeError, ValueError) as e:
        raise DictionaryLoadError(path, f"invalid JSON dictionary: {e}") from e
    words = obj.get("words", []) if isinstance(obj, dict) else obj
    if not isinstance(words, list):
        raise DictionaryLoadError(path, "JSON dictionary must be a list or {\"words\": [...]}")
    try:
        return list(_words_from_lines((str(w) for w in words), max_length, encoding))
    except UnicodeEncodeError as e:
        raise DictionaryLoadError(path, f"word cannot be represented in {encoding}: {e}") from e


def read_words(
    source: Any,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> List[str]:
    """辞書ソースから登録語を読み出す。読めなければ DictionaryLoadError。"""
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DictionaryLoadError(path, f"cannot open dictionary: {e.strerror or e}") from e
        if path.suffix.lower() == ".json":
            return _words_from_json(path, data, max_length, encoding)
        return list(_words_from_bytes(data, max_length, encoding))
    if isinstance(source, (bytes, bytearray, memoryview)):
        return list(_words_from_bytes(bytes(source), max_length, encoding))
    read = getattr(source, "read", None)
    try:
        if read is not None:
            data = read()
            if isinstance(data, str):
                data = data.encode(encoding, errors="surrogateescape")
            return list(_words_from_bytes(data, max_length, encoding))
        return list(_words_from_lines(source, max_length, encoding))
    except OSError as e:
        raise DictionaryLoadError(getattr(source, "name", "<stream>"), f"cannot read dictionary: {e}") from e
    except UnicodeError as e:
        raise DictionaryLoadError(getattr(source, "name", "<stream>"), f"cannot decode dictionary: {e}") from e
    except TypeError as e:
        raise DictionaryLoadError(type(source).__name__, f"unsupported dictionary source: {e}") from e


def load_dictionary(
    source: Any,
    *extra_sources: Any,
    policy: CasePolicy | str = CasePolicy.PINNED,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> Dictionary:
    check_encoding(encoding)
    words: List[str] = []
    for src in (source, *extra_sources):
        loaded = read_words(src, max_length=max_length, encoding=encoding)
        log.debug("Loaded %d words from %s", len(loaded), src if isinstance(src, (str, os.PathLike)) else type(src).__name__)
        words.extend(loaded)
    dictionary = Dictionary.from_words(words, policy=policy)
    log.info("Dictionary ready: %d entries (policy=%s)", len(dictionary), dictionary.policy.value)
    return dictionary


__all__ = ["Dictionary", "DictionaryEntry", "load_dictionary", "read_words"]
