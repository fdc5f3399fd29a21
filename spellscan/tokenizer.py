"""バイト列から空白区切りトークンを取り出す (行・桁つき)。

- 空白は ASCII の isspace 相当 (SP, \\t, \\n, \\v, \\f, \\r)
- 行は \\n ごとに +1、桁は1バイトごとに +1 し \\n 直後に 1 へ戻る
- トークンの桁はその先頭バイトの桁 (1始まり)
- MAX_TOKEN_LENGTH を超えるバイトはトークンから捨てる (桁の計数は続ける)

入力は bytes / バイナリファイル / バイト列チャンクの iterable を受け付け、
チャンク単位で読み進める遅延イテレータとして動く。
"""
from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator, Union

MAX_TOKEN_LENGTH = 255
CHUNK_SIZE = 4096

_WHITESPACE = frozenset(b" \t\n\v\f\r")
_NEWLINE = 0x0A
_ASCII_PROBE = b" \t\r\n\x0b\x0cAz09.,"

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO, Iterable[bytes]]


@dataclass(frozen=True)
class Token:
    text: str
    line: int
    column: int


def iter_chunks(source: ByteSource, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        for i in range(0, len(data), chunk_size):
            yield data[i:i + chunk_size]
        return
    read = getattr(source, "read", None)
    if read is not None:
        while True:
            chunk = read(chunk_size)
            if not chunk:
                break
            if isinstance(chunk, str):
                raise TypeError("text-mode stream given; open the source in binary mode")
            yield chunk
        return
    for chunk in source:
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            raise TypeError(f"byte chunks expected, got {type(chunk).__name__}")
        yield bytes(chunk)


def check_encoding(encoding: str) -> str:
    """空白判定はバイト単位なので ASCII 互換の文字コードだけを受け付ける。"""
    try:
        name = codecs.lookup(encoding).name
    except LookupError as e:
        raise ValueError(f"unknown encoding: {encoding}") from e
    try:
        ok = _ASCII_PROBE.decode(name) == _ASCII_PROBE.decode("ascii")
    except (UnicodeDecodeError, LookupError):
        ok = False
    if not ok:
        raise ValueError(f"not an ASCII-compatible encoding: {encoding}")
    return encoding


def decode_token(raw: bytes, encoding: str = "utf-8") -> str:
    return raw.decode(encoding, errors="surrogateescape")


def tokenize(
    source: ByteSource,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> Iterator[Token]:
    if max_length < 1:
        raise ValueError(f"max_length must be positive: {max_length}")
    check_encoding(encoding)
    buf = bytearray()
    in_token = False
    line = 1
    col = 1
    start_col = 1
    for chunk in iter_chunks(source):
        for b in chunk:
            if b in _WHITESPACE:
                if in_token:
                    yield Token(decode_token(bytes(buf), encoding), line, start_col)
                    buf.clear()
                    in_token = False
                if b == _NEWLINE:
                    line += 1
                    col = 1
                else:
                    col += 1
            else:
                if not in_token:
                    in_token = True
                    start_col = col
                if len(buf) < max_length:
                    buf.append(b)
                col += 1
    # 末尾が空白で終わらない場合の最終トークン
    if in_token:
        yield Token(decode_token(bytes(buf), encoding), line, start_col)


__all__ = ["Token", "tokenize", "iter_chunks", "decode_token", "check_encoding", "MAX_TOKEN_LENGTH", "CHUNK_SIZE"]
