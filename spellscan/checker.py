"""高レベル API: ストリーム/ファイル/パス群に対するスペルチェック

- トークン化 → 句読点除去 → 辞書照合 の順に処理
- 未登録語は FlaggedWord として文書順に返す
- パス走査はファイルごとの FileReport を返す(共有の可変状態は持たない)
- jobs > 1 ならスレッドで並列実行(辞書は読み取り専用で共有)
"""
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple

from .dictionary import Dictionary
from .errors import SourceReadError
from .file_scanner import DEFAULT_SUFFIX, ScanTarget, iter_targets
from .punctuation import is_checkable, strip_punctuation
from .tokenizer import MAX_TOKEN_LENGTH, ByteSource, tokenize

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlaggedWord:
    word: str
    line: int
    column: int
    source: str | None = None

    def format(self) -> str:
        if self.source:
            return f"{self.source}:{self.line}:{self.column} {self.word}"
        return f"{self.line}:{self.column} {self.word}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "line": self.line,
            "column": self.column,
            "word": self.word,
        }


class CheckResult(NamedTuple):
    flagged: List[FlaggedWord]
    had_error: bool


@dataclass
class FileReport:
    path: str
    label: str | None
    flagged: List[FlaggedWord] = field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None or bool(self.flagged)


def candidate_word(raw: str) -> str | None:
    """照合対象の語を返す。検査不要なトークンなら None。"""
    # 数字/記号のみのトークンは除去処理の前に弾く
    if not is_checkable(raw):
        return None
    word = strip_punctuation(raw)
    if not is_checkable(word):
        return None
    return word


def iter_flagged(
    dictionary: Dictionary,
    source: ByteSource,
    label: str | None = None,
    *,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> Iterator[FlaggedWord]:
    for token in tokenize(source, max_length=max_length, encoding=encoding):
        word = candidate_word(token.text)
        if word is None:
            continue
        if not dictionary.lookup(word):
            yield FlaggedWord(word=word, line=token.line, column=token.column, source=label)


def check_stream(
    dictionary: Dictionary,
    source: ByteSource,
    label: str | None = None,
    *,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> CheckResult:
    flagged = list(iter_flagged(dictionary, source, label, max_length=max_length, encoding=encoding))
    return CheckResult(flagged, bool(flagged))


def check_file(
    dictionary: Dictionary,
    path: str | os.PathLike[str],
    label: str | None = None,
    *,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> CheckResult:
    p = Path(path)
    try:
        with p.open("rb") as f:
            return check_stream(dictionary, f, label, max_length=max_length, encoding=encoding)
    except IsADirectoryError as e:
        raise SourceReadError(p, "is a directory") from e
    except OSError as e:
        raise SourceReadError(p, f"cannot open file: {e.strerror or e}") from e


def check_target(
    dictionary: Dictionary,
    target: ScanTarget,
    *,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> FileReport:
    report = FileReport(path=str(target.path), label=target.label, error=target.error)
    if target.error is not None:
        return report
    try:
        report.flagged = check_file(
            dictionary, target.path, target.label, max_length=max_length, encoding=encoding
        ).flagged
    except SourceReadError as e:
        report.error = e.reason
    log.debug("checked %s: %d flagged", report.path, len(report.flagged))
    return report


def iter_reports(
    dictionary: Dictionary,
    paths: Iterable[str | os.PathLike[str]],
    suffix: str = DEFAULT_SUFFIX,
    *,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> Iterator[FileReport]:
    for target in iter_targets(paths, suffix):
        yield check_target(dictionary, target, max_length=max_length, encoding=encoding)


def check_paths(
    dictionary: Dictionary,
    paths: Iterable[str | os.PathLike[str]],
    suffix: str = DEFAULT_SUFFIX,
    jobs: int = 1,
    *,
    max_length: int = MAX_TOKEN_LENGTH,
    encoding: str = "utf-8",
) -> List[FileReport]:
    if not jobs or jobs <= 1:
        return list(iter_reports(dictionary, paths, suffix, max_length=max_length, encoding=encoding))

    targets = list(iter_targets(paths, suffix))
    results: List[FileReport | None] = [None] * len(targets)
    with ThreadPoolExecutor(max_workers=jobs) as ex:
        futs = {
            ex.submit(check_target, dictionary, t, max_length=max_length, encoding=encoding): i
            for i, t in enumerate(targets)
        }
        for fut in as_completed(futs):
            results[futs[fut]] = fut.result()
    # 完了順ではなく入力順で返す
    return [r for r in results if r is not None]


def session_failed(reports: Iterable[FileReport]) -> bool:
    return any(r.failed for r in reports)


__all__ = [
    "FlaggedWord",
    "CheckResult",
    "FileReport",
    "candidate_word",
    "iter_flagged",
    "check_stream",
    "check_file",
    "check_target",
    "iter_reports",
    "check_paths",
    "session_failed",
]
