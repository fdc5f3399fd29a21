"""検査対象ファイルの走査ユーティリティ。

- 明示指定のファイルは拡張子を問わず検査する。
- ディレクトリは再帰的に走査し、suffix で終わる通常ファイルのみ対象。
- '.' で始まるエントリ(隠しファイル/ディレクトリ)は辿らない。
- 開けないパス/ディレクトリはエラー付きの ScanTarget として返す(例外にしない)。
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

log = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".txt"


@dataclass(frozen=True)
class ScanTarget:
    path: Path
    label: str | None
    error: str | None = None


def iter_directory(root: str, suffix: str = DEFAULT_SUFFIX) -> Iterator[ScanTarget]:
    try:
        with os.scandir(root) as it:
            names = sorted(entry.name for entry in it)
    except OSError as e:
        yield ScanTarget(Path(root), root, f"cannot open directory: {e.strerror or e}")
        return
    for name in names:
        if name.startswith("."):
            continue
        full = os.path.join(root, name)
        # シンボリックリンクは辿った先で判定する
        if os.path.isdir(full):
            yield from iter_directory(full, suffix)
        elif os.path.isfile(full) and name.endswith(suffix):
            yield ScanTarget(Path(full), full)
        elif not os.path.exists(full):
            log.debug("skip dangling entry %s", full)


def iter_targets(paths: Iterable[str | os.PathLike[str]], suffix: str = DEFAULT_SUFFIX) -> Iterator[ScanTarget]:
    paths = [os.fspath(p) for p in paths]
    show_filename = len(paths) > 1
    for p in paths:
        if os.path.isdir(p):
            log.info("Scanning directory %s (suffix=%s)", p, suffix)
            yield from iter_directory(p, suffix)
        elif os.path.exists(p):
            yield ScanTarget(Path(p), p if show_filename else None)
        else:
            yield ScanTarget(Path(p), p, "cannot access path")


__all__ = ["ScanTarget", "iter_targets", "iter_directory", "DEFAULT_SUFFIX"]
