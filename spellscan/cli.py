from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List

from .capitalization import CasePolicy
from .checker import FileReport, check_paths, check_stream, iter_reports, session_failed
from .config import SpellConfig, load_config
from .dictionary import load_dictionary
from .errors import ConfigError, DictionaryLoadError
from .tokenizer import check_encoding

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"整数を指定してください: {value}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"1以上を指定してください: {value}")
    return n


def _encoding(value: str) -> str:
    try:
        return check_encoding(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"使用できない文字コードです: {e}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spellscan",
        description="辞書に無い単語をファイル/ディレクトリから検出し、行:桁つきで報告します"
    )
    p.add_argument("dictionary", help="辞書ファイル: txt(1行1語)/json({words:[...]})")
    p.add_argument("paths", nargs="*", help="走査するファイル/ディレクトリ (省略時は標準入力)")
    p.add_argument("-s", "--suffix", help="ディレクトリ走査時に検査する拡張子 (既定: .txt)")
    p.add_argument("--dict", action="append", dest="dict_files", metavar="FILE", help="追加の辞書ファイル (複数指定は繰り返し)")
    p.add_argument("--config", help="設定ファイル(TOML: pyproject.toml など / YAML / JSON)を読み込み、既定値を上書き")
    p.add_argument("--case-policy", choices=[c.value for c in CasePolicy], help="大文字小文字の照合方針 (既定: pinned)")
    p.add_argument("--max-token-length", type=_positive_int, help="トークンの最大バイト長。超過分は切り捨て (既定: 255)")
    p.add_argument("--encoding", type=_encoding, help="入力/辞書の文字コード。ASCII互換のもの (既定: utf-8)")
    p.add_argument("--jobs", type=_positive_int, help="並列実行のワーカー数")
    p.add_argument("--json", action="store_true", default=None, help="JSONで出力")
    p.add_argument("-v", "--verbose", action="count", default=0, help="進捗ログを表示 (-vv でデバッグ)")
    return p


def resolve_config(args: argparse.Namespace) -> SpellConfig:
    # CLI引数が最優先。未指定の項目は設定ファイル、次に既定値で補完。
    cfg = load_config(args.config) if args.config else SpellConfig()
    if args.suffix is not None:
        cfg.suffix = args.suffix
    if args.dict_files:
        cfg.dict_files = list(args.dict_files)
    if args.case_policy is not None:
        cfg.case_policy = CasePolicy(args.case_policy)
    if args.max_token_length is not None:
        cfg.max_token_length = args.max_token_length
    if args.encoding is not None:
        cfg.encoding = args.encoding
    if args.jobs is not None:
        cfg.jobs = args.jobs
    if args.json is not None:
        cfg.json = args.json
    return cfg


def _setup_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    level = logging.DEBUG if verbosity > 1 else logging.INFO
    logging.basicConfig(format="[%(levelname)s] %(name)s: %(message)s", stream=sys.stderr)
    # 冗長化するのは spellscan 配下のロガーのみ
    logging.getLogger("spellscan").setLevel(level)


def _print_report(report: FileReport, as_json: bool) -> None:
    if report.error is not None:
        print(f"[error] {report.path}: {report.error}", file=sys.stderr)
    if as_json:
        return
    for fw in report.flagged:
        print(fw.format())


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    try:
        cfg = resolve_config(args)
    except ConfigError as e:
        print(f"[error] failed to load config {e.source}: {e.reason}", file=sys.stderr)
        return 2

    try:
        dictionary = load_dictionary(
            args.dictionary,
            *cfg.dict_files,
            policy=cfg.case_policy,
            max_length=cfg.max_token_length,
            encoding=cfg.encoding,
        )
    except DictionaryLoadError as e:
        print(f"[error] {e.source}: {e.reason}", file=sys.stderr)
        return 1
    if len(dictionary) == 0:
        print(f"[warn] 辞書 '{args.dictionary}' に単語がありません。すべての語が報告されます。", file=sys.stderr)

    # 入力中の不正バイトをそのまま書き戻す
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="surrogateescape")

    reports: List[FileReport] = []
    if not args.paths:
        result = check_stream(
            dictionary, sys.stdin.buffer, None, max_length=cfg.max_token_length, encoding=cfg.encoding
        )
        reports.append(FileReport(path="<stdin>", label=None, flagged=result.flagged))
        _print_report(reports[-1], cfg.json)
    elif cfg.jobs > 1:
        reports = check_paths(
            dictionary, args.paths, cfg.suffix, cfg.jobs,
            max_length=cfg.max_token_length, encoding=cfg.encoding,
        )
        for r in reports:
            _print_report(r, cfg.json)
    else:
        # 逐次実行ではファイル単位で即時出力
        for r in iter_reports(
            dictionary, args.paths, cfg.suffix,
            max_length=cfg.max_token_length, encoding=cfg.encoding,
        ):
            _print_report(r, cfg.json)
            reports.append(r)

    if cfg.json:
        data = [fw.to_dict() for r in reports for fw in r.flagged]
        print(json.dumps(data, ensure_ascii=False, indent=2))

    log.info(
        "checked %d file(s), %d flagged word(s)",
        len(reports), sum(len(r.flagged) for r in reports),
    )
    return 1 if session_failed(reports) else 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
