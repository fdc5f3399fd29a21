from __future__ import annotations
"""
辞書のブートストラップ用スクリプト。
- テキストを走査し、spellscan と同じ規則(空白区切り+句読点除去)で単語を収集して頻度辞書を生成。
- 表記(大文字小文字)ごとに別語として数える。
- 生成物は 1行1語 のプレーンテキスト(words.txt)として、正規化形の順に出力。

使い方(例):
  python tools/build_dict.py docs/ --out words.txt --min-freq 3 --suffix .md

注意:
- 開けないファイル/ディレクトリは警告を出してスキップします。
"""
import argparse
import sys
from collections import Counter
from typing import Iterable

# 自パッケージのユーティリティを利用
from spellscan.checker import candidate_word
from spellscan.file_scanner import DEFAULT_SUFFIX, iter_targets
from spellscan.normalize import normalize
from spellscan.tokenizer import tokenize


def gather_words(paths: Iterable[str], suffix: str = DEFAULT_SUFFIX) -> Counter:
    cnt: Counter = Counter()
    for target in iter_targets(paths, suffix):
        if target.error is not None:
            print(f"[warn] {target.path}: {target.error}", file=sys.stderr)
            continue
        try:
            with target.path.open("rb") as f:
                for tok in tokenize(f):
                    word = candidate_word(tok.text)
                    if word is not None:
                        cnt[word] += 1
        except OSError as e:
            print(f"[warn] {target.path}: {e}", file=sys.stderr)
    return cnt


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument('paths', nargs='+', help='走査するファイル/ディレクトリ')
    ap.add_argument('--out', default='words.txt', help='出力ファイル(既定: words.txt)')
    ap.add_argument('--min-freq', type=int, default=2, help='採用する最小出現回数(既定:2)')
    ap.add_argument('--suffix', default=DEFAULT_SUFFIX, help='ディレクトリ走査時の拡張子(既定: .txt)')
    args = ap.parse_args(argv)

    cnt = gather_words(args.paths, suffix=args.suffix)
    words = [w for w, c in cnt.items() if c >= args.min_freq]
    words.sort(key=lambda w: (normalize(w), w))
    with open(args.out, 'w', encoding='utf-8', errors='surrogateescape', newline='\n') as f:
        f.write("\n".join(words))
        if words:
            f.write("\n")
    print(f"Wrote {len(words)} words to {args.out}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
