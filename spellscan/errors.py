"""spellscan の例外定義。

- DictionaryLoadError: 辞書が読めない (致命的。検査は行わない)
- SourceReadError: 入力ファイルが読めない (ファイル単位で回復可能)
- ConfigError: 設定ファイルが読めない/不正

未登録語の検出は例外ではなく通常の結果 (FlaggedWord) として返す。
"""
from __future__ import annotations


class SpellCheckError(Exception):
    """spellscan が送出する例外の基底クラス。"""

    def __init__(self, source: object, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class DictionaryLoadError(SpellCheckError):
    pass


class SourceReadError(SpellCheckError):
    pass


class ConfigError(SpellCheckError):
    pass


__all__ = ["SpellCheckError", "DictionaryLoadError", "SourceReadError", "ConfigError"]
