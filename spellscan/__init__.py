"""spellscan
単語リスト辞書に基づく英文スペルチェッカー (検出のみ)。

主な提供機能:
- 空白区切りトークン化 (行・桁の追跡つき)
- 句読点除去と大文字小文字パターンを考慮した辞書照合
- ファイル/ディレクトリ走査と CLI インターフェース

綴りの修正候補(「もしかして」)の提示は行わない。
"""
from .checker import FlaggedWord, check_file, check_paths, check_stream, iter_reports, session_failed
from .dictionary import Dictionary, DictionaryEntry, load_dictionary
from .errors import ConfigError, DictionaryLoadError, SourceReadError, SpellCheckError

__all__ = [
    "load_dictionary",
    "check_stream",
    "check_file",
    "check_paths",
    "iter_reports",
    "session_failed",
    "Dictionary",
    "DictionaryEntry",
    "FlaggedWord",
    "SpellCheckError",
    "DictionaryLoadError",
    "SourceReadError",
    "ConfigError",
]

__version__ = "0.1.0"
