"""設定ファイル (TOML / YAML / JSON) から SpellConfig を読み込む。

TOML: pyproject.toml の [tool.spellscan] テーブル (無ければトップレベル)

    [tool.spellscan]
    suffix = ".md"
    dict = ["words.txt", "project-words.txt"]
    casePolicy = "pinned"      # pinned | insensitive
    maxTokenLength = 255
    encoding = "utf-8"
    jobs = 4
    json = false

YAML/JSON: 上記と同じキーを持つマッピング。
"""
from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .capitalization import CasePolicy
from .errors import ConfigError
from .file_scanner import DEFAULT_SUFFIX
from .tokenizer import MAX_TOKEN_LENGTH, check_encoding

ENCODING_CANDIDATES = ("utf-8", "utf-8-sig", "utf-16", "cp932")

# 設定ファイルのキー -> SpellConfig の属性
_KEYS = {
    "suffix": "suffix",
    "dict": "dict_files",
    "casePolicy": "case_policy",
    "maxTokenLength": "max_token_length",
    "encoding": "encoding",
    "jobs": "jobs",
    "json": "json",
}


@dataclass
class SpellConfig:
    suffix: str = DEFAULT_SUFFIX
    dict_files: List[str] = field(default_factory=list)
    case_policy: CasePolicy = CasePolicy.PINNED
    max_token_length: int = MAX_TOKEN_LENGTH
    encoding: str = "utf-8"
    jobs: int = 1
    json: bool = False


def _decode(path: Path, raw: bytes) -> str:
    # PowerShell の Set-Content (UTF-16) などにも対応
    for enc in ENCODING_CANDIDATES:
        try:
            text = raw.decode(enc)
        except UnicodeDecodeError:
            continue
        return text.lstrip("\ufeff")
    raise ConfigError(path, "unable to decode config file with tried encodings")


def _coerce(path: Path, key: str, value: Any) -> Any:
    try:
        if key == "dict":
            if isinstance(value, str):
                return [value]
            if not isinstance(value, list):
                raise TypeError("expected a list of paths")
            return [str(v) for v in value]
        if key == "casePolicy":
            return CasePolicy(str(value).lower())
        if key in ("maxTokenLength", "jobs"):
            if isinstance(value, bool):
                raise TypeError("expected an integer")
            n = int(value)
            if n < 1:
                raise ValueError(f"must be >= 1, got {n}")
            return n
        if key == "encoding":
            return check_encoding(str(value))
        if key == "json":
            if not isinstance(value, bool):
                raise TypeError("expected true/false")
            return value
        return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(path, f"invalid value for '{key}': {e}") from e


def config_from_mapping(data: Dict[str, Any], path: Path | str = "<config>", base: SpellConfig | None = None) -> SpellConfig:
    path = Path(path)
    if not isinstance(data, dict):
        raise ConfigError(path, "config must be a mapping")
    changes = {attr: _coerce(path, key, data[key]) for key, attr in _KEYS.items() if key in data}
    return replace(base or SpellConfig(), **changes)


def load_config(path: str | Path) -> SpellConfig:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise ConfigError(p, f"cannot read config: {e.strerror or e}") from e
    text = _decode(p, raw)
    suffix = p.suffix.lower()
    try:
        if suffix == ".toml":
            data = tomllib.loads(text)
            tool = data.get("tool", {})
            if isinstance(tool, dict) and "spellscan" in tool:
                data = tool["spellscan"]
        elif suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, ValueError) as e:
        raise ConfigError(p, f"cannot parse config: {e}") from e
    return config_from_mapping(data, p)


__all__ = ["SpellConfig", "load_config", "config_from_mapping"]
