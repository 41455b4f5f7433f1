from __future__ import annotations

import json
from pathlib import Path

from .errors import ConfigError

DEFAULT_LANGUAGES_CONFIG = Path(__file__).resolve().parent / "language_extensions.json"


def load_language_table(config_path: Path) -> dict[str, list[str]]:
    """
    Read a JSON list of `{"name", "type", "extensions"}` objects and return a mapping
    of lower-cased language name -> extensions.
    """
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read languages config {config_path}: {e}") from e
    except ValueError as e:
        raise ConfigError(f"malformed languages config {config_path}: {e}") from e

    if not isinstance(data, list):
        raise ConfigError(f"malformed languages config {config_path}: expected a JSON list")

    table: dict[str, list[str]] = {}
    for item in data:
        if not isinstance(item, dict):
            raise ConfigError(f"malformed languages config {config_path}: entries must be objects")
        name = item.get("name")
        exts = item.get("extensions") or []
        if not isinstance(name, str) or not name.strip():
            raise ConfigError(f"malformed languages config {config_path}: entry without a name")
        if not isinstance(exts, list) or not all(isinstance(e, str) for e in exts):
            raise ConfigError(f"malformed languages config {config_path}: bad extensions for {name!r}")
        table[name.strip().lower()] = list(exts)
    return table


def resolve_language_extensions(languages: list[str], config_path: Path) -> list[str]:
    table = load_language_table(config_path)
    out: list[str] = []
    unknown: list[str] = []
    for lang in languages:
        key = lang.strip().lower()
        if not key:
            continue
        if key not in table:
            unknown.append(lang.strip())
            continue
        out.extend(table[key])
    if unknown:
        raise ConfigError(f"unknown language(s): {', '.join(unknown)} (see {config_path})")
    return out
