"""Read translation files and list every translation key they define."""

from __future__ import annotations

import json
import logging
import math
import os
import tomllib
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterator

import yaml

from .config import Config

log = logging.getLogger(__name__)

_SUPPORTED_EXTENSIONS = {"yml", "yaml", "json", "toml"}
_MAX_LANGUAGE_LEN = 5
_UNKNOWN_LANGUAGE = "unknown"


class TranslationParseError(ValueError):
    """A translation file could not be read or does not have the expected shape."""


@dataclass
class DefinedKey:
    """A translation key defined in a translation file."""

    key: str
    language: str
    value: str
    file_path: str


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield every file under ``root``, following symlinks and skipping unreadable entries."""
    if root.is_file():
        yield root
        return
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=lambda _: None):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_file():
                yield path


def _relative_to(path: Path, base: Path) -> str:
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)


def _looks_like_language(name: str) -> bool:
    return len(name.encode("utf-8")) <= _MAX_LANGUAGE_LEN and "." not in name


def parse_translation_files(config: Config) -> list[DefinedKey]:
    """Parse every supported translation file under the configured locales directory."""
    locales_path = config.locales_path()
    log.info("parsing translation directory: %s", locales_path)

    parsers = {
        "yml": parse_yaml,
        "yaml": parse_yaml,
        "json": parse_json,
        "toml": parse_toml,
    }

    defined: list[DefinedKey] = []
    for path in _walk_files(locales_path):
        extension = path.suffix[1:]
        if extension not in _SUPPORTED_EXTENSIONS:
            continue
        log.debug("processing translation file: %s", path)

        language = extract_language_from_path(path, locales_path)
        relative_path = _relative_to(path, config.project_path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TranslationParseError(f"cannot read file: {path}") from exc

        defined.extend(parsers[extension](content, language, relative_path))

    log.info("parsing finished, %d keys defined", len(defined))
    return defined


def extract_language_from_path(path: Path | str, locales_path: Path | str) -> str:
    """Infer the language code from the file name, else from the first directory under the locales root."""
    path = Path(path)
    locales_path = Path(locales_path)

    if path.name and _looks_like_language(path.stem):
        return path.stem

    try:
        relative = path.parent.relative_to(locales_path)
    except ValueError:
        relative = None
    if relative is not None and relative.parts:
        first = relative.parts[0]
        if _looks_like_language(first):
            return first

    log.debug("cannot infer language from path %s, using '%s'", path, _UNKNOWN_LANGUAGE)
    return _UNKNOWN_LANGUAGE


def _unwrap_language(mapping: dict[str, Any], language: str) -> dict[str, Any] | None:
    """Skip a single top-level key named after the language; ``None`` if it holds no mapping."""
    if len(mapping) == 1 and language in mapping:
        inner = mapping[language]
        return inner if isinstance(inner, dict) else None
    return mapping


# --- YAML -------------------------------------------------------------------


def _yaml_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return ".nan"
        if math.isinf(value):
            return ".inf" if value > 0 else "-.inf"
    return repr(value)


def _yaml_debug(value: Any) -> str:
    """Describe a non-string YAML value the way the report shows it."""
    if value is None:
        return "Null"
    if isinstance(value, bool):
        return f"Bool({'true' if value else 'false'})"
    if isinstance(value, (int, float)):
        return f"Number({_yaml_number(value)})"
    if isinstance(value, list):
        return "Sequence [" + ", ".join(_yaml_debug(item) for item in value) + "]"
    if isinstance(value, dict):
        entries = ", ".join(f"{_yaml_debug(k)}: {_yaml_debug(v)}" for k, v in value.items())
        return "Mapping {" + entries + "}"
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    return f"String({json.dumps(str(value), ensure_ascii=False)})"


def _string_keys(mapping: dict[Any, Any]) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if isinstance(k, str)}


def _walk_yaml(
    mapping: dict[str, Any], prefix: str, language: str, file_path: str
) -> Iterator[DefinedKey]:
    for key, value in mapping.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _walk_yaml(_string_keys(value), full_key, language, file_path)
        elif isinstance(value, str):
            yield DefinedKey(full_key, language, value, file_path)
        else:
            yield DefinedKey(full_key, language, _yaml_debug(value), file_path)


def parse_yaml(content: str, language: str, file_path: str) -> list[DefinedKey]:
    """Return the keys defined by a YAML translation document."""
    try:
        root = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise TranslationParseError(f"cannot parse YAML file: {file_path}") from exc

    if not isinstance(root, dict):
        raise TranslationParseError(f"YAML top level must be a mapping: {file_path}")

    mapping = _unwrap_language(_string_keys(root), language)
    if mapping is None:
        return []
    return list(_walk_yaml(_string_keys(mapping), "", language, file_path))


# --- JSON -------------------------------------------------------------------


def _json_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def _walk_json(
    mapping: dict[str, Any], prefix: str, language: str, file_path: str
) -> Iterator[DefinedKey]:
    for key in sorted(mapping):
        value = mapping[key]
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _walk_json(value, full_key, language, file_path)
        else:
            yield DefinedKey(full_key, language, _json_text(value), file_path)


def parse_json(content: str, language: str, file_path: str) -> list[DefinedKey]:
    """Return the keys defined by a JSON translation document; values keep their JSON form."""
    try:
        root = json.loads(content)
    except json.JSONDecodeError as exc:
        raise TranslationParseError(f"cannot parse JSON file: {file_path}") from exc

    if not isinstance(root, dict):
        raise TranslationParseError(f"JSON top level must be an object: {file_path}")

    mapping = _unwrap_language(root, language)
    if mapping is None:
        return []
    return list(_walk_json(mapping, "", language, file_path))


# --- TOML -------------------------------------------------------------------

_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _toml_string(value: str) -> str:
    has_control = any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value)
    if '"' in value and "'" not in value and not has_control:
        return f"'{value}'"
    escaped = []
    for ch in value:
        if ch in _TOML_ESCAPES:
            escaped.append(_TOML_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            escaped.append(f"\\u{ord(ch):04X}")
        else:
            escaped.append(ch)
    return '"' + "".join(escaped) + '"'


def _toml_text(value: Any) -> str:
    """Render a TOML value in TOML syntax."""
    if isinstance(value, str):
        return _toml_string(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, list):
        return "[" + ", ".join(_toml_text(item) for item in value) + "]"
    if isinstance(value, dict):
        if not value:
            return "{}"
        entries = ", ".join(f"{k} = {_toml_text(value[k])}" for k in sorted(value))
        return "{ " + entries + " }"
    return str(value)


def _walk_toml(
    table: dict[str, Any], prefix: str, language: str, file_path: str
) -> Iterator[DefinedKey]:
    for key in sorted(table):
        value = table[key]
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _walk_toml(value, full_key, language, file_path)
        else:
            yield DefinedKey(full_key, language, _toml_text(value), file_path)


def parse_toml(content: str, language: str, file_path: str) -> list[DefinedKey]:
    """Return the keys defined by a TOML translation document; values keep their TOML form."""
    try:
        root = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise TranslationParseError(f"cannot parse TOML file: {file_path}") from exc

    table = _unwrap_language(root, language)
    if table is None:
        return []
    return list(_walk_toml(table, "", language, file_path))