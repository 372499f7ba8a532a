"""Compare the keys used in source code with the keys defined in translation files."""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

from .config import Config
from .parser import DefinedKey
from .scanner import UsedKey

log = logging.getLogger(__name__)

_PLACEHOLDER = "{}"


@dataclass
class UnusedKey:
    """A translation key that no source file uses."""

    key: str
    language: str
    value: str
    file_path: str


@dataclass
class MissingKey:
    """A key used in source code that some languages do not define."""

    key: str
    missing_languages: list[str]
    file_path: str
    line_number: int


@dataclass
class DynamicKey:
    """A key reached through a variable rather than a literal."""

    pattern: str
    file_path: str
    line_number: int


@dataclass
class AnalysisResult:
    """Everything an audit found, with summary counts."""

    unused_keys: dict[str, list[UnusedKey]] = field(default_factory=dict)
    missing_keys: list[MissingKey] = field(default_factory=list)
    dynamic_keys: list[DynamicKey] = field(default_factory=list)
    unused_percentage: float = 0.0
    total_keys: int = 0
    total_unused: int = 0
    total_missing: int = 0
    total_dynamic: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Plain data form, suitable for JSON or YAML output."""
        return asdict(self)


def _compile_ignore(pattern: str | None) -> re.Pattern[str] | None:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        log.warning("invalid ignore pattern: %s, error: %s", pattern, exc)
        return None


def _matches_dynamic(key: str, dynamic_keys: Iterable[DynamicKey]) -> bool:
    for dynamic in dynamic_keys:
        if key.startswith(dynamic.pattern):
            return True
        if _PLACEHOLDER in dynamic.pattern:
            try:
                regex = re.compile(dynamic.pattern.replace(_PLACEHOLDER, "(.+)"))
            except re.error:
                continue
            if regex.search(key):
                return True
    return False


def analyze(
    used_keys: list[UsedKey], defined_keys: list[DefinedKey], config: Config
) -> AnalysisResult:
    """Work out which keys are unused, which are missing, and which are dynamic."""
    log.info("analysing translation key usage")

    literal_used = {used.key for used in used_keys if used.is_literal}
    dynamic_keys = [
        DynamicKey(used.key, used.file_path, used.line_number)
        for used in used_keys
        if not used.is_literal
    ]

    by_language: dict[str, dict[str, DefinedKey]] = {}
    for defined in defined_keys:
        by_language.setdefault(defined.language, {})[defined.key] = defined

    ignore = _compile_ignore(config.ignore_pattern)

    unused_keys: dict[str, list[UnusedKey]] = {}
    total_unused = 0
    for language, keys in by_language.items():
        unused_here = [
            UnusedKey(key, language, defined.value, defined.file_path)
            for key, defined in keys.items()
            if not (ignore is not None and ignore.search(key))
            and key not in literal_used
            and not _matches_dynamic(key, dynamic_keys)
        ]
        if unused_here:
            unused_keys[language] = unused_here
            total_unused += len(unused_here)

    missing_keys: list[MissingKey] = []
    for used in used_keys:
        if not used.is_literal:
            continue
        missing_languages = [
            language for language, keys in by_language.items() if used.key not in keys
        ]
        if missing_languages:
            missing_keys.append(
                MissingKey(used.key, missing_languages, used.file_path, used.line_number)
            )

    total_keys = len(defined_keys)
    unused_percentage = total_unused / total_keys * 100.0 if total_keys else 0.0

    result = AnalysisResult(
        unused_keys=unused_keys,
        missing_keys=missing_keys,
        dynamic_keys=dynamic_keys,
        unused_percentage=unused_percentage,
        total_keys=total_keys,
        total_unused=total_unused,
        total_missing=len(missing_keys),
        total_dynamic=len(dynamic_keys),
    )

    log.info("analysis finished:")
    log.info("  total keys: %d", result.total_keys)
    log.info("  unused keys: %d", result.total_unused)
    log.info("  missing keys: %d", result.total_missing)
    log.info("  dynamic keys: %d", result.total_dynamic)
    log.info("  unused percentage: %.2f%%", result.unused_percentage)
    return result