"""Find the translation keys used by ``t!()`` calls in source files."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .config import Config

log = logging.getLogger(__name__)

_SOURCE_EXTENSIONS = {"rs"}
_CONTEXT_LINES = 20

_NAMESPACED_LITERAL = re.compile(
    r'rust_i18n::t!\s*\(\s*"([^"]+)"(?:\s*(?:,|\)))(?:[^)]*\))?'
)
_NAMESPACED_VARIABLE = re.compile(r"rust_i18n::t!\s*\(\s*([a-zA-Z0-9_]+)\s*\)")
_STANDARD_LITERAL = re.compile(r't!\s*\(\s*"([^"]+)"(?:\s*(?:,|\)))(?:[^)]*\))?')
_STANDARD_VARIABLE = re.compile(r"t!\s*\(\s*([a-zA-Z0-9_]+)\s*\)")


@dataclass
class UsedKey:
    """A translation key referenced from source code."""

    key: str
    is_literal: bool
    file_path: str
    line_number: int


def _lines(content: str) -> list[str]:
    """Split text into lines on ``\\n``, dropping a trailing ``\\r`` and a final empty line."""
    if not content:
        return []
    pieces = content.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


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


def scan_source_code(config: Config) -> list[UsedKey]:
    """Scan every source file under the configured directory, one entry per distinct key."""
    src_path = config.src_path()
    log.info("scanning source directory: %s", src_path)

    found: list[UsedKey] = []
    for path in _walk_files(src_path):
        if path.suffix[1:] not in _SOURCE_EXTENSIONS:
            continue
        log.debug("processing file: %s", path)
        relative_path = _relative_to(path, config.project_path)
        content = path.read_text(encoding="utf-8")
        found.extend(scan_file_content(content, relative_path))

    unique: dict[str, UsedKey] = {}
    for used in found:
        unique.setdefault(used.key, used)

    result = list(unique.values())
    log.info("scan finished, %d keys in use", len(result))
    return result


def scan_file_content(content: str, file_path: str) -> list[UsedKey]:
    """Return the keys used by ``t!()`` calls in one file's text, in order of appearance."""
    lines = _lines(content)
    used: list[UsedKey] = []

    for line_idx, line in enumerate(lines):
        if "format!" in line:
            continue

        if "rust_i18n::t!" in line:
            literal_re, variable_re = _NAMESPACED_LITERAL, _NAMESPACED_VARIABLE
        else:
            literal_re, variable_re = _STANDARD_LITERAL, _STANDARD_VARIABLE

        for match in literal_re.finditer(line):
            key = match.group(1)
            log.debug("found literal key at %s:%d: %s", file_path, line_idx + 1, key)
            used.append(UsedKey(key, True, file_path, line_idx + 1))

        for match in variable_re.finditer(line):
            var_name = match.group(1)
            log.debug("found variable key at %s:%d: %s", file_path, line_idx + 1, var_name)
            dynamic = _resolve_variable(var_name, lines, line_idx, file_path)
            if dynamic is not None:
                used.append(dynamic)

    return used


def _resolve_variable(
    var_name: str, lines: list[str], line_idx: int, file_path: str
) -> UsedKey | None:
    """Look back a few lines for ``let var = "key";`` and return the key it names."""
    declaration = re.compile(rf'let\s+{re.escape(var_name)}\s*=\s*"([^"]+)";')
    start = max(0, line_idx - _CONTEXT_LINES)
    for context_line in reversed(lines[start:line_idx]):
        match = declaration.search(context_line)
        if match:
            log.debug('  variable definition: %s = "%s"', var_name, match.group(1))
            return UsedKey(match.group(1), False, file_path, line_idx + 1)
    log.debug("  no definition found for %s", var_name)
    return None