"""Command-line entry point: scan, parse, analyse and report."""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from pathlib import Path
from typing import Iterator, Sequence

from .analyzer import analyze
from .config import Config
from .parser import TranslationParseError, parse_translation_files
from .report import print_json_report, print_text_report, print_yaml_report
from .scanner import scan_source_code

log = logging.getLogger(__name__)

_package_name = __name__.rpartition(".")[0] or __name__

_I18N_CALL = re.compile(r'(?:rust_i18n::)?i18n!\s*\(\s*"([^"]+)"')
_SOURCE_SUFFIX = ".rs"
_PARENT_PREFIX = "../"
_LOG_LEVEL_ENV = "I18N_AUDIT_LOG"


class ThresholdExceededError(Exception):
    """The share of unused translation keys is above the configured threshold."""

    def __init__(self, unused_percentage: float, threshold: float) -> None:
        super().__init__(
            f"unused translation key ratio ({unused_percentage:.2f}%) "
            f"exceeds the threshold ({threshold:.2f}%)"
        )
        self.unused_percentage = unused_percentage
        self.threshold = threshold


def _source_files(root: Path) -> Iterator[Path]:
    """Yield source files under ``root`` in a stable order, following symlinks."""
    if root.is_file():
        if root.suffix == _SOURCE_SUFFIX:
            yield root
        return
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=lambda _: None):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.suffix == _SOURCE_SUFFIX and path.is_file():
                yield path


def _strip_parent_prefix(path: str) -> str:
    while path.startswith(_PARENT_PREFIX):
        path = path[len(_PARENT_PREFIX):]
    return path


def _resolve_parent_relative(config: Config, i18n_path: str) -> str:
    """Resolve a ``../``-prefixed path against the source directory's parent."""
    src_parent = (config.project_path / config.src_dir).parent
    target = src_parent / _strip_parent_prefix(i18n_path)
    base = config.project_path
    if target.is_absolute() != base.is_absolute():
        return i18n_path
    return os.path.relpath(target, base)


def detect_locales_dir(config: Config) -> str:
    """Return the locales directory named by the first ``i18n!("...")`` call, else the configured one."""
    for path in _source_files(config.src_path()):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        match = _I18N_CALL.search(content)
        if match is None:
            continue
        i18n_path = match.group(1)
        if config.verbose:
            print(f"Detected i18n! path argument: {i18n_path}")
        if i18n_path.startswith(_PARENT_PREFIX):
            locales_dir = _resolve_parent_relative(config, i18n_path)
            if config.verbose:
                print(f"Adjusted translation files path: {locales_dir}")
            return locales_dir
        return i18n_path
    return config.locales_dir


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18n-audit",
        description="Audit unused translation keys in an i18n project.",
    )
    parser.add_argument("-p", "--path", type=Path, default=Path("."),
                        help="project root directory (default: current directory)")
    parser.add_argument("--src-dir", default="src", help="source directory (default: src)")
    parser.add_argument("--locales-dir", default="locales",
                        help="translation files directory (default: locales)")
    parser.add_argument("--threshold", type=float, default=20.0,
                        help="warn when the unused key percentage exceeds this value")
    parser.add_argument("--ignore-pattern", default=None,
                        help="ignore keys matching this regular expression")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose output")

    commands = parser.add_subparsers(dest="command")
    run = commands.add_parser("run", help="run the audit and produce a report")
    run.add_argument("-f", "--format", default="text", help="output format: text, json, yaml")
    run.add_argument("-o", "--output", type=Path, default=None,
                     help="output file; the console is used when omitted")
    return parser


def _configure_logging() -> None:
    level_name = os.environ.get(_LOG_LEVEL_ENV, "ERROR").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.ERROR
    logging.getLogger(_package_name).setLevel(level)
    logging.basicConfig(level=level)


def _print_verbose_scan(config: Config, used_keys: list) -> None:
    print(f"Found {len(used_keys)} translation keys in use")
    print(f"Source directory: {config.src_path()}")
    print("Scanned files:")
    for path in _source_files(config.src_path()):
        print(f"  - {path}")
    if used_keys:
        print("Translation keys in use:")
        for used in used_keys:
            print(f"  - {used.key} ({used.file_path}:{used.line_number})")


def _run(config: Config, report_format: str, output: Path | None) -> None:
    used_keys = scan_source_code(config)
    if config.verbose:
        _print_verbose_scan(config, used_keys)

    adjusted = Config(
        project_path=config.project_path,
        src_dir=config.src_dir,
        locales_dir=detect_locales_dir(config),
        threshold=config.threshold,
        ignore_pattern=config.ignore_pattern,
        verbose=config.verbose,
    )
    defined_keys = parse_translation_files(adjusted)
    if config.verbose:
        print(f"Found {len(defined_keys)} defined translation keys")

    result = analyze(used_keys, defined_keys, config)

    if report_format == "json":
        print_json_report(sys.stdout, result, output)
    elif report_format == "yaml":
        print_yaml_report(sys.stdout, result, output)
    elif output is not None:
        with open(output, "w", encoding="utf-8") as handle:
            print_text_report(handle, result, config.threshold)
    else:
        print_text_report(sys.stdout, result, config.threshold)

    if result.unused_percentage > config.threshold:
        raise ThresholdExceededError(result.unused_percentage, config.threshold)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return 0 on success and 1 on any failure."""
    _configure_logging()
    args = _build_parser().parse_args(argv)

    config = Config(
        project_path=args.path,
        src_dir=args.src_dir,
        locales_dir=args.locales_dir,
        threshold=args.threshold,
        ignore_pattern=args.ignore_pattern,
        verbose=args.verbose,
    )

    if args.command == "run":
        report_format, output = args.format, args.output
    else:
        report_format, output = "text", None

    try:
        _run(config, report_format, output)
    except (ThresholdExceededError, TranslationParseError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())