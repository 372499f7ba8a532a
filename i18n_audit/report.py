"""Render an analysis result as a text, JSON or YAML report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

import yaml
from tabulate import tabulate
from termcolor import colored

from .analyzer import AnalysisResult, MissingKey, UnusedKey

_VALUE_PREVIEW_CHARS = 50


def _bold(text: str) -> str:
    return colored(text, attrs=["bold"])


def _table(headers: list[str], rows: list[list[str]], fmt: str = "grid") -> str:
    return tabulate(rows, headers=[_bold(h) for h in headers], tablefmt=fmt)


def print_text_report(writer: TextIO, result: AnalysisResult, threshold: float) -> None:
    """Write a human-readable report with tables and a closing suggestion."""
    writer.write("\n" + colored("I18n Translation Key Audit Report", attrs=["bold", "underline"]) + "\n")

    writer.write(_stats_table(result) + "\n")

    if result.unused_keys:
        writer.write("\n" + colored("Unused translation keys:", "yellow", attrs=["bold"]) + "\n")
        writer.write(_unused_keys_table(result.unused_keys) + "\n")

    if result.missing_keys:
        writer.write("\n" + colored("Missing translation keys:", "red", attrs=["bold"]) + "\n")
        writer.write(_missing_keys_table(result.missing_keys) + "\n")

    if result.dynamic_keys:
        writer.write("\n" + colored("Dynamic keys:", "cyan", attrs=["bold"]) + "\n")
        rows = [[key.pattern, f"{key.file_path}:{key.line_number}"] for key in result.dynamic_keys]
        writer.write(_table(["Dynamic key pattern", "Location"], rows) + "\n")

    if result.unused_percentage > threshold:
        advice = colored(
            f"Unused translation key ratio ({result.unused_percentage:.2f}%) exceeds the "
            f"threshold ({threshold:.2f}%), consider removing unused translation keys.",
            "yellow",
        )
    else:
        advice = colored("Good job! The unused translation key ratio is within the threshold.", "green")
    writer.write(f"\n{_bold('Suggestion')}: {advice}\n")


def _stats_table(result: AnalysisResult) -> str:
    rows = [
        ["Total translation keys", colored(str(result.total_keys), "green")],
        ["Unused translation keys", colored(str(result.total_unused), "yellow")],
        ["Missing translation keys", colored(str(result.total_missing), "red")],
        ["Dynamic keys", colored(str(result.total_dynamic), "cyan")],
        ["Unused ratio", colored(f"{result.unused_percentage:.2f}%", "yellow")],
    ]
    return _table(["Statistic", "Value"], rows, fmt="simple_grid")


def _unused_keys_table(unused_keys: dict[str, list[UnusedKey]]) -> str:
    rows = []
    for language, keys in unused_keys.items():
        for position, key in enumerate(keys):
            rows.append(
                [
                    _bold(language) if position == 0 else "",
                    key.key,
                    key.file_path,
                    key.value[:_VALUE_PREVIEW_CHARS],
                ]
            )
    return _table(["Language", "Translation key", "File path", "Value"], rows)


def _missing_keys_table(missing_keys: list[MissingKey]) -> str:
    rows = [
        [
            key.key,
            f"{key.file_path}:{key.line_number}",
            colored(", ".join(key.missing_languages), "red"),
        ]
        for key in missing_keys
    ]
    return _table(["Translation key", "Location", "Missing languages"], rows)


def print_json_report(
    writer: TextIO, result: AnalysisResult, output_path: str | Path | None
) -> None:
    """Write the result as pretty JSON, to ``output_path`` if given, else to ``writer``."""
    text = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if output_path is not None:
        Path(output_path).write_text(text, encoding="utf-8")
    else:
        writer.write(text + "\n")


def print_yaml_report(
    writer: TextIO, result: AnalysisResult, output_path: str | Path | None
) -> None:
    """Write the result as YAML, to ``output_path`` if given, else to ``writer``."""
    text = yaml.safe_dump(result.to_dict(), allow_unicode=True, sort_keys=False)
    if output_path is not None:
        Path(output_path).write_text(text, encoding="utf-8")
    else:
        writer.write(text + "\n")