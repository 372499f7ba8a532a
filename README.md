# i18n-audit

A command-line auditor for projects that use `rust-i18n`. It scans the
source tree for `t!()` and `rust_i18n::t!()` calls, reads the translation
files (YAML, JSON or TOML), and reports:

- **unused keys**: defined in a translation file but never referenced in code;
- **missing keys**: used in code but absent from one or more languages;
- **dynamic keys**: keys passed through a variable (`let key = "..."; t!(key)`,
  with the `let` at most 20 lines above the call). A defined key that starts
  with a dynamic key, or matches it when its `{}` placeholders are read as
  `(.+)`, is not counted as unused.

Lines that contain `format!` are skipped by the scanner.

If the share of unused keys goes above a threshold, the command prints an
error to standard error and exits with status 1, so it can fail a CI job.
Unreadable files and translation files that cannot be parsed also give
status 1.

## Installation

```
pip install .
```

## Usage

Run in the root of the project being audited:

```
i18n-audit
```

This is the same as `i18n-audit run`. Common options:

```
i18n-audit --path path/to/project --src-dir src --locales-dir locales \
           --threshold 20 --ignore-pattern '^internal\.' --verbose \
           run --format json --output report.json
```

| Option | Default | Meaning |
| --- | --- | --- |
| `-p`, `--path` | `.` | project root |
| `--src-dir` | `src` | source directory, relative to the root |
| `--locales-dir` | `locales` | translation directory, relative to the root |
| `--threshold` | `20.0` | maximum allowed percentage of unused keys |
| `--ignore-pattern` | none | regular expression; keys it matches anywhere are never reported as unused |
| `-v`, `--verbose` | off | print the scanned files and every key found |
| `run -f`, `--format` | `text` | `json`, `yaml`, or anything else for the text report |
| `run -o`, `--output` | console | write the report to this file instead |

The text report shows coloured tables of statistics, unused keys (values cut
to 50 characters), missing keys and dynamic keys, followed by a suggestion.
The JSON and YAML reports hold the full analysis result.

When a `.rs` file under the source directory contains an `i18n!("...")` or
`rust_i18n::i18n!("...")` call, the path in the first such call replaces
`--locales-dir`. Paths that start with `../` are resolved against the parent
of the source directory.

Log messages go to standard error; their level is taken from the
`I18N_AUDIT_LOG` environment variable (for example `INFO` or `DEBUG`) and
defaults to `ERROR`.

## Translation files

Files ending in `.yml`, `.yaml`, `.json` or `.toml` anywhere under the
translation directory are read. The language is taken from the file name
when its stem is at most five bytes long and has no dot (`en.yml`,
`zh-CN.json`). Otherwise it comes from the first directory below the
translation directory under the same rule, and if neither fits, the language
is `unknown`.

Nested tables become dotted keys. A file whose only top-level key is its own
language is read from one level down. YAML strings are kept as they are;
JSON and TOML leaf values are kept in their JSON or TOML written form (so a
JSON string value includes its quotes).

## Using it as a library

```python
from i18n_audit.config import Config
from i18n_audit.scanner import scan_source_code
from i18n_audit.parser import parse_translation_files
from i18n_audit.analyzer import analyze

config = Config(project_path="path/to/project", src_dir="src", locales_dir="locales")
result = analyze(scan_source_code(config), parse_translation_files(config), config)
print(result.total_unused, result.unused_percentage)
```

- `i18n_audit.config.Config` holds the settings, with `src_path()` and
  `locales_path()`.
- `i18n_audit.scanner` has `scan_source_code(config)` and
  `scan_file_content(content, file_path)`, returning `UsedKey` records.
- `i18n_audit.parser` has `parse_translation_files(config)`,
  `parse_yaml`, `parse_json`, `parse_toml` and `extract_language_from_path`,
  returning `DefinedKey` records and raising `TranslationParseError` on bad
  files.
- `i18n_audit.analyzer.analyze` returns an `AnalysisResult` (with
  `UnusedKey`, `MissingKey` and `DynamicKey` entries and a `to_dict()` method).
- `i18n_audit.report` holds `print_text_report`, `print_json_report` and
  `print_yaml_report`, which write an `AnalysisResult` to a text stream or file.
- `i18n_audit.cli` has `main(argv=None)`, `detect_locales_dir(config)` and
  `ThresholdExceededError`.