"""Audit rust-i18n projects: scan sources, parse translation files, report unused, missing and dynamic keys."""

__version__ = "0.1.0"