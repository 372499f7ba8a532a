"""Runtime configuration for an audit run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Config:
    """Where to look for sources and translations, and how to judge the result."""

    project_path: Path = field(default_factory=lambda: Path("."))
    src_dir: str = "src"
    locales_dir: str = "locales"
    threshold: float = 20.0
    ignore_pattern: str | None = None
    verbose: bool = False

    def __post_init__(self) -> None:
        self.project_path = Path(self.project_path)

    def src_path(self) -> Path:
        """Full path of the source directory."""
        return self.project_path / self.src_dir

    def locales_path(self) -> Path:
        """Full path of the translation files directory."""
        return self.project_path / self.locales_dir