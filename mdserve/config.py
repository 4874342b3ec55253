"""Configuration objects and constants for the site builder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Tuple

from .errors import ConfigurationError

MARKDOWN_EXT = ".md"
HTML_EXT = ".html"
BODY_CLASS = "markdown-body"
DEFAULT_HOST = ""
DEFAULT_PORT = 8000
DEFAULT_EXCLUDES: FrozenSet[str] = frozenset({"node_modules"})
DEFAULT_MARKDOWN_EXTENSIONS: Tuple[str, ...] = ("fenced_code", "tables")


@dataclass
class SiteConfig:
    """Top-level settings that control discovery, rendering and serving."""

    root_dir: Path
    exclude: FrozenSet[str] = field(default_factory=lambda: DEFAULT_EXCLUDES)
    markdown_extensions: Tuple[str, ...] = DEFAULT_MARKDOWN_EXTENSIONS
    complete_page: bool = True
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def validate(self) -> None:
        """Raise ConfigurationError when the root or the listener settings are unusable."""
        root = Path(self.root_dir)
        if not root.exists():
            raise ConfigurationError(f"Root directory does not exist: {root}")
        if not root.is_dir():
            raise ConfigurationError(f"Root path is not a directory: {root}")
        if not os.access(root, os.R_OK | os.X_OK):
            raise ConfigurationError(f"Root directory is not readable: {root}")
        try:
            with os.scandir(root):
                pass
        except OSError as exc:
            raise ConfigurationError(f"Root directory is not readable: {root}: {exc}") from exc
        if not 0 <= self.port <= 65535:
            raise ConfigurationError(f"Port out of range: {self.port}")
