"""Shared test fixtures for mdserve."""

from pathlib import Path

import pytest

from mdserve.config import SiteConfig
from mdserve.models import RewriteContext
from mdserve.store import ArtifactStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\x0dIHDR" + b"\x00" * 17


def write_file(root: Path, relative: str, data) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_bytes(data)
    return path


@pytest.fixture
def store():
    return ArtifactStore()


@pytest.fixture
def site_root(tmp_path):
    """A small documentation tree with an image and an excluded vendor directory."""
    root = tmp_path / "site"
    write_file(root, "index.md", "# Home\n\nSee the [guide](docs/guide.md).\n")
    write_file(
        root,
        "docs/guide.md",
        "# User Guide\n\n"
        "## Getting Started\n\n"
        "![diagram](diagram.png?v=2)\n\n"
        "Back [home](../index.md) or [jump](other.md#section).\n",
    )
    write_file(root, "docs/other.md", "# Other\n\n## Section\n")
    write_file(root, "docs/diagram.png", PNG_BYTES)
    write_file(root, "node_modules/pkg/README.md", "# Vendored\n")
    write_file(root, "notes.txt", "not a document\n")
    return root


@pytest.fixture
def site_config(site_root):
    return SiteConfig(root_dir=site_root)


@pytest.fixture
def make_context(tmp_path, store):
    def _make(document_path="readme.md", root_dir=None):
        return RewriteContext(
            document_path=document_path,
            root_dir=root_dir or tmp_path,
            store=store,
        )

    return _make
