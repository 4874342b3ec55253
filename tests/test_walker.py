"""Tests for source discovery."""

import inspect
import os

import pytest

from mdserve.errors import WalkError
from mdserve.walker import is_excluded, iter_documents, iter_source_files

from conftest import write_file


@pytest.fixture
def tree(tmp_path):
    for rel in (
        "a.md",
        "docs/readme.md",
        "docs/diagram.png",
        "node_modules/pkg/readme.md",
        "node_modules_old/x.md",
        "sub/node_modules/y.md",
        "sub/z.md",
    ):
        write_file(tmp_path, rel, "# x\n")
    return tmp_path


class TestIsExcluded:
    def test_exact_name(self):
        assert is_excluded("node_modules", {"node_modules"})

    def test_prefix_collision_is_excluded(self):
        assert is_excluded("node_modules_old", {"node_modules"})

    def test_unrelated(self):
        assert not is_excluded("docs", {"node_modules"})

    def test_empty_set(self):
        assert not is_excluded("node_modules", set())

    def test_relative_path_prefix(self):
        assert is_excluded("docs/internal", {"docs/internal"})
        assert is_excluded("docs/internal/deep", {"docs/internal/"})
        assert not is_excluded("docs/public", {"docs/internal"})


class TestIterSourceFiles:
    def test_is_lazy(self, tree):
        assert inspect.isgenerator(iter_source_files(tree))

    def test_all_files_without_exclusions(self, tree):
        files = list(iter_source_files(tree))
        assert "node_modules/pkg/readme.md" in files
        assert "docs/diagram.png" in files
        assert len(files) == 7

    def test_exclusion_prunes_at_any_depth(self, tree):
        files = list(iter_source_files(tree, {"node_modules"}))
        assert files == ["a.md", "docs/diagram.png", "docs/readme.md", "sub/z.md"]

    def test_path_shaped_exclusion(self, tmp_path):
        for rel in ("docs/public.md", "docs/internal/secret.md", "docs/internal/more/x.md"):
            write_file(tmp_path, rel, "# x\n")
        assert list(iter_documents(tmp_path, {"docs/internal"})) == ["docs/public.md"]

    def test_depth_first_order(self, tree):
        files = list(iter_source_files(tree, {"node_modules"}))
        assert files.index("docs/readme.md") < files.index("sub/z.md")

    def test_restartable(self, tree):
        assert list(iter_source_files(tree)) == list(iter_source_files(tree))

    def test_unreadable_directory_is_fatal(self, tree, monkeypatch):
        real_scandir = os.scandir

        def failing_scandir(path="."):
            if os.fspath(path).endswith("docs"):
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", failing_scandir)
        with pytest.raises(WalkError, match="docs"):
            list(iter_source_files(tree))


class TestIterDocuments:
    def test_only_markdown(self, tree):
        docs = list(iter_documents(tree, {"node_modules"}))
        assert docs == ["a.md", "docs/readme.md", "sub/z.md"]

    def test_custom_extension(self, tree):
        assert list(iter_documents(tree, {"node_modules"}, extension=".png")) == [
            "docs/diagram.png"
        ]
