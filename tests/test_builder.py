"""End-to-end tests for building a source tree into the artifact store."""

import logging
import os

import pytest

from mdserve.builder import build_site, prepare_document, process_document
from mdserve.config import BODY_CLASS, SiteConfig
from mdserve.errors import ConfigurationError, DocumentConversionError
from mdserve.markdown import MarkdownConverter, parse_document

from conftest import PNG_BYTES, write_file


class TestBuildSite:
    def test_documents_rendered_at_output_paths(self, site_config, store):
        report = build_site(site_config, store)
        assert sorted(report.documents) == ["docs/guide.md", "docs/other.md", "index.md"]
        assert "index.html" in store
        assert "docs/guide.html" in store
        assert "docs/other.html" in store
        assert report.skipped == []

    def test_excluded_directory_absent(self, site_config, store):
        build_site(site_config, store)
        assert not any(path.startswith("node_modules") for path in store.paths())

    def test_non_documents_not_copied(self, site_config, store):
        build_site(site_config, store)
        assert "notes.txt" not in store

    def test_asset_relocated(self, site_config, store):
        report = build_site(site_config, store)
        assert store.read("docs/diagram.png") == PNG_BYTES
        assert [asset.store_path for asset in report.assets] == ["docs/diagram.png"]

    def test_rendered_page_rewritten(self, site_config, store):
        build_site(site_config, store)
        soup = parse_document(store.read("docs/guide.html"))
        assert soup.head.find("style") is not None
        assert BODY_CLASS in soup.body["class"]
        assert soup.h1["id"] == "user-guide"
        assert soup.h2["id"] == "getting-started"
        assert soup.img["src"] == "diagram.png"
        hrefs = [a["href"] for a in soup.find_all("a")]
        assert hrefs == ["../index.html", "other.md#section"]

    def test_index_links_to_guide(self, site_config, store):
        build_site(site_config, store)
        soup = parse_document(store.read("index.html"))
        assert soup.a["href"] == "docs/guide.html"
        assert soup.title.string == "Home"

    def test_custom_exclusions(self, site_root, store):
        config = SiteConfig(root_dir=site_root, exclude=frozenset({"docs"}))
        report = build_site(config, store)
        assert sorted(report.documents) == ["index.md", "node_modules/pkg/README.md"]
        assert "node_modules/pkg/README.html" in store
        assert not any(path.startswith("docs/") for path in store.paths())

    def test_malformed_document_skipped(self, tmp_path, store, caplog):
        root = tmp_path / "many"
        for idx in range(9):
            write_file(root, "page%d.md" % idx, "# Page %d\n" % idx)
        write_file(root, "broken.md", b"\xff\xfe# not utf-8\n")

        with caplog.at_level(logging.WARNING, logger="mdserve"):
            report = build_site(SiteConfig(root_dir=root), store)

        assert len(report.documents) == 9
        assert [s.source_path for s in report.skipped] == ["broken.md"]
        assert report.total == 10
        assert len(store) == 9
        assert "broken.html" not in store
        assert "Skipping broken.md" in caplog.text

    def test_missing_root_aborts_before_writes(self, tmp_path, store):
        config = SiteConfig(root_dir=tmp_path / "does-not-exist")
        with pytest.raises(ConfigurationError):
            build_site(config, store)
        assert len(store) == 0

    def test_unreadable_root_aborts_before_writes(self, site_root, store, monkeypatch):
        real_scandir = os.scandir

        def failing_scandir(path="."):
            if os.fspath(path) == os.fspath(site_root):
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", failing_scandir)
        with pytest.raises(ConfigurationError, match="not readable"):
            build_site(SiteConfig(root_dir=site_root), store)
        assert len(store) == 0

    def test_root_is_file(self, tmp_path, store):
        target = write_file(tmp_path, "file.md", "# x\n")
        with pytest.raises(ConfigurationError):
            build_site(SiteConfig(root_dir=target), store)

    def test_bad_port(self, site_root, store):
        with pytest.raises(ConfigurationError):
            build_site(SiteConfig(root_dir=site_root, port=70000), store)

    def test_custom_converter_used(self, site_config, store):
        converter = MarkdownConverter(complete_page=False)
        build_site(site_config, store, converter=converter)
        soup = parse_document(store.read("index.html"))
        assert soup.find("style") is None
        assert soup.h1["id"] == "home"

    def test_rebuild_overwrites(self, site_config, store):
        build_site(site_config, store)
        first = store.paths()
        build_site(site_config, store)
        assert store.paths() == first


class TestProcessDocument:
    def test_prepare_document(self):
        prepared = prepare_document("docs/a.md", b"# A\n", MarkdownConverter())
        assert prepared.output_path == "docs/a.html"
        assert prepared.soup.h1.string == "A"

    def test_prepare_document_fallback_title(self):
        prepared = prepare_document("docs/intro.md", b"text\n", MarkdownConverter())
        assert prepared.soup.title.string == "intro"

    def test_conversion_error_propagates(self, site_config, store):
        write_file(site_config.root_dir, "bad.md", b"\xff")
        with pytest.raises(DocumentConversionError):
            process_document("bad.md", site_config, store, MarkdownConverter())
        assert "bad.html" not in store

    def test_unreadable_source_is_fatal(self, site_config, store):
        with pytest.raises(OSError):
            process_document("gone.md", site_config, store, MarkdownConverter())
