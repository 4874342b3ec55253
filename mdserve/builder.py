"""High-level orchestration for rendering a source tree into the artifact store."""

from __future__ import annotations

import logging
import posixpath
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup

from .config import SiteConfig
from .errors import DocumentError
from .markdown import MarkdownConverter, parse_document, serialize_document
from .models import BuildReport, RewriteContext, SkippedDocument
from .rewriter import rewrite_document
from .store import ArtifactStore
from .utils import derive_output_path
from .walker import iter_documents

logger = logging.getLogger("mdserve")


@dataclass
class PreparedDocument:
    """Parsed document tree ready for rewriting."""

    source_path: str
    output_path: str
    soup: BeautifulSoup


def read_source(config: SiteConfig, source_path: str) -> bytes:
    """Read a source document; failures propagate and end the build."""
    return Path(config.root_dir, source_path).read_bytes()


def prepare_document(
    source_path: str,
    data: bytes,
    converter: MarkdownConverter,
) -> PreparedDocument:
    """Render Markdown bytes and parse them into a document tree."""
    fallback_title = posixpath.splitext(posixpath.basename(source_path))[0]
    rendered = converter.render(data, fallback_title=fallback_title)
    soup = parse_document(rendered)
    return PreparedDocument(
        source_path=source_path,
        output_path=derive_output_path(source_path),
        soup=soup,
    )


def process_document(
    source_path: str,
    config: SiteConfig,
    store: ArtifactStore,
    converter: MarkdownConverter,
) -> RewriteContext:
    """Build one document into the store.

    DocumentError is raised for conversion or parse failures so the caller
    can record the skip.
    """
    data = read_source(config, source_path)
    prepared = prepare_document(source_path, data, converter)

    context = RewriteContext(
        document_path=source_path,
        root_dir=Path(config.root_dir),
        store=store,
    )
    rewrite_document(prepared.soup, context)

    store.ensure_container(posixpath.dirname(prepared.output_path))
    store.write(prepared.output_path, serialize_document(prepared.soup))
    logger.info("Rendered %s -> %s", source_path, prepared.output_path)
    return context


def build_site(
    config: SiteConfig,
    store: ArtifactStore,
    converter: Optional[MarkdownConverter] = None,
) -> BuildReport:
    """Walk the source tree and render every document into the store.

    Configuration, walk and store errors abort the build. Documents that fail
    to convert or parse are logged and skipped.
    """
    config.validate()
    if converter is None:
        converter = MarkdownConverter(
            config.markdown_extensions,
            complete_page=config.complete_page,
        )

    report = BuildReport()
    overall_start = time.perf_counter()
    for source_path in iter_documents(config.root_dir, config.exclude):
        try:
            context = process_document(source_path, config, store, converter)
        except DocumentError as exc:
            logger.warning("Skipping %s: %s", source_path, exc)
            report.skipped.append(SkippedDocument(source_path=source_path, reason=str(exc)))
            continue
        report.documents.append(source_path)
        report.assets.extend(context.assets)

    report.elapsed_seconds = time.perf_counter() - overall_start
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed, %d assets)",
        report.elapsed_seconds,
        len(report.documents),
        report.total,
        len(report.skipped),
        len(report.assets),
    )
    return report
