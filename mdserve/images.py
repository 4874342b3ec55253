"""Relocation of local image assets into the artifact store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

from filetype import guess

from .models import RelocatedAsset, RewriteContext
from .utils import is_inline_reference, is_remote_reference, resolve_reference, strip_query

logger = logging.getLogger("mdserve")


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def guess_mime_type(data: bytes) -> Optional[str]:
    """Guess a MIME type from the file signature."""
    kind = guess(data)
    return kind.mime if kind else None


def relocate_image(reference: str, context: RewriteContext) -> Optional[RelocatedAsset]:
    """Copy the local file behind an image reference into the store.

    ``reference`` must already be stripped of its query string; it is
    percent-decoded before resolving, as request paths are. Remote and
    inline references are ignored. Unreadable files are logged and skipped.
    """
    if not reference or is_remote_reference(reference) or is_inline_reference(reference):
        return None

    store_path = resolve_reference(context.document_path, unquote(reference))
    if store_path is None:
        logger.warning(
            "Skipping image %s in %s: path escapes the site root",
            reference,
            context.document_path,
        )
        return None
    if not store_path:
        return None

    source = Path(context.root_dir, store_path)
    try:
        data = source.read_bytes()
    except OSError as exc:
        logger.warning(
            "Failed to read image %s referenced by %s: %s",
            source,
            context.document_path,
            exc,
        )
        return None

    image_format = detect_image_format(data)
    if image_format is None:
        logger.debug("Asset %s is not a recognised image; copying verbatim", store_path)

    context.store.write(store_path, data)
    asset = RelocatedAsset(
        document_path=context.document_path,
        reference=reference,
        store_path=store_path,
        size=len(data),
        image_format=image_format,
    )
    context.assets.append(asset)
    logger.debug("Relocated %s -> %s (%d bytes)", reference, store_path, len(data))
    return asset


def rewrite_image_source(src: str, context: RewriteContext) -> str:
    """Strip the query from an image source and relocate the local file."""
    cleaned = strip_query(src)
    relocate_image(cleaned, context)
    return cleaned
