"""Utility helpers for heading slugs and site-relative path handling."""

from __future__ import annotations

import posixpath
from typing import Optional

from .config import HTML_EXT, MARKDOWN_EXT

REMOTE_PREFIXES = ("http://", "https://", "//")
INLINE_PREFIXES = ("data:",)


def heading_slug(value: str) -> str:
    """Derive an anchor identifier from heading text.

    Letters and digits are kept after lower-casing, every space becomes a
    hyphen and anything else is dropped. Runs of hyphens are not collapsed.
    """
    chars = []
    for char in value.lower():
        if char == " ":
            chars.append("-")
        elif char.isascii() and char.isalnum():
            chars.append(char)
    return "".join(chars)


def derive_output_path(source_path: str) -> str:
    """Map a source path to the path it is published under."""
    if source_path.endswith(MARKDOWN_EXT):
        return source_path[: -len(MARKDOWN_EXT)] + HTML_EXT
    return source_path


def rewrite_link_target(href: str) -> str:
    """Point a link at a Markdown document to its rendered page.

    Only targets ending in the Markdown extension are touched, but then every
    occurrence of the extension is replaced, so ``a.md.d/b.md`` becomes
    ``a.html.d/b.html``.
    """
    if href.endswith(MARKDOWN_EXT):
        return href.replace(MARKDOWN_EXT, HTML_EXT)
    return href


def strip_query(reference: str) -> str:
    """Drop everything from the first ``?`` onwards."""
    return reference.split("?", 1)[0]


def is_remote_reference(reference: str) -> bool:
    return reference.lower().startswith(REMOTE_PREFIXES)


def is_inline_reference(reference: str) -> bool:
    return reference.lower().startswith(INLINE_PREFIXES)


def normalize_site_path(path: str) -> Optional[str]:
    """Return a clean slash-separated path relative to the site root.

    ``None`` is returned when the path climbs above the root.
    """
    cleaned = path.replace("\\", "/").lstrip("/")
    if not cleaned:
        return ""
    normalized = posixpath.normpath(cleaned)
    if normalized == ".":
        return ""
    if normalized == ".." or normalized.startswith("../"):
        return None
    return normalized


def resolve_reference(document_path: str, reference: str) -> Optional[str]:
    """Resolve a reference found in a document to a site-relative path.

    A leading slash is taken as relative to the site root, anything else as
    relative to the document's directory.
    """
    if reference.startswith("/"):
        return normalize_site_path(reference)
    base = posixpath.dirname(document_path)
    return normalize_site_path(posixpath.join(base, reference))
