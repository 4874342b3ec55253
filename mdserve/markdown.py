"""Markdown rendering and HTML tree parsing helpers."""

from __future__ import annotations

import html
import logging
import re
from typing import Any, Optional, Sequence

import markdown
from bs4 import BeautifulSoup, ParserRejectedMarkup

from .config import DEFAULT_MARKDOWN_EXTENSIONS
from .errors import DocumentConversionError, DocumentParseError

logger = logging.getLogger("mdserve")

HTML_PARSER = "html.parser"

_TITLE_PATTERN = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""


def _decode(data: bytes, what: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentConversionError(f"{what} is not valid UTF-8: {exc}") from exc


def extract_title(markdown_text: str, fallback: str = "") -> str:
    """Return the text of the first level-one ATX heading, or ``fallback``."""
    match = _TITLE_PATTERN.search(markdown_text)
    if match:
        return match.group(1).strip()
    return fallback


class MarkdownConverter:
    """Thin wrapper around Python-Markdown producing HTML bytes."""

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_MARKDOWN_EXTENSIONS,
        complete_page: bool = True,
    ) -> None:
        self.extensions = list(extensions)
        self.complete_page = complete_page
        self._md: Any = None

    def _ensure_renderer(self) -> None:
        if self._md is None:
            logger.debug("Creating Markdown renderer with extensions %s", self.extensions)
            self._md = markdown.Markdown(extensions=self.extensions, output_format="html")

    def render(self, data: bytes, fallback_title: Optional[str] = None) -> bytes:
        """Render Markdown bytes to HTML bytes.

        With ``complete_page`` the fragment is wrapped in a full document so
        that the tree always carries a head and a body.
        """
        text = _decode(data, "Markdown source")
        self._ensure_renderer()
        self._md.reset()
        body = self._md.convert(text)
        if not self.complete_page:
            return body.encode("utf-8")
        title = extract_title(text, fallback_title or "")
        page = PAGE_TEMPLATE.format(title=html.escape(title), body=body)
        return page.encode("utf-8")


def parse_document(data: bytes) -> BeautifulSoup:
    """Parse rendered HTML bytes into a mutable document tree."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(f"Rendered HTML is not valid UTF-8: {exc}") from exc
    try:
        return BeautifulSoup(text, HTML_PARSER)
    except ParserRejectedMarkup as exc:
        raise DocumentParseError(f"Parser rejected markup: {exc}") from exc


def parse_fragment(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, HTML_PARSER)


def serialize_document(soup: BeautifulSoup) -> bytes:
    return soup.decode().encode("utf-8")
