"""Tree rewriting pass that makes a rendered page self-contained."""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement

from .config import BODY_CLASS
from .images import rewrite_image_source
from .markdown import parse_fragment
from .models import RewriteContext
from .stylesheet import STYLE_BLOCK
from .utils import heading_slug, rewrite_link_target

logger = logging.getLogger("mdserve")

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
SAME_CONTEXT_TARGET = "_self"


def inject_style(head: Tag) -> None:
    """Append the stylesheet block to a head element."""
    fragment = parse_fragment(STYLE_BLOCK)
    for node in list(fragment.contents):
        head.append(node.extract())


def mark_body(body: Tag) -> None:
    classes = body.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if BODY_CLASS not in classes:
        body["class"] = list(classes) + [BODY_CLASS]


def first_text(tag: Tag) -> Optional[str]:
    """Return the first direct text child of a tag, if any."""
    for child in tag.children:
        if type(child) is NavigableString:
            return str(child)
    return None


def assign_heading_id(heading: Tag) -> None:
    text = first_text(heading)
    if text is None:
        return
    slug = heading_slug(text)
    if slug:
        heading["id"] = slug


def rewrite_link_attributes(tag: Tag, context: RewriteContext) -> None:
    if tag.name == "a" and isinstance(tag.get("href"), str):
        tag["href"] = rewrite_link_target(tag["href"])
    if tag.has_attr("target"):
        tag["target"] = SAME_CONTEXT_TARGET
    if tag.name == "img" and isinstance(tag.get("src"), str):
        tag["src"] = rewrite_image_source(tag["src"], context)


def visit(node: PageElement, context: RewriteContext) -> None:
    """Apply the per-node rules to a single node."""
    if not isinstance(node, Tag):
        return
    name = node.name
    if name == "head" and not context.style_injected:
        inject_style(node)
        context.style_injected = True
    elif name == "body":
        mark_body(node)
    elif name in HEADING_TAGS:
        assign_heading_id(node)
    elif name in ("a", "img"):
        rewrite_link_attributes(node, context)


def walk(node: PageElement, context: RewriteContext) -> None:
    """Pre-order traversal; children are captured before the node is visited."""
    children: List[PageElement] = list(getattr(node, "contents", ()))
    visit(node, context)
    for child in children:
        walk(child, context)


def rewrite_document(soup: BeautifulSoup, context: RewriteContext) -> BeautifulSoup:
    """Rewrite a parsed page in place and relocate its local images."""
    walk(soup, context)
    if not context.style_injected:
        logger.debug("No <head> in %s; stylesheet not injected", context.document_path)
    return soup
