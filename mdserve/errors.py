"""Exception hierarchy shared across the build and serve phases."""

from __future__ import annotations


class MdserveError(Exception):
    """Base class for every error raised by mdserve."""


class ConfigurationError(MdserveError):
    """The site configuration cannot be used (bad root directory, bad port)."""


class WalkError(MdserveError):
    """A directory under the root could not be listed."""


class StoreError(MdserveError):
    """The artifact store rejected a path or a write."""


class DocumentError(MdserveError):
    """A single document could not be processed; the build skips it."""


class DocumentConversionError(DocumentError):
    """Markdown source could not be rendered to HTML."""


class DocumentParseError(DocumentError):
    """Rendered HTML could not be parsed into a document tree."""
