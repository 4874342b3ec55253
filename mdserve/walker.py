"""Discovery of source documents under the site root."""

from __future__ import annotations

import logging
import os
import posixpath
from pathlib import Path
from typing import Iterable, Iterator, Union

from .config import MARKDOWN_EXT
from .errors import WalkError

logger = logging.getLogger("mdserve")


def is_excluded(path: str, exclude: Iterable[str]) -> bool:
    """Return True when a root-relative directory path is excluded.

    A prefix matches either the start of the slash-separated path
    (`docs/internal`) or the start of the directory name at any depth
    (`node_modules`).
    """
    name = posixpath.basename(path)
    for prefix in exclude:
        prefix = prefix.strip("/")
        if prefix and (path.startswith(prefix) or name.startswith(prefix)):
            return True
    return False


def _raise_walk_error(exc: OSError) -> None:
    raise WalkError(f"Cannot read {exc.filename}: {exc.strerror or exc}") from exc


def iter_source_files(
    root: Union[str, Path],
    exclude: Iterable[str] = (),
) -> Iterator[str]:
    """Yield every regular file under ``root`` as a slash-separated relative path.

    The walk is depth-first and sorted within each directory. Excluded
    directories (see is_excluded) are pruned along with their subtree. An
    unreadable directory aborts the walk with WalkError.
    """
    root_path = Path(root)
    prefixes = tuple(exclude)
    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_raise_walk_error):
        current = Path(dirpath)
        relative = current.relative_to(root_path).as_posix()
        base = "" if relative == "." else relative
        kept = sorted(
            d for d in dirnames if not is_excluded(posixpath.join(base, d), prefixes)
        )
        for name in sorted(set(dirnames) - set(kept)):
            logger.debug("Skipping excluded directory %s", Path(dirpath, name))
        dirnames[:] = kept

        for fname in sorted(filenames):
            fpath = current / fname
            if not fpath.is_file():
                continue
            yield fpath.relative_to(root_path).as_posix()


def iter_documents(
    root: Union[str, Path],
    exclude: Iterable[str] = (),
    extension: str = MARKDOWN_EXT,
) -> Iterator[str]:
    """Yield the Markdown documents found by iter_source_files."""
    for path in iter_source_files(root, exclude):
        if path.endswith(extension):
            yield path
