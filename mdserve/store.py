"""In-memory artifact store holding the rendered site."""

from __future__ import annotations

import logging
import posixpath
import threading
from typing import Dict, Iterator, List, Set

from .errors import StoreError
from .utils import normalize_site_path

logger = logging.getLogger("mdserve")


def _clean(path: str) -> str:
    normalized = normalize_site_path(path)
    if normalized is None:
        raise StoreError(f"Path escapes the store root: {path!r}")
    return normalized


def _parents(path: str) -> Iterator[str]:
    parent = posixpath.dirname(path)
    while parent:
        yield parent
        parent = posixpath.dirname(parent)


class StoreView:
    """Read-only handle over an artifact store."""

    def __init__(self, store: "ArtifactStore") -> None:
        self._store = store

    def read(self, path: str) -> bytes:
        return self._store.read(path)

    def exists(self, path: str) -> bool:
        return self._store.exists(path)

    def is_dir(self, path: str) -> bool:
        return self._store.is_dir(path)

    def is_file(self, path: str) -> bool:
        return self._store.is_file(path)

    def listdir(self, path: str) -> List[str]:
        return self._store.listdir(path)

    def paths(self) -> List[str]:
        return self._store.paths()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, path: object) -> bool:
        return path in self._store


class ArtifactStore:
    """Path-addressed byte store standing in for the output directory.

    Directories are implicit: writing a file registers every parent. The root
    directory is the empty path.
    """

    def __init__(self) -> None:
        self._files: Dict[str, bytes] = {}
        self._dirs: Set[str] = {""}
        self._lock = threading.Lock()
        self._frozen = False

    def ensure_container(self, path: str) -> str:
        """Register ``path`` and all its parents as directories."""
        cleaned = _clean(path)
        with self._lock:
            self._check_writable()
            self._register_dirs(cleaned)
        return cleaned

    def write(self, path: str, data: bytes) -> str:
        """Create or overwrite the file at ``path``."""
        cleaned = _clean(path)
        if not cleaned:
            raise StoreError("Cannot write to the store root")
        with self._lock:
            self._check_writable()
            if cleaned in self._dirs:
                raise StoreError(f"Cannot write {cleaned!r}: path is a directory")
            self._register_dirs(posixpath.dirname(cleaned))
            if cleaned in self._files:
                logger.debug("Overwriting store entry %s", cleaned)
            self._files[cleaned] = bytes(data)
        return cleaned

    def freeze(self) -> None:
        """Reject all further writes."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def serve_root(self) -> StoreView:
        return StoreView(self)

    def read(self, path: str) -> bytes:
        cleaned = _clean(path)
        try:
            return self._files[cleaned]
        except KeyError:
            raise FileNotFoundError(cleaned) from None

    def exists(self, path: str) -> bool:
        return self.is_file(path) or self.is_dir(path)

    def is_file(self, path: str) -> bool:
        cleaned = normalize_site_path(path)
        return cleaned is not None and cleaned in self._files

    def is_dir(self, path: str) -> bool:
        cleaned = normalize_site_path(path)
        return cleaned is not None and cleaned in self._dirs

    def listdir(self, path: str) -> List[str]:
        """Return the sorted names directly under a directory."""
        cleaned = _clean(path)
        if cleaned not in self._dirs:
            raise NotADirectoryError(cleaned)
        names = {
            posixpath.basename(entry)
            for entry in list(self._dirs) + list(self._files)
            if entry and posixpath.dirname(entry) == cleaned
        }
        return sorted(names)

    def paths(self) -> List[str]:
        """Return every file path, sorted."""
        return sorted(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.is_file(path)

    def _check_writable(self) -> None:
        if self._frozen:
            raise StoreError("Artifact store is frozen; no writes are accepted")

    def _register_dirs(self, path: str) -> None:
        if not path:
            return
        for directory in (path, *_parents(path)):
            if directory in self._files:
                raise StoreError(f"Cannot create directory {directory!r}: path is a file")
        self._dirs.add(path)
        self._dirs.update(_parents(path))
