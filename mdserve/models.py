"""Data models used throughout the build pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .store import ArtifactStore


@dataclass
class RelocatedAsset:
    """Local asset copied from the source tree into the artifact store."""

    document_path: str
    reference: str
    store_path: str
    size: int
    image_format: Optional[str] = None


@dataclass
class RewriteContext:
    """Per-document state threaded through the rewrite pass."""

    document_path: str
    root_dir: Path
    store: "ArtifactStore"
    style_injected: bool = False
    assets: List[RelocatedAsset] = field(default_factory=list)


@dataclass
class SkippedDocument:
    """Document that failed to convert or parse and was left out of the site."""

    source_path: str
    reason: str


@dataclass
class BuildReport:
    """Outcome of a full build."""

    documents: List[str] = field(default_factory=list)
    assets: List[RelocatedAsset] = field(default_factory=list)
    skipped: List[SkippedDocument] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def total(self) -> int:
        return len(self.documents) + len(self.skipped)
