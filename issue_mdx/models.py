"""Data models used throughout the export pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple


class ImageCatalog(Mapping[str, str]):
    """Read-only mapping from an image's source URL to its local filename."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        self._entries: Mapping[str, str] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, source_url: str) -> str:
        return self._entries[source_url]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ImageCatalog({dict(self._entries)!r})"

    def filenames(self) -> List[str]:
        return list(self._entries.values())


@dataclass
class ImageAsset:
    """Downloaded image stored on disk."""

    source_url: str
    filename: str
    path: Path
    bytes_written: int
    detected_format: Optional[str]


@dataclass
class DownloadReport:
    """Outcome of materializing an image catalog."""

    assets: List[ImageAsset] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.failures


@dataclass
class ExportResult:
    """Summary of a completed export run."""

    source_url: str
    markdown_path: Path
    images_dir: Path
    catalog: ImageCatalog
    assets: List[ImageAsset]
    failures: Dict[str, str]
    total_seconds: float

    @property
    def image_counts(self) -> Tuple[int, int]:
        """Return ``(downloaded, referenced)`` image counts."""
        return len(self.assets), len(self.catalog)
