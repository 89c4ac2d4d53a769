"""Configuration objects and constants for the exporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PAGE_URL = "https://github.com/chokcoco/iCSS/issues/226"
DEFAULT_CONTENT_SELECTOR = ".d-block.comment-body.markdown-body.js-comment-body"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@dataclass
class ExportConfig:
    """Top-level settings that control fetching, downloading and rendering."""

    page_url: str = DEFAULT_PAGE_URL
    content_selector: str = DEFAULT_CONTENT_SELECTOR
    output_root: Path = field(default_factory=Path.cwd)
    images_dirname: str = "images"
    markdown_filename: str = "content.md"
    name_length: int = 10
    max_workers: int = 4
    fail_fast: bool = True
    timeout: float = 30.0

    @property
    def images_dir(self) -> Path:
        return self.output_root / self.images_dirname

    @property
    def markdown_path(self) -> Path:
        return self.output_root / self.markdown_filename
