"""Exceptions raised by the export pipeline."""

from __future__ import annotations


class IssueMdxError(Exception):
    """Base class for export failures reported to the command line."""


class PageFetchError(IssueMdxError):
    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"Failed to fetch page {url}: {reason}")
        self.url = url


class ImageDownloadError(IssueMdxError):
    def __init__(self, url: str, filename: str, reason: object) -> None:
        super().__init__(f"Failed to download image {url} as {filename}: {reason}")
        self.url = url
        self.filename = filename


class ContentSelectorError(IssueMdxError):
    def __init__(self, selector: str, reason: object) -> None:
        super().__init__(f"Invalid content selector {selector!r}: {reason}")
        self.selector = selector
