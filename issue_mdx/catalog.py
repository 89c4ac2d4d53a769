"""Assign local filenames to the images referenced by a content region."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Set

from bs4 import Tag

from .models import ImageCatalog
from .utils import random_token, url_extension

logger = logging.getLogger("issue_mdx")

TokenFactory = Callable[[int], str]

_MAX_DRAWS = 100


def _draw_filename(
    src: str,
    name_length: int,
    token_factory: TokenFactory,
    taken: Set[str],
) -> str:
    extension = url_extension(src)
    for _ in range(_MAX_DRAWS):
        filename = f"{token_factory(name_length)}{extension}"
        if filename not in taken:
            return filename
        logger.debug("Filename %s already assigned; drawing another", filename)
    raise RuntimeError(f"Could not draw a unique filename for {src}")


def build_image_catalog(
    region: Tag,
    name_length: int = 10,
    token_factory: Optional[TokenFactory] = None,
) -> ImageCatalog:
    """Map each image ``src`` in ``region`` to a random local filename.

    Images are visited in document order. Images without a ``src`` are
    skipped, and a repeated ``src`` keeps the filename it was first given.
    """
    token_factory = token_factory or random_token
    entries: Dict[str, str] = {}
    taken: Set[str] = set()
    for img in region.find_all("img"):
        src = img.get("src")
        if not src or src in entries:
            continue
        filename = _draw_filename(src, name_length, token_factory, taken)
        entries[src] = filename
        taken.add(filename)
    return ImageCatalog(entries)
