"""Utility helpers for filename generation and URL handling."""

from __future__ import annotations

import posixpath
import re
import secrets
from urllib.parse import urlsplit

LANGUAGE_PATTERN = re.compile(r"language-(\w+)")


def random_token(length: int = 10) -> str:
    """Return ``length`` random lowercase hexadecimal characters."""
    if length < 1:
        raise ValueError("length must be positive")
    return secrets.token_hex((length + 1) // 2)[:length]


def url_extension(url: str) -> str:
    """Return the extension (with its dot) of the URL path, or ``""``."""
    path = urlsplit(url).path
    return posixpath.splitext(posixpath.basename(path))[1]


def language_from_class(classes) -> str:
    """Extract ``<name>`` from a ``language-<name>`` class, if present."""
    if not classes:
        return ""
    if not isinstance(classes, str):
        classes = " ".join(classes)
    match = LANGUAGE_PATTERN.search(classes)
    return match.group(1) if match else ""
