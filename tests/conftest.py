"""Shared test helpers: an in-memory stand-in for ``requests.Session``."""

from __future__ import annotations

import itertools
from typing import Dict, List, Union

import requests
from bs4 import BeautifulSoup

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
GIF_BYTES = b"GIF89a" + b"\x00" * 64


class FakeResponse:
    def __init__(self, body: Union[bytes, str] = b"", status_code: int = 200) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.content = body
        self.status_code = status_code

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        return None


class FakeSession:
    """Serve canned responses by URL and record every request."""

    def __init__(self, routes: Dict[str, Union[FakeResponse, Exception]]) -> None:
        self.routes = routes
        self.requested: List[str] = []

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"No route to {url}")
        if isinstance(route, Exception):
            raise route
        return route


def make_region(markup: str):
    """Wrap ``markup`` in a container element and return that element."""
    return BeautifulSoup(f"<div>{markup}</div>", "html.parser").div


def sequential_tokens(*tokens: str):
    """Token factory that hands out ``tokens`` in order."""
    iterator = itertools.cycle(tokens)
    return lambda length: next(iterator)
