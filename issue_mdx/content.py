"""Page fetching and content-region selection."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from .config import DEFAULT_USER_AGENT
from .errors import ContentSelectorError, PageFetchError

logger = logging.getLogger("issue_mdx")


def fetch_page(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = 30.0,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    """Download the page at ``url`` and return its HTML."""
    session = session or requests.Session()
    logger.info("Loading %s", url)
    try:
        resp = session.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise PageFetchError(url, exc) from exc
    return resp.text


def select_content(html: str, selector: str) -> Tag:
    """Return the element matching ``selector``.

    A page without a match yields an empty ``div`` so that the export still
    produces a (blank) document.
    """
    soup = BeautifulSoup(html, "html.parser")
    try:
        region = soup.select_one(selector)
    except SelectorSyntaxError as exc:
        raise ContentSelectorError(selector, exc) from exc
    if region is None:
        logger.warning("No element matches %r; the document will be empty", selector)
        return soup.new_tag("div")
    return region
