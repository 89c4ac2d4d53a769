"""Markdown rendering for the selected content region."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from bs4 import Tag

from .inline import DEFAULT_IMAGE_PREFIX, escape_text, parse_inline, render_inline
from .models import ImageCatalog
from .utils import language_from_class

logger = logging.getLogger("issue_mdx")

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
BLANK_LINES_PATTERN = re.compile(r"\n\s*\n\s*\n")
ASCII_WHITESPACE_PATTERN = re.compile(r"[ \t\r\n\f]+")
ENTITY_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)


def _text(element: Tag) -> str:
    return escape_text(element.get_text().strip())


def _fenced(language: str, content: str) -> str:
    return f"\n```{language}\n{content}\n```\n\n"


def _is_code_block(element: Tag) -> bool:
    return element.name == "pre" and element.find("code") is not None


def _is_highlight(element: Tag) -> bool:
    return element.name == "div" and "highlight" in (element.get("class") or [])


def render_code_block(element: Tag) -> str:
    code = element.find("code")
    return _fenced(language_from_class(code.get("class")), _text(code))


def render_paragraph(
    element: Tag,
    catalog: ImageCatalog,
    image_prefix: str = DEFAULT_IMAGE_PREFIX,
) -> str:
    return render_inline(parse_inline(element), catalog, image_prefix) + "\n\n"


def render_heading(element: Tag) -> str:
    level = int(element.name[1])
    return "#" * level + " " + _text(element) + "\n\n"


def render_list(element: Tag) -> str:
    ordered = element.name == "ol"
    lines = []
    for index, item in enumerate(element.find_all("li", recursive=False), start=1):
        prefix = f"{index}. " if ordered else "- "
        lines.append(prefix + _text(item) + "\n")
    return "".join(lines) + "\n"


def render_blockquote(element: Tag) -> str:
    content = ASCII_WHITESPACE_PATTERN.sub(" ", element.get_text()).strip()
    return "> " + escape_text(content) + "\n\n"


def render_highlight(element: Tag) -> str:
    code = element.find("code")
    language = language_from_class(code.get("class")) if code is not None else ""
    return _fenced(language, _text(element))


def render_element(
    element: Tag,
    catalog: ImageCatalog,
    image_prefix: str = DEFAULT_IMAGE_PREFIX,
) -> Optional[str]:
    """Render one direct child of the content region, or ``None`` to skip it."""
    name = element.name
    if _is_code_block(element):
        return render_code_block(element)
    if name == "p":
        return render_paragraph(element, catalog, image_prefix)
    if name in HEADING_TAGS:
        return render_heading(element)
    if name in ("ul", "ol"):
        return render_list(element)
    if name == "blockquote":
        return render_blockquote(element)
    if _is_highlight(element):
        return render_highlight(element)
    return None


def render_blocks(
    region: Tag,
    catalog: ImageCatalog,
    image_prefix: str = DEFAULT_IMAGE_PREFIX,
) -> List[str]:
    """Render the direct children of ``region`` into ordered Markdown fragments."""
    blocks: List[str] = []
    for element in region.find_all(recursive=False):
        fragment = render_element(element, catalog, image_prefix)
        if fragment is None:
            logger.debug("Skipping unsupported <%s> element", element.name)
            continue
        blocks.append(fragment)
    return blocks


def postprocess_markdown(markdown: str) -> str:
    """Collapse extra blank lines, decode basic entities and trim."""
    text = BLANK_LINES_PATTERN.sub("\n\n", markdown)
    for entity, literal in ENTITY_REPLACEMENTS:
        text = text.replace(entity, literal)
    return text.strip()


def render_markdown(
    region: Tag,
    catalog: ImageCatalog,
    image_prefix: str = DEFAULT_IMAGE_PREFIX,
) -> str:
    """Produce the final Markdown document for ``region``."""
    return postprocess_markdown("".join(render_blocks(region, catalog, image_prefix)))
