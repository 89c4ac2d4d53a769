"""Inline markup tree used to render paragraph content as Markdown."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import List, Union

from bs4 import Comment, NavigableString, Tag

from .models import ImageCatalog

DEFAULT_IMAGE_PREFIX = "./images"


@dataclass
class Text:
    text: str


@dataclass
class Bold:
    children: List["InlineNode"] = field(default_factory=list)


@dataclass
class Italic:
    children: List["InlineNode"] = field(default_factory=list)


@dataclass
class CodeSpan:
    text: str


@dataclass
class Link:
    href: str
    children: List["InlineNode"] = field(default_factory=list)


@dataclass
class LineBreak:
    pass


@dataclass
class Image:
    """An ``img`` element; ``markup`` is kept for unresolved references."""

    src: str
    alt: str
    markup: str


@dataclass
class Unknown:
    """Any other element. The tag is dropped and its children are kept."""

    tag: str
    children: List["InlineNode"] = field(default_factory=list)


InlineNode = Union[Text, Bold, Italic, CodeSpan, Link, LineBreak, Image, Unknown]


def escape_text(text: str) -> str:
    """Entity-encode text so the post-processor decodes it exactly once."""
    return html.escape(text, quote=False)


def escape_inline(text: str) -> str:
    """Encode paragraph text the way serialized inner markup spells it.

    Non-breaking spaces become ``&nbsp;`` and are decoded to plain spaces.
    """
    return escape_text(text).replace("\xa0", "&nbsp;")


def parse_element(element: Tag) -> InlineNode:
    name = element.name
    if name == "code":
        return CodeSpan(element.get_text())
    if name == "strong":
        return Bold(parse_inline(element))
    if name == "em":
        return Italic(parse_inline(element))
    if name == "a" and element.get("href") is not None:
        return Link(element["href"], parse_inline(element))
    if name == "br":
        return LineBreak()
    if name == "img":
        return Image(element.get("src") or "", element.get("alt") or "", str(element))
    return Unknown(name, parse_inline(element))


def parse_inline(element: Tag) -> List[InlineNode]:
    """Build the inline tree for the children of ``element``."""
    nodes: List[InlineNode] = []
    for child in element.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            nodes.append(Text(str(child)))
        elif isinstance(child, Tag):
            nodes.append(parse_element(child))
    return nodes


def render_node(
    node: InlineNode,
    catalog: ImageCatalog,
    image_prefix: str = DEFAULT_IMAGE_PREFIX,
) -> str:
    if isinstance(node, Text):
        return escape_inline(node.text)
    if isinstance(node, CodeSpan):
        return f"`{escape_inline(node.text)}`"
    if isinstance(node, LineBreak):
        return "\n"
    if isinstance(node, Image):
        filename = catalog.get(node.src) if node.src else None
        if filename is None:
            return node.markup
        return f"![{escape_inline(node.alt)}]({image_prefix}/{filename})"

    inner = render_inline(node.children, catalog, image_prefix)
    if isinstance(node, Bold):
        return f"**{inner}**"
    if isinstance(node, Italic):
        return f"*{inner}*"
    if isinstance(node, Link):
        return f"[{inner}]({escape_inline(node.href)})"
    return inner


def render_inline(
    nodes: List[InlineNode],
    catalog: ImageCatalog,
    image_prefix: str = DEFAULT_IMAGE_PREFIX,
) -> str:
    """Render an inline tree to Markdown text."""
    return "".join(render_node(node, catalog, image_prefix) for node in nodes)
