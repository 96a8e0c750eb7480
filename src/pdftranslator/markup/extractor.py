"""Visible-text extraction from converted HTML in document order."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

# Subtrees whose text is never rendered on the page.
HIDDEN_TAGS = frozenset({"style", "script", "noscript", "template"})

_NON_VISIBLE_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)
_LINE_BREAK_RE = re.compile(r"[\r\n]+")


def parse_markup(html: str | bytes) -> BeautifulSoup:
    """Parse converter output into a mutable tree."""

    return BeautifulSoup(html, "lxml")


def content_root(tree: Tag) -> Tag:
    body = tree.find("body")
    return body if isinstance(body, Tag) else tree


def iter_text_nodes(node: Tag) -> Iterator[NavigableString]:
    """Yield visible text nodes below *node*, pre-order and left to right."""

    for child in node.children:
        if isinstance(child, Tag):
            if child.name in HIDDEN_TAGS:
                continue
            yield from iter_text_nodes(child)
        elif isinstance(child, NavigableString) and not isinstance(child, _NON_VISIBLE_STRINGS):
            yield child


def extract_fragments(tree: BeautifulSoup | Tag) -> list[str]:
    """Return the trimmed, non-empty text of every visible node under ``<body>``.

    The order is the same walk used by :func:`~pdftranslator.markup.reinjector.reinject`,
    so a fragment's position is stable across repeated calls on an unmodified tree.
    """

    fragments: list[str] = []
    for node in iter_text_nodes(content_root(tree)):
        text = str(node).strip()
        if text:
            fragments.append(text)
    return fragments


def fragments_to_text(fragments: Iterable[str]) -> str:
    """Serialize fragments one per line; embedded line breaks become spaces."""

    return "".join(_LINE_BREAK_RE.sub(" ", fragment) + "\n" for fragment in fragments)


def text_to_fragments(text: str) -> list[str]:
    """Inverse of :func:`fragments_to_text`; blank lines are dropped."""

    return [line.strip() for line in text.split("\n") if line.strip()]
