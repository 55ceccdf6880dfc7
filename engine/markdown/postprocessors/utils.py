"""Utilities to support efficient BeautifulSoup usage in postprocessors."""

from __future__ import annotations

from typing import Callable, Pattern

from bs4 import BeautifulSoup
from bs4.element import PageElement, PreformattedString, Tag

_SHARED_SOUP_KEY = "_soup"
_SHARED_SOURCE_KEY = "_soup_source"

# Text under these tags is never rewritten
NON_PROSE_TAGS = frozenset({"pre", "code", "script", "style", "noscript", "textarea"})


def get_shared_soup(html: str, context: dict) -> BeautifulSoup:
    """Return a shared BeautifulSoup instance for the given HTML.

    Every postprocessor after Pandoc walks the same document back to back, so
    the parsed tree is cached in the render context. The cache is invalidated
    if the source HTML string changes between postprocessors.
    """
    soup = context.get(_SHARED_SOUP_KEY)
    source = context.get(_SHARED_SOURCE_KEY)
    if soup is None or source != html:
        soup = BeautifulSoup(html, "html.parser")
        context[_SHARED_SOUP_KEY] = soup
        context[_SHARED_SOURCE_KEY] = html
    return soup


def soup_to_html(context: dict, soup: BeautifulSoup | None = None) -> str:
    """Serialise the shared soup back to HTML and update the cache."""
    if soup is None:
        soup = context.get(_SHARED_SOUP_KEY)
    html = str(soup) if soup is not None else ""
    context[_SHARED_SOURCE_KEY] = html
    context[_SHARED_SOUP_KEY] = soup
    return html


def clear_shared_soup(context: dict) -> None:
    """Remove any cached soup information from the context."""
    context.pop(_SHARED_SOUP_KEY, None)
    context.pop(_SHARED_SOURCE_KEY, None)


def is_prose(text_node, excluded=NON_PROSE_TAGS) -> bool:
    """True unless ``text_node`` sits under one of the ``excluded`` tags."""
    current = text_node.parent
    while current is not None:
        if isinstance(current, Tag) and current.name in excluded:
            return False
        current = current.parent
    return True


def replace_text_matches(
    soup: BeautifulSoup,
    pattern: Pattern[str],
    build: Callable[..., PageElement],
    excluded=NON_PROSE_TAGS,
) -> bool:
    """
    Replace each match of ``pattern`` in prose text nodes with ``build(match)``.

    Comments, CDATA and attribute values are never text nodes here. Returns
    whether anything was replaced.
    """
    # Collect first; the tree changes while replacing
    text_nodes = [
        node
        for node in soup.find_all(string=pattern)
        if not isinstance(node, PreformattedString) and is_prose(node, excluded)
    ]

    for text_node in text_nodes:
        text = str(text_node)
        last_end = 0
        for match in pattern.finditer(text):
            if match.start() > last_end:
                text_node.insert_before(soup.new_string(text[last_end:match.start()]))
            text_node.insert_before(build(match))
            last_end = match.end()
        if last_end < len(text):
            text_node.insert_before(soup.new_string(text[last_end:]))
        text_node.extract()

    return bool(text_nodes)
