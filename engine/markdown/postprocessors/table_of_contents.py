# engine/markdown/postprocessors/table_of_contents.py

from __future__ import annotations

from typing import TypedDict

from bs4 import NavigableString, Tag

from ..pipeline import Processor
from .heading_anchors import ANCHOR_CLASS
from .utils import get_shared_soup

TOC_LEVELS = ("h2", "h3", "h4")


class TocEntry(TypedDict):
    level: int
    id: str
    text: str
    children: list["TocEntry"]


def _heading_text(heading: Tag) -> str:
    """Plain text of a heading, without its permalink anchor."""
    parts = []
    for child in heading.contents:
        if isinstance(child, Tag) and ANCHOR_CLASS in (child.get("class") or []):
            continue
        parts.append(str(child) if isinstance(child, NavigableString) else child.get_text())
    return "".join(parts).strip()


def build_hierarchy(headings: list[TocEntry]) -> list[TocEntry]:
    root: list[TocEntry] = []
    stack: list[TocEntry] = []
    for heading in headings:
        while stack and stack[-1]["level"] >= heading["level"]:
            stack.pop()

        if stack:
            stack[-1]["children"].append(heading)
        else:
            root.append(heading)

        stack.append(heading)
    return root


class TableOfContentsPostprocessor(Processor):
    """
    Collect h2-h4 headings into ``context["toc"]`` as a nested tree.

    Headings inside tab panels are part of the document outline too; the
    HTML itself is returned unchanged.
    """

    priority = 35

    def postprocess(self, html, context):
        if "<h" not in html:
            context["toc"] = []
            return html

        soup = get_shared_soup(html, context)
        headings: list[TocEntry] = []
        for heading in soup.find_all(TOC_LEVELS):
            identifier = heading.get("id")
            if not identifier:
                continue
            headings.append(
                {
                    "level": int(heading.name[1]),
                    "id": identifier,
                    "text": _heading_text(heading),
                    "children": [],
                }
            )

        context["toc"] = build_hierarchy(headings)
        return html
