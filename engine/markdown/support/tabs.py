"""
Parser for ``:::tabs`` containers.

    :::tabs
    == :package: npm
    ```bash
    npm install folio
    ```
    == Yarn
    ...
    :::
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .fences import iter_fences
from .icons import LANGUAGE, IconMatch, parse_manual_icon

TAB_HEADER_PATTERN = re.compile(r"==[ \t]+(?P<name>[^\n]*?)[ \t]*")


@dataclass(frozen=True)
class TabSection:
    name: str
    body: str


@dataclass(frozen=True)
class TabPanel:
    name: str
    icon: Optional[str]
    icon_source: Optional[str]
    html: str
    is_first: bool = False


def split_sections(content: str, header_pattern=TAB_HEADER_PATTERN) -> list[TabSection]:
    """
    Split a container body on header lines that are not inside fences.

    ``header_pattern`` must capture the section name as ``name``; it defaults
    to the ``== name`` lines of tabs. Text before the first header is dropped.
    """
    fence_spans = [(fence.start, fence.end) for fence in iter_fences(content)]
    headers = []
    pos = 0
    while pos < len(content):
        line_end = content.find("\n", pos)
        line_end = len(content) if line_end == -1 else line_end
        inside_fence = any(start <= pos < end for start, end in fence_spans)
        if not inside_fence:
            header = header_pattern.fullmatch(content, pos, line_end)
            if header:
                headers.append((pos, line_end, header.group("name").strip()))
        pos = line_end + 1

    sections = []
    for index, (_, header_end, name) in enumerate(headers):
        body_end = headers[index + 1][0] if index + 1 < len(headers) else len(content)
        if name:
            sections.append(TabSection(name=name, body=content[header_end:body_end].strip()))
    return sections


def detect_code_language(content: str) -> Optional[str]:
    """Language of ``content`` if it is exactly one fenced code block."""
    stripped = content.strip()
    if not stripped.startswith("```"):
        return None
    fences = list(iter_fences(stripped + "\n"))
    if len(fences) != 1:
        return None
    fence = fences[0]
    if fence.start != 0 or fence.end < len(stripped) or not fence.has_language:
        return None
    return fence.lang.lower()


def detect_tab_icon(name: str, content: str) -> IconMatch:
    manual = parse_manual_icon(name)
    if manual:
        return manual
    language = detect_code_language(content)
    if language:
        return IconMatch(label=name, icon=language, source=LANGUAGE)
    return IconMatch(label=name)


def parse_tabs(content: str, render: Callable[[str], str]) -> list[TabPanel]:
    """
    Build one panel per section, rendering each body with ``render``.

    Sections without a name are dropped; an empty result means the
    container renders to nothing.
    """
    panels = []
    for section in split_sections(content):
        icon = detect_tab_icon(section.name, section.body)
        panels.append(
            TabPanel(
                name=icon.label,
                icon=icon.icon,
                icon_source=icon.source,
                html=render(section.body) if section.body else "",
                is_first=not panels,
            )
        )
    return panels
