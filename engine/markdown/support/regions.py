"""
Ownership ranges of nested custom containers.

Fence processors that walk the whole document must not touch fences that
live inside a component container (tabs, code groups, callouts, details
and steps): the container renders its own body through a nested pipeline,
with its own fence numbering. The same holds on the HTML side, where the
code blocks of an already-rendered component must be skipped by the code
block postprocessor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .fences import iter_fences

CALLOUT_KINDS = ("note", "tip", "important", "warning", "danger")

NESTED_CONTAINER_KINDS = ("tabs", "code-group", "details", "steps", *CALLOUT_KINDS)

CONTAINER_OPEN_PATTERN = re.compile(r":::[ \t]*(?P<kind>[A-Za-z][\w-]*)[^\n]*")
CONTAINER_CLOSE_PATTERN = re.compile(r":::[ \t]*")

# Component roots whose code blocks were finished by a nested render
RENDERED_COMPONENT_CLASSES = ("folio-tabs", "folio-code-group", "folio-code-block")


@dataclass(frozen=True)
class Region:
    """Half-open ``[start, end)`` range owned by one container."""

    kind: str
    start: int
    end: int
    body_start: int = 0
    body_end: int = 0

    def __contains__(self, position: int) -> bool:
        return self.start <= position < self.end

    def body(self, text: str) -> str:
        return text[self.body_start:self.body_end]

    def header(self, text: str) -> str:
        """The opening ``:::kind ...`` line without its newline."""
        return text[self.start:self.body_start].rstrip("\n")


class RegionTracker:
    """Answers "is this offset owned by a nested container?"."""

    def __init__(self, regions: Iterable[Region] = ()):
        self.regions = tuple(regions)

    def __bool__(self):
        return bool(self.regions)

    def covers(self, position: int) -> bool:
        return any(position in region for region in self.regions)

    @classmethod
    def for_markdown(cls, text: str, kinds=NESTED_CONTAINER_KINDS) -> "RegionTracker":
        if ":::" not in text:
            return cls()
        return cls(find_containers(text, kinds))


def _fence_spans(text: str) -> list[tuple[int, int]]:
    return [(fence.start, fence.end) for fence in iter_fences(text)]


def find_containers(text: str, kinds: Optional[Iterable[str]] = None) -> list[Region]:
    """
    Return the top-level ``:::name`` ... ``:::`` containers in ``text``.

    Nested containers of any kind only affect depth. ``:::`` lines inside
    fenced code are ignored, and an unterminated container yields nothing.
    """
    wanted = set(kinds) if kinds is not None else None
    fence_spans = _fence_spans(text)
    regions = []
    stack: list[tuple[str, int, int]] = []

    pos = 0
    span_index = 0
    while pos < len(text):
        line_end = text.find("\n", pos)
        line_end = len(text) if line_end == -1 else line_end
        next_pos = line_end + 1

        while span_index < len(fence_spans) and fence_spans[span_index][1] <= pos:
            span_index += 1
        if span_index < len(fence_spans) and fence_spans[span_index][0] <= pos:
            pos = fence_spans[span_index][1]
            continue

        if CONTAINER_CLOSE_PATTERN.fullmatch(text, pos, line_end):
            if stack:
                kind, start, body_start = stack.pop()
                if not stack and (wanted is None or kind in wanted):
                    regions.append(
                        Region(
                            kind=kind,
                            start=start,
                            end=min(next_pos, len(text)),
                            body_start=body_start,
                            body_end=pos,
                        )
                    )
        else:
            opener = CONTAINER_OPEN_PATTERN.fullmatch(text, pos, line_end)
            if opener:
                stack.append((opener.group("kind"), pos, min(next_pos, len(text))))

        pos = next_pos

    return regions


def enclosing_component(element):
    """Return the rendered component ``<div>`` that holds ``element``, if any."""
    return element.find_parent("div", class_=list(RENDERED_COMPONENT_CLASSES))
