"""
Parser for the ordered list that explains numbered code annotations.

    ```py
    connect(host)  # (1)
    ```

    1. Uses the host from the settings.
       Continuation lines are indented.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

ORDERED_LIST_ITEM = re.compile(r"(\d+)\.\s+(.*)")
CONTINUATION_LINE = re.compile(r"\s{2,}(\S.*)")
BLANK_LINE = re.compile(r"\s*")
LIST_START = re.compile(r"(?:[ \t]*\n)*(\d+\.\s+)")


@dataclass
class AnnotationList:
    items: dict[int, str] = field(default_factory=dict)
    end: int = 0


class _ListState:
    def __init__(self):
        self.items: dict[int, str] = {}
        self.number: Optional[int] = None
        self.lines: list[str] = []

    def start_item(self, number: int, text: str):
        self.finish_item()
        self.number = number
        self.lines = [text.rstrip()]

    def finish_item(self):
        if self.number is None:
            return
        self.items[self.number] = "\n".join(self.lines).strip()
        self.number = None
        self.lines = []

    def consume(self, line: str) -> bool:
        """Take one line; return False once the list has ended."""
        content = line.rstrip("\n")
        item = ORDERED_LIST_ITEM.fullmatch(content)
        if item:
            self.start_item(int(item.group(1)), item.group(2))
            return True
        if self.number is not None:
            continuation = CONTINUATION_LINE.fullmatch(content)
            if continuation:
                self.lines.append(continuation.group(1).rstrip())
                return True
            if BLANK_LINE.fullmatch(content):
                self.lines.append("")
                return True
        self.finish_item()
        return False


def find_annotation_list(content: str, position: int) -> Optional[AnnotationList]:
    """
    Find an ordered list starting at ``position`` (right after a fence).

    Only blank lines may separate the fence from the list. Returns the
    markdown of each item and the offset where the list ends.
    """
    preamble = LIST_START.match(content, position)
    if not preamble:
        return None

    list_start = preamble.start(1)
    state = _ListState()
    consumed = 0
    for line in content[list_start:].splitlines(keepends=True):
        if not state.consume(line):
            break
        consumed += len(line)
    state.finish_item()

    if not state.items:
        return None
    return AnnotationList(items=state.items, end=list_start + consumed)
