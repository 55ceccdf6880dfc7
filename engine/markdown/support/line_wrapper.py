"""
Split highlighted code into one balanced HTML fragment per source line.

Highlighters emit a flat run of text and inline tags, and a single token
(a docstring, a block comment) can span several lines. Before each line can
be wrapped in its own ``<span>``, any tag left open at a newline is closed
on that line and reopened at the start of the next one:

    <span class="s">/* a          ->  <span class="s">/* a</span>
    b */</span>                        <span class="s">b */</span>
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from django.utils.html import format_html

from .markers import ADDITION, DELETION

LINE_CLASS = "folio-code-line"

DIFF_CLASSES = {
    ADDITION: f"{LINE_CLASS}--diff-add",
    DELETION: f"{LINE_CLASS}--diff-remove",
}

VOID_ELEMENTS = frozenset(
    ["area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"]
)

_TAG_NAME_PATTERN = re.compile(r"</?\s*([A-Za-z][\w:-]*)")


def _tag_name(token: str) -> str:
    match = _TAG_NAME_PATTERN.match(token)
    return match.group(1).lower() if match else ""


def _opens_element(token: str) -> bool:
    if token.startswith(("</", "<!", "<?")) or token.endswith("/>"):
        return False
    return _tag_name(token) not in VOID_ELEMENTS


class LineSplitter:
    """
    Two-state scanner (text / tag) producing balanced per-line fragments.

    Instances hold scanning state and are used for a single ``split`` call.
    """

    def __init__(self, html: str):
        self.html = html
        self.lines: list[str] = []
        self.current: list[str] = []
        self.open_tags: list[str] = []
        self.in_tag = False
        self.tag_buffer: list[str] = []
        self.has_text = False

    def split(self) -> list[str]:
        for char in self.html:
            if self.in_tag:
                self._consume_tag_char(char)
            elif char == "<":
                self.in_tag = True
                self.tag_buffer = [char]
            elif char == "\n":
                self._break_line()
            else:
                self.current.append(char)
                self.has_text = True
        return self._finalize()

    def _consume_tag_char(self, char: str):
        self.tag_buffer.append(char)
        if char != ">":
            return
        token = "".join(self.tag_buffer)
        self.in_tag = False
        self.tag_buffer = []
        if token.startswith("</"):
            self._close(_tag_name(token))
        elif _opens_element(token):
            self.open_tags.append(token)
        self.current.append(token)

    def _close(self, name: str):
        for index in range(len(self.open_tags) - 1, -1, -1):
            if _tag_name(self.open_tags[index]) == name:
                del self.open_tags[index]
                return

    def _closing_tags(self) -> str:
        return "".join(f"</{_tag_name(tag)}>" for tag in reversed(self.open_tags))

    def _break_line(self):
        self.lines.append("".join(self.current) + self._closing_tags())
        self.current = list(self.open_tags)
        self.has_text = False

    def _finalize(self) -> list[str]:
        if self.tag_buffer:
            # An unterminated "<" was never a tag; keep it as text.
            self.current.extend(self.tag_buffer)
            self.has_text = True
        tail = "".join(self.current) + self._closing_tags()
        if self.has_text or not self.lines:
            self.lines.append(tail)
        elif tail:
            # Only markup after the final newline: it belongs to the last line.
            self.lines[-1] += tail
        return self.lines


def split_lines(html: str) -> list[str]:
    """Split highlighted HTML into balanced fragments, one per source line."""
    return LineSplitter(html).split()


@dataclass
class LineFeatures:
    """Per-line styling inputs for one code block."""

    highlights: Iterable[int] = ()
    diff_lines: Mapping[int, str] = field(default_factory=dict)
    focus_lines: Iterable[int] = ()
    error_lines: Iterable[int] = ()
    warning_lines: Iterable[int] = ()
    annotation_markers: Mapping[int, int] = field(default_factory=dict)
    start_line: int = 1

    def __post_init__(self):
        self.highlights = frozenset(self.highlights)
        self.focus_lines = frozenset(self.focus_lines)
        self.error_lines = frozenset(self.error_lines)
        self.warning_lines = frozenset(self.warning_lines)

    @property
    def has_focus(self) -> bool:
        return bool(self.focus_lines)


def line_classes(source_line: int, features: LineFeatures) -> list[str]:
    """CSS classes for one line, always in the same order."""
    display_line = features.start_line + source_line - 1
    classes = [LINE_CLASS]
    if display_line in features.highlights:
        classes.append(f"{LINE_CLASS}--highlighted")
    diff_class = DIFF_CLASSES.get(features.diff_lines.get(source_line))
    if diff_class:
        classes.append(diff_class)
    if source_line in features.focus_lines:
        classes.append(f"{LINE_CLASS}--focus")
    if source_line in features.error_lines:
        classes.append(f"{LINE_CLASS}--error")
    if source_line in features.warning_lines:
        classes.append(f"{LINE_CLASS}--warning")
    return classes


def annotation_button(number: int) -> str:
    return format_html(
        '<button type="button" class="folio-code-annotation" data-annotation="{}" '
        'aria-label="Show annotation {}">{}</button>',
        number,
        number,
        number,
    )


def wrap_lines(html: str, features: Optional[LineFeatures] = None) -> str:
    """Split highlighted HTML per line and wrap each in a classed ``<span>``."""
    features = features or LineFeatures()
    wrapped = []
    for source_line, fragment in enumerate(split_lines(html), start=1):
        annotation = features.annotation_markers.get(source_line)
        if annotation is not None:
            fragment += annotation_button(annotation)
        classes = " ".join(line_classes(source_line, features))
        wrapped.append(f'<span class="{classes}">{fragment}</span>')
    return "\n".join(wrapped)
